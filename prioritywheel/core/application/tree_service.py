"""
Service for working with priority tree snapshots.

Responsible for loading, parsing and validating tree data.
Does not depend on PyQt or other UI frameworks.
"""

import json
import os
from typing import Any, Dict, Optional

from prioritywheel.core.domain.models import PriorityTree
from prioritywheel.core.parsing.json_parser import (
    get_parsing_statistics,
    parse_tree_from_dict,
    validate_tree_data,
)


class TreeLoadError(Exception):
    """Exception when tree loading error occurs."""

    pass


class TreeService:
    """Service for working with priority trees."""

    def __init__(self):
        self._current_tree: Optional[PriorityTree] = None
        self._tree_file_path: Optional[str] = None

    def load_tree_from_file(self, file_path: str) -> PriorityTree:
        """
        Loads tree from JSON file.

        Args:
            file_path: Path to JSON file

        Returns:
            PriorityTree: Loaded and parsed tree

        Raises:
            TreeLoadError: On loading or parsing error
        """
        if not os.path.exists(file_path):
            raise TreeLoadError(f"File not found: {file_path}")

        if os.path.getsize(file_path) == 0:
            raise TreeLoadError(f"File is empty: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TreeLoadError(f"JSON parsing error: {e}")
        except (IOError, OSError) as e:
            raise TreeLoadError(f"File reading error: {e}")

        tree = self.load_tree_from_dict(raw_data)
        self._tree_file_path = file_path
        return tree

    def load_tree_from_dict(self, raw_data: Any) -> PriorityTree:
        """Validates and parses an already decoded snapshot."""
        validation_issues = validate_tree_data(raw_data)
        if validation_issues:
            issues_str = "; ".join(validation_issues)
            raise TreeLoadError(f"Invalid tree data: {issues_str}")

        try:
            tree = parse_tree_from_dict(raw_data)
        except (ValueError, KeyError, TypeError) as e:
            raise TreeLoadError(f"Tree parsing error: {e}")

        self._current_tree = tree
        return tree

    def validate_file_before_load(self, file_path: str) -> Dict[str, Any]:
        """
        Validates file without building the tree.

        Returns:
            Dict[str, Any]: Validation result
        """
        result = {
            "file_exists": os.path.exists(file_path),
            "file_size": 0,
            "is_json": False,
            "is_valid": False,
            "issues": [],
            "parsing_stats": {},
        }

        if not result["file_exists"]:
            result["issues"].append("File does not exist")
            return result

        result["file_size"] = os.path.getsize(file_path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
            result["is_json"] = True
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            result["issues"].append(f"Invalid JSON: {e}")
            return result

        result["issues"].extend(validate_tree_data(raw_data))
        if isinstance(raw_data, dict):
            result["parsing_stats"] = get_parsing_statistics(raw_data)
        result["is_valid"] = not result["issues"]

        return result

    def get_current_tree(self) -> Optional[PriorityTree]:
        """Returns currently loaded tree."""
        return self._current_tree

    def get_current_file_path(self) -> Optional[str]:
        return self._tree_file_path

    def get_tree_statistics(self, tree: Optional[PriorityTree] = None) -> Dict[str, Any]:
        """
        Returns tree statistics.

        Args:
            tree: Tree to analyze. If None, current tree is used.
        """
        target_tree = tree or self._current_tree
        if not target_tree:
            return {}

        empty_groups = sum(
            1
            for category in target_tree.categories
            for group in category.groups
            if group.is_empty
        )

        return {
            "categories": target_tree.category_count,
            "groups": target_tree.group_count,
            "items": target_tree.item_count,
            "empty_categories": sum(1 for c in target_tree.categories if c.is_empty),
            "empty_groups": empty_groups,
            "items_with_due_date": len(target_tree.get_items_with_due_date()),
        }
