"""
JSON parser for converting priority tree snapshots to domain models.

Accepts the export shape of the priorities app
({"sections": [{"subsections": [{"tasks": [...]}]}]}) as well as the
category/group/item naming.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from prioritywheel.core.domain.models import Category, Group, Item, PriorityTree

logger = logging.getLogger(__name__)

CATEGORY_KEYS = ("sections", "categories")
GROUP_KEYS = ("subsections", "groups")
ITEM_KEYS = ("tasks", "items")
DUE_DATE_KEYS = ("dueDate", "due_date")


def _first_present(data: Dict[str, Any], keys, default=None):
    for key in keys:
        if key in data:
            return data[key]
    return default


def _identifier(data: Dict[str, Any]) -> str:
    value = data.get("id")
    return "" if value is None else str(value)


def parse_due_date(value: Any) -> Optional[date]:
    """Parses ISO date (or the date part of an ISO timestamp)."""
    if not value:
        return None

    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning(f"Ignoring invalid due date: {value!r}")
        return None


def parse_item_from_dict(item_data: Dict[str, Any]) -> Item:
    """Creates Item object from dictionary."""
    return Item(
        id=_identifier(item_data),
        title=str(item_data.get("title", "")),
        due_date=parse_due_date(_first_present(item_data, DUE_DATE_KEYS)),
        high_priority=bool(item_data.get("high_priority", False)),
    )


def parse_group_from_dict(group_data: Dict[str, Any]) -> Group:
    """Creates Group object from dictionary."""
    return Group(
        id=_identifier(group_data),
        title=str(group_data.get("title", "")),
        items=[
            parse_item_from_dict(item_data)
            for item_data in _first_present(group_data, ITEM_KEYS, [])
        ],
        high_priority=bool(group_data.get("high_priority", False)),
    )


def parse_category_from_dict(category_data: Dict[str, Any]) -> Category:
    """Creates Category object from dictionary."""
    color = category_data.get("color")
    return Category(
        id=_identifier(category_data),
        title=str(category_data.get("title", "")),
        groups=[
            parse_group_from_dict(group_data)
            for group_data in _first_present(category_data, GROUP_KEYS, [])
        ],
        color=str(color) if color else None,
        high_priority=bool(category_data.get("high_priority", False)),
    )


def parse_tree_from_dict(data: Dict[str, Any]) -> PriorityTree:
    """
    Creates PriorityTree from snapshot dictionary.

    Args:
        data: Snapshot dictionary

    Returns:
        PriorityTree: Parsed tree

    Raises:
        MalformedTreeError: If a node has no identifier
    """
    return PriorityTree(
        categories=[
            parse_category_from_dict(category_data)
            for category_data in _first_present(data, CATEGORY_KEYS, [])
        ]
    )


def validate_tree_data(data: Any) -> List[str]:
    """
    Validates snapshot structure before parsing.

    Args:
        data: Decoded JSON

    Returns:
        List[str]: Validation issues (empty if valid)
    """
    issues = []

    if not isinstance(data, dict):
        return ["Root element must be an object"]

    categories = _first_present(data, CATEGORY_KEYS)
    if categories is None:
        return [f"Missing '{CATEGORY_KEYS[0]}' list"]
    if not isinstance(categories, list):
        return [f"'{CATEGORY_KEYS[0]}' must be a list"]

    def check_nodes(nodes, kind: str, path: str, child_keys=None, grandchild_keys=None):
        for index, node in enumerate(nodes):
            node_path = f"{path}[{index}]"
            if not isinstance(node, dict):
                issues.append(f"{kind} {node_path} must be an object")
                continue
            if node.get("id") in (None, ""):
                issues.append(f"{kind} {node_path} has no id")
            if child_keys is None:
                continue
            children = _first_present(node, child_keys, [])
            if not isinstance(children, list):
                issues.append(f"{kind} {node_path} children must be a list")
                continue
            if grandchild_keys is None:
                check_nodes(children, "Item", f"{node_path}.{child_keys[0]}")
            else:
                check_nodes(
                    children, "Group", f"{node_path}.{child_keys[0]}", grandchild_keys
                )

    check_nodes(categories, "Category", CATEGORY_KEYS[0], GROUP_KEYS, ITEM_KEYS)

    return issues


def get_parsing_statistics(data: Dict[str, Any]) -> Dict[str, int]:
    """Returns raw node counts of a snapshot dictionary."""
    categories = _first_present(data, CATEGORY_KEYS, []) or []
    groups = [
        group
        for category in categories
        if isinstance(category, dict)
        for group in _first_present(category, GROUP_KEYS, []) or []
    ]
    items = [
        item
        for group in groups
        if isinstance(group, dict)
        for item in _first_present(group, ITEM_KEYS, []) or []
    ]

    return {
        "categories": len(categories),
        "groups": len(groups),
        "items": len(items),
    }
