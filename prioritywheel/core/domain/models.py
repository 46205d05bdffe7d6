"""
Domain models for Priority Wheel.

These models represent the priority tree (category -> group -> item).
They do not depend on PyQt or other frameworks and contain only data
and simple validation logic.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


class MalformedTreeError(ValueError):
    """Raised when a tree node is structurally malformed (e.g. has no identifier)."""

    pass


def _require_identifier(kind: str, node_id) -> None:
    if not isinstance(node_id, str) or not node_id.strip():
        raise MalformedTreeError(f"{kind} identifier cannot be empty")


@dataclass
class Item:
    """Leaf entry of the tree (a task)."""

    id: str
    title: str
    due_date: Optional[date] = None
    high_priority: bool = False

    def __post_init__(self):
        _require_identifier("Item", self.id)


@dataclass
class Group:
    """Middle level of the tree (a subsection)."""

    id: str
    title: str
    items: List[Item] = field(default_factory=list)
    high_priority: bool = False

    def __post_init__(self):
        _require_identifier("Group", self.id)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass
class Category:
    """Top level of the tree (a section)."""

    id: str
    title: str
    groups: List[Group] = field(default_factory=list)
    color: Optional[str] = None
    high_priority: bool = False

    def __post_init__(self):
        _require_identifier("Category", self.id)

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def item_count(self) -> int:
        """Returns total count of items in all groups."""
        return sum(group.item_count for group in self.groups)

    @property
    def is_empty(self) -> bool:
        return not self.groups


@dataclass
class PriorityTree:
    """Snapshot of the whole priority tree."""

    categories: List[Category] = field(default_factory=list)

    @property
    def category_count(self) -> int:
        return len(self.categories)

    @property
    def group_count(self) -> int:
        return sum(category.group_count for category in self.categories)

    @property
    def item_count(self) -> int:
        return sum(category.item_count for category in self.categories)

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def get_category(self, category_id: str) -> Optional[Category]:
        """Returns category by identifier."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_items_with_due_date(self) -> List[Item]:
        """Returns all items that carry a due date, in tree order."""
        return [
            item
            for category in self.categories
            for group in category.groups
            for item in group.items
            if item.due_date is not None
        ]
