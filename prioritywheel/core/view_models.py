"""
ViewModels for the priority wheel.

These classes contain only data for display in UI,
without any business logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Set, Union

from prioritywheel.core.application.color_service import HslaColor
from prioritywheel.core.application.path_service import SlicePath
from prioritywheel.core.domain.models import Category, Group, Item


class SliceLevel(str, Enum):
    """Ring of the wheel a slice belongs to."""

    CATEGORY = "category"
    GROUP = "group"
    ITEM = "item"


@dataclass
class Slice:
    """Annular sector of the wheel."""

    key: str
    level: SliceLevel
    category: Category
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    color: HslaColor
    text: str
    group: Optional[Group] = None
    item: Optional[Item] = None
    parent_key: Optional[str] = None
    is_placeholder: bool = False
    is_high_priority: bool = False
    path: Optional[SlicePath] = None

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2

    @property
    def node(self) -> Union[Category, Group, Item, None]:
        """Returns the tree node the slice represents (None for placeholders)."""
        if self.is_placeholder:
            return None
        if self.level == SliceLevel.ITEM:
            return self.item
        if self.level == SliceLevel.GROUP:
            return self.group
        return self.category

    def contains_angle(self, angle: float) -> bool:
        return self.start_angle <= angle < self.end_angle

    def contains_radius(self, radius: float) -> bool:
        return self.inner_radius <= radius < self.outer_radius


@dataclass
class WheelViewModel:
    """ViewModel for the wheel: the ordered slice index plus canvas geometry."""

    slices: List[Slice] = field(default_factory=list)
    total_units: int = 0
    canvas_width: float = 500.0
    canvas_height: float = 500.0
    center_x: float = 250.0
    center_y: float = 250.0
    geometry: Optional[Any] = None

    def get_slice_by_key(self, key: Optional[str]) -> Optional[Slice]:
        """Returns slice by its key."""
        if key is None:
            return None
        for slice_ in self.slices:
            if slice_.key == key:
                return slice_
        return None

    def slice_keys(self) -> Set[str]:
        return {slice_.key for slice_ in self.slices}

    def slices_by_level(self, level: SliceLevel) -> List[Slice]:
        return [slice_ for slice_ in self.slices if slice_.level == level]

    def placeholder_slices(self) -> List[Slice]:
        return [slice_ for slice_ in self.slices if slice_.is_placeholder]

    def drawable_slices(self) -> List[Slice]:
        """Returns slices that have a drawable path."""
        return [slice_ for slice_ in self.slices if slice_.path is not None]

    def get_slices_count(self) -> int:
        return len(self.slices)

    def is_empty(self) -> bool:
        return len(self.slices) == 0
