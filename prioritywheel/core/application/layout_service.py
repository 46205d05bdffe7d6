"""
Service for the wheel layout.

- Proportional angle allocation over the priority tree
- Fixed radial bands per tree level
- Slice index construction (angles + bands + colors + paths)
- Hit testing and label positioning
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from prioritywheel.core.analysis.tree_identity import NodeIdentity
from prioritywheel.core.application.color_service import ColorService, HslaColor
from prioritywheel.core.application.path_service import PathService, Point
from prioritywheel.core.domain.models import (
    Category,
    Group,
    Item,
    MalformedTreeError,
    PriorityTree,
)
from prioritywheel.core.view_models import Slice, SliceLevel, WheelViewModel

logger = logging.getLogger(__name__)

FULL_CIRCLE = 360.0
DEFAULT_CANVAS_SIZE = 500.0
MIN_ANGLE_FOR_TEXT = 15.0

NO_GROUPS_TEXT = "No groups"
NO_ITEMS_TEXT = "No items"

TreeInput = Union[PriorityTree, Sequence[Category]]
SliceList = List[Slice]


@dataclass(frozen=True)
class RingBands:
    """Radii of the three rings: category [0, R1), group [R2, R3), item [R4, R5)."""

    category_outer: float = 80.0
    group_inner: float = 90.0
    group_outer: float = 140.0
    item_inner: float = 150.0
    item_outer: float = 200.0

    def __post_init__(self):
        radii = self.as_tuple()
        if radii[0] <= 0 or any(a >= b for a, b in zip(radii, radii[1:])):
            raise ValueError(
                "Ring radii must be positive and strictly increasing, got "
                + ", ".join(f"{r:g}" for r in radii)
            )

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (
            self.category_outer,
            self.group_inner,
            self.group_outer,
            self.item_inner,
            self.item_outer,
        )

    def bounds_for(self, level: SliceLevel) -> Tuple[float, float]:
        """Returns inner and outer radius for the level."""
        if level == SliceLevel.CATEGORY:
            return 0.0, self.category_outer
        if level == SliceLevel.GROUP:
            return self.group_inner, self.group_outer
        return self.item_inner, self.item_outer

    def scaled(self, factor: float) -> "RingBands":
        """Returns bands scaled for another viewport size."""
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {factor}")
        return RingBands(*(radius * factor for radius in self.as_tuple()))

    @property
    def total_radius(self) -> float:
        return self.item_outer


class LayoutService:
    """Service for computing the wheel layout."""

    def __init__(
        self,
        color_service: Optional[ColorService] = None,
        path_service: Optional[PathService] = None,
        bands: Optional[RingBands] = None,
        reference_size: float = DEFAULT_CANVAS_SIZE,
        label_min_angle: float = MIN_ANGLE_FOR_TEXT,
    ):
        self._color_service = color_service or ColorService()
        self._path_service = path_service or PathService()
        self.bands = bands or RingBands()
        self.reference_size = reference_size
        self.label_min_angle = label_min_angle

    @staticmethod
    def group_weight(group: Group) -> int:
        """Unit count of a group; an empty group keeps one phantom unit."""
        return max(1, len(group.items))

    @staticmethod
    def category_weight(category: Category) -> int:
        """Unit count of a category; an empty category keeps one phantom unit."""
        if not category.groups:
            return 1
        return sum(LayoutService.group_weight(group) for group in category.groups)

    def total_units(self, tree: TreeInput) -> int:
        return sum(self.category_weight(c) for c in self._categories_of(tree))

    def validate_tree(self, tree: TreeInput) -> List[str]:
        """
        Validates tree shape.

        Args:
            tree: Priority tree snapshot

        Returns:
            List[str]: Issues (empty if the tree can be laid out)

        Raises:
            MalformedTreeError: If a node has no identifier
        """
        issues = []
        seen_objects = set()

        def check_node(kind: str, node, sibling_ids: set, path: str) -> bool:
            if not isinstance(node.id, str) or not node.id.strip():
                raise MalformedTreeError(f"{kind} at {path} has no identifier")
            if id(node) in seen_objects:
                issues.append(f"{kind} '{node.id}' is referenced more than once")
                return False
            seen_objects.add(id(node))
            if node.id in sibling_ids:
                issues.append(f"Duplicate {kind.lower()} identifier '{node.id}' in {path}")
            sibling_ids.add(node.id)
            return True

        category_ids = set()
        for category in self._categories_of(tree):
            if not check_node("Category", category, category_ids, "tree"):
                continue

            group_ids = set()
            for group in category.groups:
                if not check_node("Group", group, group_ids, f"category '{category.id}'"):
                    continue

                item_ids = set()
                for item in group.items:
                    check_node(
                        "Item", item, item_ids, f"group '{category.id}/{group.id}'"
                    )

        return issues

    def allocate_angles(self, tree: TreeInput) -> Tuple[Dict[str, Tuple[float, float]], int]:
        """
        Assigns every node (placeholders included) its degree range.

        Returns:
            Tuple of {slice key: (start_angle, end_angle)} and the total unit count
        """
        categories = self._categories_of(tree)
        slices = self._build_slices(categories, self.bands, (0.0, 0.0))
        ranges = {slice_.key: (slice_.start_angle, slice_.end_angle) for slice_ in slices}
        return ranges, self.total_units(categories)

    def calculate_layout(
        self, tree: TreeInput, canvas_size: Tuple[float, float] = (DEFAULT_CANVAS_SIZE, DEFAULT_CANVAS_SIZE)
    ) -> WheelViewModel:
        """
        Calculates the complete slice index for a canvas.

        Args:
            tree: Priority tree snapshot
            canvas_size: Canvas size (width, height)

        Returns:
            WheelViewModel: Slices in tree order; empty for an empty or invalid tree
        """
        width, height = canvas_size
        empty = WheelViewModel(
            canvas_width=width,
            canvas_height=height,
            center_x=width / 2,
            center_y=height / 2,
        )

        if width <= 0 or height <= 0:
            logger.warning(f"Cannot lay out wheel on a {width}x{height} canvas")
            return empty

        categories = self._categories_of(tree)

        issues = self.validate_tree(categories)
        if issues:
            logger.warning(f"Rejected tree with {len(issues)} issue(s): {'; '.join(issues)}")
            return empty

        if not categories:
            return empty

        bands = self.bands.scaled(min(width, height) / self.reference_size)
        center = (width / 2, height / 2)
        slices = self._build_slices(categories, bands, center)
        total_units = self.total_units(categories)

        logger.debug(
            f"Layout computed: {len(slices)} slices, {total_units} units, "
            f"canvas {width}x{height}"
        )

        return WheelViewModel(
            slices=slices,
            total_units=total_units,
            canvas_width=width,
            canvas_height=height,
            center_x=center[0],
            center_y=center[1],
            geometry=bands,
        )

    def _categories_of(self, tree: TreeInput) -> List[Category]:
        if isinstance(tree, PriorityTree):
            return tree.categories
        return list(tree)

    def _build_slices(
        self, categories: List[Category], bands: RingBands, center: Point
    ) -> SliceList:
        total = sum(self.category_weight(category) for category in categories)
        slices = []
        offset = 0

        for index, category in enumerate(categories):
            category_slices, consumed = self._allocate_category(
                category, index, offset, total, bands, center
            )
            slices.extend(category_slices)
            offset += consumed

        return slices

    def _allocate_category(
        self,
        category: Category,
        index: int,
        offset: int,
        total: int,
        bands: RingBands,
        center: Point,
    ) -> Tuple[SliceList, int]:
        key = NodeIdentity.generate_category_id(category.id)
        color = self._color_service.category_color(category, index)
        weight = self.category_weight(category)

        slices = [
            self._make_slice(
                key=key,
                level=SliceLevel.CATEGORY,
                units=(offset, weight, total),
                bands=bands,
                center=center,
                color=color,
                text=category.title,
                category=category,
                is_high_priority=category.high_priority,
            )
        ]

        if not category.groups:
            slices.append(
                self._make_slice(
                    key=NodeIdentity.generate_placeholder_id(key),
                    level=SliceLevel.GROUP,
                    units=(offset, weight, total),
                    bands=bands,
                    center=center,
                    color=self._color_service.group_color(color),
                    text=NO_GROUPS_TEXT,
                    category=category,
                    parent_key=key,
                    is_placeholder=True,
                )
            )
            return slices, weight

        consumed = 0
        for group in category.groups:
            group_slices, group_consumed = self._allocate_group(
                group, category, key, color, offset + consumed, total, bands, center
            )
            slices.extend(group_slices)
            consumed += group_consumed

        return slices, consumed

    def _allocate_group(
        self,
        group: Group,
        category: Category,
        category_key: str,
        category_color: HslaColor,
        offset: int,
        total: int,
        bands: RingBands,
        center: Point,
    ) -> Tuple[SliceList, int]:
        key = NodeIdentity.generate_group_id(category.id, group.id)
        color = self._color_service.group_color(category_color)
        item_color = self._color_service.item_color(color)
        weight = self.group_weight(group)

        slices = [
            self._make_slice(
                key=key,
                level=SliceLevel.GROUP,
                units=(offset, weight, total),
                bands=bands,
                center=center,
                color=color,
                text=group.title,
                category=category,
                group=group,
                parent_key=category_key,
                is_high_priority=group.high_priority,
            )
        ]

        if not group.items:
            slices.append(
                self._make_slice(
                    key=NodeIdentity.generate_placeholder_id(key),
                    level=SliceLevel.ITEM,
                    units=(offset, weight, total),
                    bands=bands,
                    center=center,
                    color=item_color,
                    text=NO_ITEMS_TEXT,
                    category=category,
                    group=group,
                    parent_key=key,
                    is_placeholder=True,
                )
            )
            return slices, weight

        for position, item in enumerate(group.items):
            slices.append(
                self._allocate_item(
                    item, group, category, key, item_color,
                    offset + position, total, bands, center,
                )
            )

        return slices, weight

    def _allocate_item(
        self,
        item: Item,
        group: Group,
        category: Category,
        group_key: str,
        color: HslaColor,
        offset: int,
        total: int,
        bands: RingBands,
        center: Point,
    ) -> Slice:
        return self._make_slice(
            key=NodeIdentity.generate_item_id(category.id, group.id, item.id),
            level=SliceLevel.ITEM,
            units=(offset, 1, total),
            bands=bands,
            center=center,
            color=color,
            text=item.title,
            category=category,
            group=group,
            item=item,
            parent_key=group_key,
            is_high_priority=item.high_priority,
        )

    def _make_slice(
        self,
        key: str,
        level: SliceLevel,
        units: Tuple[int, int, int],
        bands: RingBands,
        center: Point,
        **attributes: Any,
    ) -> Slice:
        offset, weight, total = units
        # Both ends come from integer unit offsets so neighbours share exact boundaries.
        start_angle = FULL_CIRCLE * offset / total
        end_angle = FULL_CIRCLE * (offset + weight) / total
        inner_radius, outer_radius = bands.bounds_for(level)

        path = self._path_service.build_path(
            start_angle, end_angle, inner_radius, outer_radius, center
        )

        return Slice(
            key=key,
            level=level,
            start_angle=start_angle,
            end_angle=end_angle,
            inner_radius=inner_radius,
            outer_radius=outer_radius,
            path=path,
            **attributes,
        )

    def find_slice_at_position(
        self, x: float, y: float, view_model: WheelViewModel
    ) -> Optional[Slice]:
        """
        Finds slice at specified canvas position.

        Args:
            x: X coordinate
            y: Y coordinate
            view_model: ViewModel with slices

        Returns:
            Optional[Slice]: Found slice, or None for gaps and the outside
        """
        dx = x - view_model.center_x
        dy = y - view_model.center_y
        radius = math.hypot(dx, dy)

        angle = math.degrees(math.atan2(dy, dx)) % FULL_CIRCLE
        if angle >= FULL_CIRCLE:
            angle = 0.0

        for slice_ in view_model.slices:
            if slice_.contains_radius(radius) and slice_.contains_angle(angle):
                return slice_

        return None

    def calculate_text_position(
        self, slice_: Slice, center: Point = (0.0, 0.0)
    ) -> Tuple[float, float, float]:
        """
        Calculates label position for slice.

        Returns:
            Tuple of x, y and text rotation in degrees (flipped on the left half
            so labels are never upside down)
        """
        mid_radius = (slice_.inner_radius + slice_.outer_radius) / 2
        mid_angle = slice_.mid_angle
        mid_angle_rad = math.radians(mid_angle)

        x = center[0] + mid_radius * math.cos(mid_angle_rad)
        y = center[1] + mid_radius * math.sin(mid_angle_rad)

        rotation = mid_angle + 180 if 90 < mid_angle < 270 else mid_angle

        return x, y, rotation % FULL_CIRCLE

    def should_show_label(self, slice_: Slice) -> bool:
        """Labels are shown only on slices wide enough to hold text."""
        return slice_.span > self.label_min_angle

    def get_layout_statistics(self, view_model: WheelViewModel) -> Dict[str, Any]:
        """Returns layout statistics."""
        placeholders = view_model.placeholder_slices()
        real_slices = [s for s in view_model.slices if not s.is_placeholder]

        return {
            "total_slices": len(view_model.slices),
            "category_slices": sum(1 for s in real_slices if s.level == SliceLevel.CATEGORY),
            "group_slices": sum(1 for s in real_slices if s.level == SliceLevel.GROUP),
            "item_slices": sum(1 for s in real_slices if s.level == SliceLevel.ITEM),
            "placeholder_slices": len(placeholders),
            "high_priority_slices": sum(1 for s in real_slices if s.is_high_priority),
            "total_units": view_model.total_units,
            "degrees_per_unit": (
                FULL_CIRCLE / view_model.total_units if view_model.total_units else 0.0
            ),
        }
