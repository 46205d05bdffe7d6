"""
Service for building vector paths of wheel slices.

Converts (start_angle, end_angle, inner_radius, outer_radius) into a closed
annular sector path (SVG path semantics).
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Point = Tuple[float, float]

FULL_CIRCLE = 360.0
ANGLE_EPSILON = 1e-9


@dataclass(frozen=True)
class PathCommand:
    """One path command: M (move), L (line), A (arc) or Z (close)."""

    op: str
    point: Optional[Point] = None
    radius: float = 0.0
    large_arc: int = 0
    sweep: int = 0

    def to_svg(self) -> str:
        if self.op == "Z":
            return "Z"

        x, y = (_format_coordinate(value) for value in self.point)
        if self.op == "A":
            r = _format_coordinate(self.radius)
            return f"A {r} {r} 0 {self.large_arc} {self.sweep} {x} {y}"

        return f"{self.op} {x} {y}"


@dataclass
class SlicePath:
    """Closed annular sector path."""

    commands: List[PathCommand] = field(default_factory=list)
    inner_start: Point = (0.0, 0.0)
    outer_start: Point = (0.0, 0.0)
    outer_end: Point = (0.0, 0.0)
    inner_end: Point = (0.0, 0.0)
    large_arc: int = 0

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corner points: inner-start, outer-start, outer-end, inner-end."""
        return (self.inner_start, self.outer_start, self.outer_end, self.inner_end)

    @property
    def arcs(self) -> List[PathCommand]:
        return [command for command in self.commands if command.op == "A"]

    def to_svg(self) -> str:
        """Returns SVG path data string."""
        return " ".join(command.to_svg() for command in self.commands)


def _format_coordinate(value: float) -> str:
    rounded = round(value, 4)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:g}"


def polar_to_cartesian(
    center: Point, radius: float, angle_deg: float
) -> Point:
    """Converts polar coordinates (degrees) to cartesian ones."""
    angle_rad = math.radians(angle_deg)
    return (
        center[0] + radius * math.cos(angle_rad),
        center[1] + radius * math.sin(angle_rad),
    )


class PathService:
    """Service for building slice paths."""

    def build_path(
        self,
        start_angle: float,
        end_angle: float,
        inner_radius: float,
        outer_radius: float,
        center: Point = (0.0, 0.0),
    ) -> Optional[SlicePath]:
        """
        Builds annular sector path.

        The outer arc sweeps in the positive-angle direction, the inner arc
        sweeps back in the negative direction so the outline never crosses itself.

        Args:
            start_angle: Start angle in degrees
            end_angle: End angle in degrees
            inner_radius: Inner radius
            outer_radius: Outer radius
            center: Center point of the wheel

        Returns:
            Optional[SlicePath]: Path, or None for a zero-width slice
        """
        span = end_angle - start_angle
        if abs(span) <= ANGLE_EPSILON:
            return None

        large_arc = 1 if span > 180 else 0

        inner_start = polar_to_cartesian(center, inner_radius, start_angle)
        outer_start = polar_to_cartesian(center, outer_radius, start_angle)
        outer_end = polar_to_cartesian(center, outer_radius, end_angle)
        inner_end = polar_to_cartesian(center, inner_radius, end_angle)

        commands = [
            PathCommand("M", inner_start),
            PathCommand("L", outer_start),
        ]

        if span >= FULL_CIRCLE - ANGLE_EPSILON:
            # Endpoints of a full-circle arc coincide; split each arc in two halves.
            mid_angle = start_angle + span / 2
            outer_mid = polar_to_cartesian(center, outer_radius, mid_angle)
            inner_mid = polar_to_cartesian(center, inner_radius, mid_angle)
            commands += [
                PathCommand("A", outer_mid, outer_radius, 0, 1),
                PathCommand("A", outer_end, outer_radius, 0, 1),
                PathCommand("L", inner_end),
                PathCommand("A", inner_mid, inner_radius, 0, 0),
                PathCommand("A", inner_start, inner_radius, 0, 0),
            ]
        else:
            commands += [
                PathCommand("A", outer_end, outer_radius, large_arc, 1),
                PathCommand("L", inner_end),
                PathCommand("A", inner_start, inner_radius, large_arc, 0),
            ]

        commands.append(PathCommand("Z"))

        return SlicePath(
            commands=commands,
            inner_start=inner_start,
            outer_start=outer_start,
            outer_end=outer_end,
            inner_end=inner_end,
            large_arc=large_arc,
        )
