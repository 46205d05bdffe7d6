"""
Service for describing the selected slice.

Builds the text shown in the details panel and tooltips: titles, parents,
child counts and due-date status of items.
"""

from datetime import date
from typing import Callable, List, Optional

from prioritywheel.core.view_models import Slice, SliceLevel


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def days_until_due(due_date: date, today: date) -> int:
    return (due_date - today).days


def due_status(due_date: date, today: date) -> str:
    """Returns human readable due status: Overdue, Today, Tomorrow or 'N days'."""
    days = days_until_due(due_date, today)
    if days < 0:
        return "Overdue"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"{days} days"


class DetailsService:
    """Service for slice details."""

    def __init__(self, clock: Optional[Callable[[], date]] = None):
        self._clock = clock or date.today

    def describe(self, slice_: Optional[Slice]) -> List[str]:
        """
        Returns detail lines for a slice.

        Args:
            slice_: Selected slice or None

        Returns:
            List[str]: Lines, first one is the title
        """
        if slice_ is None:
            return ["Hover over the wheel to see details"]

        today = self._clock()
        lines = [slice_.text, slice_.level.value.capitalize()]

        if slice_.is_placeholder:
            owner = slice_.group.title if slice_.group else slice_.category.title
            lines.append(f"Empty: {owner}")
            return lines

        if slice_.is_high_priority:
            lines.append("High priority")

        if slice_.level == SliceLevel.CATEGORY:
            category = slice_.category
            lines.append(_plural(category.group_count, "group"))
            lines.append(f"{_plural(category.item_count, 'item')} in total")

        elif slice_.level == SliceLevel.GROUP:
            group = slice_.group
            lines.append(f"Parent: {slice_.category.title}")
            lines.append(_plural(group.item_count, "item"))
            for item in group.items:
                status = f" ({due_status(item.due_date, today)})" if item.due_date else ""
                lines.append(f"  - {item.title}{status}")

        else:
            item = slice_.item
            lines.append(f"Category: {slice_.category.title}")
            lines.append(f"Group: {slice_.group.title}")
            if item.due_date:
                lines.append(
                    f"Due: {item.due_date.strftime('%b %d, %Y')} "
                    f"({due_status(item.due_date, today)})"
                )

        return lines

    def get_slice_tooltip(self, slice_: Optional[Slice]) -> str:
        """Creates tooltip text for slice."""
        return "\n".join(self.describe(slice_))
