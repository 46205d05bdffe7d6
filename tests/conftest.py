"""
Shared fixtures for Priority Wheel tests.

Trees are small and hand-built so angle expectations can be computed by hand.
"""

import json
from datetime import date

import pytest

from prioritywheel.core.application.color_service import ColorService
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.application.path_service import PathService
from prioritywheel.core.domain.models import Category, Group, Item, PriorityTree


@pytest.fixture
def layout_service():
    return LayoutService(color_service=ColorService(), path_service=PathService())


@pytest.fixture
def sample_tree():
    """
    Two categories, five units in total:
    - work: reports (2 items), meetings (no items) -> 3 units
    - home: chores (1 item), garden (1 item)       -> 2 units
    """
    return PriorityTree(
        categories=[
            Category(
                id="work",
                title="Work",
                high_priority=True,
                groups=[
                    Group(
                        id="reports",
                        title="Reports",
                        items=[
                            Item(id="q3", title="Q3 report", due_date=date(2024, 10, 1)),
                            Item(id="q4", title="Q4 report", high_priority=True),
                        ],
                    ),
                    Group(id="meetings", title="Meetings"),
                ],
            ),
            Category(
                id="home",
                title="Home",
                groups=[
                    Group(id="chores", title="Chores", items=[Item(id="dishes", title="Dishes")]),
                    Group(id="garden", title="Garden", items=[Item(id="mow", title="Mow lawn")]),
                ],
            ),
        ]
    )


@pytest.fixture
def sample_snapshot():
    """Snapshot dictionary in the export shape of the priorities app."""
    return {
        "sections": [
            {
                "id": "work",
                "title": "Work",
                "color": "hsl(10, 50%, 40%)",
                "high_priority": True,
                "subsections": [
                    {
                        "id": "reports",
                        "title": "Reports",
                        "tasks": [
                            {"id": "q3", "title": "Q3 report", "dueDate": "2024-10-01T09:00:00Z"},
                            {"id": "q4", "title": "Q4 report", "high_priority": True},
                        ],
                    },
                    {"id": "meetings", "title": "Meetings", "tasks": []},
                ],
            },
            {"id": "home", "title": "Home", "subsections": []},
        ]
    }


@pytest.fixture
def tree_file(tmp_path, sample_snapshot):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(sample_snapshot), encoding="utf-8")
    return path
