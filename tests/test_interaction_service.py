"""Tests for hover/pin interaction state."""

import math

import pytest

from prioritywheel.core.application.interaction_service import (
    InteractionController,
    InteractionMode,
    InteractionState,
)
from prioritywheel.core.domain.models import Category, Group, Item, PriorityTree


@pytest.fixture
def two_slice_tree():
    return PriorityTree(categories=[Category(id="a", title="A"), Category(id="b", title="B")])


@pytest.fixture
def controller(layout_service, two_slice_tree):
    controller = InteractionController(layout_service)
    controller.set_view_model(layout_service.calculate_layout(two_slice_tree))
    return controller


def _position(angle_deg, radius=40, center=(250, 250)):
    angle = math.radians(angle_deg)
    return center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle)


class TestInteractionState:
    def test_factories(self):
        assert InteractionState.idle() == InteractionState(InteractionMode.IDLE, None)
        assert InteractionState.hovering("k").mode == InteractionMode.HOVERING
        assert InteractionState.pinned("k").is_pinned


class TestInteractionController:
    """Tests for the hover/pin state machine."""

    def test_initial_state_is_idle(self, controller):
        assert controller.state == InteractionState.idle()
        assert controller.current_selection() is None

    def test_scenario_hover_pin_and_release(self, controller):
        """Hover A, pin A, hover B while pinned, click empty space, hover B."""
        a, b = "category:a", "category:b"

        controller.handle_pointer_enter(a)
        assert controller.hovered_key == a
        assert controller.current_key == a

        controller.handle_activate(a)
        assert controller.pinned_key == a

        controller.handle_pointer_enter(b)
        assert controller.pinned_key == a
        assert controller.current_key == a
        assert controller.hovered_key is None

        controller.handle_activate(None)
        assert controller.pinned_key is None
        assert controller.current_key is None

        controller.handle_pointer_enter(b)
        assert controller.current_key == b
        assert controller.current_selection().key == b

    def test_leave_clears_hover(self, controller):
        controller.handle_pointer_enter("category:a")
        controller.handle_pointer_leave()

        assert controller.state == InteractionState.idle()

    def test_leave_keeps_pin(self, controller):
        controller.handle_activate("category:a")
        controller.handle_pointer_leave()

        assert controller.pinned_key == "category:a"

    def test_activating_another_slice_moves_pin(self, controller):
        controller.handle_activate("category:a")
        controller.handle_activate("category:b")

        assert controller.pinned_key == "category:b"

    def test_mouse_move_and_click(self, controller):
        hovered = controller.handle_mouse_move(*_position(90))
        assert hovered.key == "category:a"
        assert controller.hovered_key == "category:a"

        assert controller.handle_mouse_click(*_position(270)) is True
        assert controller.pinned_key == "category:b"

        assert controller.handle_mouse_click(*_position(90, radius=240)) is False
        assert controller.state == InteractionState.idle()

    def test_mouse_move_into_gap_clears_hover(self, controller):
        controller.handle_mouse_move(*_position(90))
        assert controller.handle_mouse_move(*_position(90, radius=85)) is None

        assert controller.hovered_key is None

    def test_cursor_type(self, controller):
        assert controller.get_cursor_type(*_position(45)) == "pointer"
        assert controller.get_cursor_type(0, 0) == "default"

    def test_callbacks_fire_on_change_only(self, controller):
        received = []
        controller.add_selection_callback(received.append)

        controller.handle_pointer_enter("category:a")
        controller.handle_pointer_enter("category:a")
        controller.handle_activate("category:a")
        controller.handle_pointer_leave()

        assert [s.key for s in received] == ["category:a"]

    def test_failing_callback_does_not_break_others(self, controller, caplog):
        received = []

        def broken(_selection):
            raise RuntimeError("boom")

        controller.add_selection_callback(broken)
        controller.add_selection_callback(received.append)

        controller.handle_pointer_enter("category:b")

        assert [s.key for s in received] == ["category:b"]
        assert "boom" in caplog.text


class TestSelectionAfterRecompute:
    """Selection is keyed, so recomputed layouts never leave stale references."""

    def test_pin_survives_resize(self, layout_service, two_slice_tree, controller):
        controller.handle_activate("category:a")

        resized = layout_service.calculate_layout(two_slice_tree, (800, 600))
        controller.set_view_model(resized)

        selection = controller.current_selection()
        assert selection is resized.get_slice_by_key("category:a")
        assert selection.outer_radius == pytest.approx(96.0)

    def test_pin_dropped_when_slice_disappears(self, layout_service, controller):
        received = []
        controller.add_selection_callback(received.append)
        controller.handle_activate("category:b")

        smaller = PriorityTree(
            categories=[
                Category(
                    id="a",
                    title="A",
                    groups=[Group(id="g", title="G", items=[Item(id="i", title="I")])],
                )
            ]
        )
        controller.set_view_model(layout_service.calculate_layout(smaller))

        assert controller.state == InteractionState.idle()
        assert received[-1] is None

    def test_debug_state(self, controller):
        controller.handle_activate("category:a")

        info = controller.debug_interaction_state()

        assert info["mode"] == "pinned"
        assert info["current_key"] == "category:a"
        assert info["slices_count"] == 4

    def test_reset(self, controller):
        controller.handle_activate("category:a")
        controller.reset()

        assert controller.state == InteractionState.idle()
