"""
Service for handling wheel interactions.

- Pointer event handling (enter, leave, activation)
- Hover/pin selection state
- Selection reconciliation after layout recomputation
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.view_models import Slice, WheelViewModel

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[Optional[Slice]], None]


class InteractionMode(str, Enum):
    IDLE = "idle"
    HOVERING = "hovering"
    PINNED = "pinned"


@dataclass(frozen=True)
class InteractionState:
    """Interaction state; slices are referenced by key, never by object."""

    mode: InteractionMode = InteractionMode.IDLE
    slice_key: Optional[str] = None

    @classmethod
    def idle(cls) -> "InteractionState":
        return cls()

    @classmethod
    def hovering(cls, slice_key: str) -> "InteractionState":
        return cls(InteractionMode.HOVERING, slice_key)

    @classmethod
    def pinned(cls, slice_key: str) -> "InteractionState":
        return cls(InteractionMode.PINNED, slice_key)

    @property
    def is_pinned(self) -> bool:
        return self.mode == InteractionMode.PINNED


class InteractionController:
    """Owner of the hover/pin state machine."""

    def __init__(self, layout_service: LayoutService):
        self._layout_service = layout_service
        self._view_model: Optional[WheelViewModel] = None
        self._state = InteractionState.idle()
        self._selection_callbacks: List[SelectionCallback] = []

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def hovered_key(self) -> Optional[str]:
        if self._state.mode == InteractionMode.HOVERING:
            return self._state.slice_key
        return None

    @property
    def pinned_key(self) -> Optional[str]:
        if self._state.is_pinned:
            return self._state.slice_key
        return None

    @property
    def current_key(self) -> Optional[str]:
        """Pinned key if present, else hovered key, else None."""
        return self.pinned_key or self.hovered_key

    def add_selection_callback(self, callback: SelectionCallback):
        """Adds callback invoked whenever the exposed selection changes."""
        self._selection_callbacks.append(callback)

    def set_view_model(self, view_model: WheelViewModel):
        """
        Sets the freshly computed layout.

        A selected slice whose key is gone from the new layout is dropped.
        """
        self._view_model = view_model

        key = self._state.slice_key
        if key is not None and key not in view_model.slice_keys():
            logger.debug(f"Selected slice '{key}' no longer exists, resetting selection")
            self._set_state(InteractionState.idle(), force_notify=True)

    def current_selection(self) -> Optional[Slice]:
        """Returns the slice exposed to the rest of the application."""
        if self._view_model is None:
            return None
        return self._view_model.get_slice_by_key(self.current_key)

    def handle_pointer_enter(self, slice_key: str):
        if self._state.is_pinned:
            return
        self._set_state(InteractionState.hovering(slice_key))

    def handle_pointer_leave(self):
        if self._state.is_pinned:
            return
        self._set_state(InteractionState.idle())

    def handle_activate(self, slice_key: Optional[str]):
        """
        Handles explicit activation (click).

        Args:
            slice_key: Key of the activated slice, None for empty space
        """
        if slice_key is None:
            self._set_state(InteractionState.idle())
        else:
            self._set_state(InteractionState.pinned(slice_key))

    def handle_mouse_move(self, x: float, y: float) -> Optional[Slice]:
        """
        Handles mouse movement over the wheel.

        Returns:
            Optional[Slice]: Slice under the pointer
        """
        slice_ = self._find_slice(x, y)

        if slice_ is None:
            self.handle_pointer_leave()
        elif slice_.key != self.hovered_key:
            self.handle_pointer_enter(slice_.key)

        return slice_

    def handle_mouse_click(self, x: float, y: float) -> bool:
        """
        Handles mouse click on the wheel.

        Returns:
            bool: True if a slice was activated, False for empty space
        """
        slice_ = self._find_slice(x, y)
        self.handle_activate(slice_.key if slice_ else None)
        return slice_ is not None

    def handle_mouse_leave(self):
        """Handles mouse leaving the wheel area."""
        self.handle_pointer_leave()

    def get_cursor_type(self, x: float, y: float) -> str:
        return "pointer" if self._find_slice(x, y) else "default"

    def reset(self):
        self._set_state(InteractionState.idle())

    def _find_slice(self, x: float, y: float) -> Optional[Slice]:
        if self._view_model is None:
            return None
        return self._layout_service.find_slice_at_position(x, y, self._view_model)

    def _set_state(self, new_state: InteractionState, force_notify: bool = False):
        old_key = self.current_key
        self._state = new_state

        if force_notify or old_key != self.current_key:
            self._notify_selection_changed()

    def _notify_selection_changed(self):
        selection = self.current_selection()
        for callback in self._selection_callbacks:
            try:
                callback(selection)
            except Exception as e:
                logger.error(f"Error in selection callback: {e}")

    def debug_interaction_state(self) -> dict:
        """Returns debug information about interaction state."""
        return {
            "mode": self._state.mode.value,
            "slice_key": self._state.slice_key,
            "current_key": self.current_key,
            "slices_count": (
                self._view_model.get_slices_count() if self._view_model else 0
            ),
            "callbacks_registered": len(self._selection_callbacks),
        }
