"""
Service for rendering the wheel with matplotlib.

Responsible for raster output (PNG and other formats supported by matplotlib).
"""

import logging
from typing import Optional, Type

import matplotlib.patches as patches
from matplotlib.backend_bases import FigureCanvasBase
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.view_models import Slice, WheelViewModel

logger = logging.getLogger(__name__)


class ChartRenderingService:
    """Service for rendering the wheel to an image."""

    def __init__(self, layout_service: LayoutService):
        self._layout_service = layout_service
        self.figure: Optional[Figure] = None
        self.axes = None
        self.canvas: Optional[FigureCanvasBase] = None

        self.FONT_SIZE = 9
        self.OUTLINE_WIDTH = 3
        self.HIGHLIGHT_COLOR = "#333333"
        self.HIGHLIGHT_WIDTH = 2.5
        self.DPI = 100

    def create_canvas(
        self, width: float, height: float, canvas_class: Type[FigureCanvasBase] = FigureCanvasAgg
    ) -> FigureCanvasBase:
        """
        Creates matplotlib canvas sized in pixels.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            canvas_class: Canvas implementation (Agg for files, QtAgg for widgets)
        """
        self.figure = Figure(figsize=(width / self.DPI, height / self.DPI), dpi=self.DPI)
        self.canvas = canvas_class(self.figure)
        self.axes = self.figure.add_axes((0, 0, 1, 1), frameon=False)
        self.axes.format_coord = lambda x, y: ""

        return self.canvas

    def render_slices(
        self, view_model: WheelViewModel, highlighted_key: Optional[str] = None
    ):
        """Renders all slices of the view model."""
        if self.axes is None:
            self.create_canvas(view_model.canvas_width, view_model.canvas_height)

        self.axes.clear()
        self.axes.set_aspect("equal")
        self.axes.axis("off")
        self.axes.set_xlim(0, view_model.canvas_width)
        # Slice angles grow clockwise on screen (y axis points down).
        self.axes.set_ylim(view_model.canvas_height, 0)

        for slice_ in view_model.drawable_slices():
            self._render_slice(slice_, view_model, slice_.key == highlighted_key)

        for slice_ in view_model.drawable_slices():
            if self._layout_service.should_show_label(slice_):
                self._render_slice_text(slice_, view_model)

        self.canvas.draw()

    def save(self, view_model: WheelViewModel, file_path: str):
        """Renders view model and writes it to an image file."""
        self.create_canvas(view_model.canvas_width, view_model.canvas_height)
        self.render_slices(view_model)
        self.figure.savefig(file_path, dpi=self.DPI, transparent=True)
        logger.debug(f"Saved wheel image to {file_path}")

    def _render_slice(
        self, slice_: Slice, view_model: WheelViewModel, is_highlighted: bool = False
    ):
        center = (view_model.center_x, view_model.center_y)

        wedge = patches.Wedge(
            center,
            slice_.outer_radius,
            slice_.start_angle,
            slice_.end_angle,
            width=slice_.outer_radius - slice_.inner_radius,
            facecolor=slice_.color.to_rgba(),
            edgecolor=self.HIGHLIGHT_COLOR if is_highlighted else "white",
            linewidth=self.HIGHLIGHT_WIDTH if is_highlighted else 1,
            zorder=2 if is_highlighted else 1,
        )
        self.axes.add_patch(wedge)

        if slice_.is_high_priority:
            self.axes.add_patch(
                patches.Wedge(
                    center,
                    slice_.outer_radius,
                    slice_.start_angle,
                    slice_.end_angle,
                    width=slice_.outer_radius - slice_.inner_radius,
                    fill=False,
                    edgecolor="black",
                    linewidth=self.OUTLINE_WIDTH,
                    zorder=2.5,
                )
            )

    def _render_slice_text(self, slice_: Slice, view_model: WheelViewModel):
        x, y, rotation = self._layout_service.calculate_text_position(
            slice_, (view_model.center_x, view_model.center_y)
        )

        self.axes.text(
            x,
            y,
            slice_.text,
            ha="center",
            va="center",
            fontsize=self.FONT_SIZE,
            rotation=-rotation,
            rotation_mode="anchor",
            color="black",
        )

    def clear_chart(self):
        if self.axes is not None:
            self.axes.clear()
            self.axes.axis("off")

        if self.canvas is not None:
            self.canvas.draw()
