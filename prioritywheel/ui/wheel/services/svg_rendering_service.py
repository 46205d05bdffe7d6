"""
Service for rendering the wheel as SVG.

Responsible for svgwrite document construction: slice paths, high-priority
outlines and labels.
"""

import logging

import svgwrite

from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.view_models import Slice, SliceLevel, WheelViewModel

logger = logging.getLogger(__name__)

FONT_SIZES = {
    SliceLevel.CATEGORY: 14,
    SliceLevel.GROUP: 12,
    SliceLevel.ITEM: 10,
}


class SvgRenderingService:
    """Service for rendering the wheel to SVG."""

    def __init__(self, layout_service: LayoutService):
        self._layout_service = layout_service

        self.STROKE_COLOR = "white"
        self.STROKE_WIDTH = 2
        self.OUTLINE_COLOR = "#000000"
        self.OUTLINE_WIDTH = 6

    def render(self, view_model: WheelViewModel) -> svgwrite.Drawing:
        """Builds SVG document for the view model."""
        width, height = view_model.canvas_width, view_model.canvas_height
        drawing = svgwrite.Drawing(
            size=(width, height),
            viewBox=f"0 0 {width:g} {height:g}",
            debug=False,
        )

        for slice_ in view_model.drawable_slices():
            self._render_slice(drawing, slice_)

        for slice_ in view_model.drawable_slices():
            if self._layout_service.should_show_label(slice_):
                self._render_label(drawing, slice_, view_model)

        logger.debug(f"Rendered {len(view_model.drawable_slices())} slices to SVG")
        return drawing

    def to_string(self, view_model: WheelViewModel) -> str:
        return self.render(view_model).tostring()

    def save(self, view_model: WheelViewModel, file_path: str):
        drawing = self.render(view_model)
        drawing.saveas(file_path, pretty=True)

    def _render_slice(self, drawing: svgwrite.Drawing, slice_: Slice):
        path_data = slice_.path.to_svg()

        element = drawing.path(
            d=path_data,
            fill=slice_.color.to_hex(),
            fill_opacity=f"{slice_.color.alpha:g}",
            stroke=self.STROKE_COLOR,
            stroke_width=self.STROKE_WIDTH,
            class_=f"slice slice-{slice_.level.value}",
        )
        element.set_desc(title=slice_.text)
        drawing.add(element)

        if slice_.is_high_priority:
            drawing.add(
                drawing.path(
                    d=path_data,
                    fill="none",
                    stroke=self.OUTLINE_COLOR,
                    stroke_width=self.OUTLINE_WIDTH,
                    class_="high-priority",
                )
            )

    def _render_label(
        self, drawing: svgwrite.Drawing, slice_: Slice, view_model: WheelViewModel
    ):
        x, y, rotation = self._layout_service.calculate_text_position(
            slice_, (view_model.center_x, view_model.center_y)
        )
        scale = min(view_model.canvas_width, view_model.canvas_height) / (
            self._layout_service.reference_size
        )

        drawing.add(
            drawing.text(
                slice_.text,
                insert=(x, y),
                text_anchor="middle",
                dominant_baseline="middle",
                font_size=round(FONT_SIZES[slice_.level] * scale, 2),
                transform=f"rotate({rotation:.2f} {x:.2f} {y:.2f})",
            )
        )
