import html
import logging
from typing import Optional

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from PyQt6.QtCore import QPoint, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import QLabel, QSizePolicy, QVBoxLayout, QWidget

from prioritywheel.core.application.details_service import DetailsService
from prioritywheel.core.application.interaction_service import InteractionController
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.domain.models import PriorityTree
from prioritywheel.core.view_models import Slice, WheelViewModel
from prioritywheel.ui.wheel.services.chart_rendering_service import ChartRenderingService

logger = logging.getLogger(__name__)

RESIZE_DEBOUNCE_MS = 30


class WheelWidget(QWidget):
    """Interactive wheel: recomputes on resize, hover previews, click pins."""

    selection_changed = pyqtSignal(object)

    def __init__(
        self,
        layout_service: LayoutService,
        interaction_controller: InteractionController,
        details_service: DetailsService,
        parent=None,
    ):
        super().__init__(parent)
        self.layout_service = layout_service
        self.interaction = interaction_controller
        self.details_service = details_service
        self.rendering = ChartRenderingService(layout_service)

        self.tree: Optional[PriorityTree] = None
        self.view_model = WheelViewModel()

        self.setMinimumSize(300, 300)
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.canvas = self.rendering.create_canvas(500, 500, canvas_class=FigureCanvas)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.canvas.setMinimumSize(0, 0)
        layout.addWidget(self.canvas)

        self.tooltip_widget = QLabel(self, Qt.WindowType.ToolTip)
        self.tooltip_widget.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self.resize_timer = QTimer(self)
        self.resize_timer.setSingleShot(True)

    def _connect_signals(self):
        self.resize_timer.timeout.connect(self.recompute_layout)
        self.interaction.add_selection_callback(self._on_selection_changed)
        self.canvas.mpl_connect("motion_notify_event", self.on_motion)
        self.canvas.mpl_connect("button_press_event", self.on_click)
        self.canvas.mpl_connect("figure_leave_event", self.on_figure_leave)

    def set_tree(self, tree: Optional[PriorityTree]):
        """Replaces the displayed tree and recomputes the layout."""
        self.tree = tree
        self.recompute_layout()

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self.resize_timer.start(RESIZE_DEBOUNCE_MS)

    def recompute_layout(self):
        width, height = self.canvas.width(), self.canvas.height()
        if self.tree is None or width <= 1 or height <= 1:
            self.view_model = WheelViewModel(
                canvas_width=max(width, 1),
                canvas_height=max(height, 1),
                center_x=max(width, 1) / 2,
                center_y=max(height, 1) / 2,
            )
        else:
            self.view_model = self.layout_service.calculate_layout(self.tree, (width, height))

        self.interaction.set_view_model(self.view_model)
        self.plot()

    def plot(self):
        try:
            self.rendering.render_slices(self.view_model, self.interaction.current_key)
        except Exception as e:
            logger.error(f"Error while drawing wheel: {e}", exc_info=True)

    def current_selection(self) -> Optional[Slice]:
        return self.interaction.current_selection()

    def on_motion(self, event):
        if event.xdata is None or event.ydata is None:
            self.interaction.handle_mouse_leave()
            self.tooltip_widget.hide()
            return

        hover_slice = self.interaction.handle_mouse_move(event.xdata, event.ydata)

        if hover_slice is None:
            self.canvas.setCursor(Qt.CursorShape.ArrowCursor)
            self.tooltip_widget.hide()
            return

        self.canvas.setCursor(Qt.CursorShape.PointingHandCursor)
        lines = self.details_service.describe(hover_slice)
        tooltip_text = f"<b>{html.escape(lines[0])}</b><br>" + "<br>".join(
            html.escape(line) for line in lines[1:]
        )
        self.tooltip_widget.setText(tooltip_text)
        self.tooltip_widget.adjustSize()
        if event.guiEvent is not None:
            position = event.guiEvent.position().toPoint()
            self.tooltip_widget.move(self.canvas.mapToGlobal(position) + QPoint(15, 10))
        self.tooltip_widget.show()

    def on_click(self, event):
        if event.button != 1:
            return

        if event.xdata is None or event.ydata is None:
            self.interaction.handle_activate(None)
            return

        self.interaction.handle_mouse_click(event.xdata, event.ydata)

    def on_figure_leave(self, event):
        self.interaction.handle_mouse_leave()
        self.tooltip_widget.hide()
        self.canvas.setCursor(Qt.CursorShape.ArrowCursor)

    def _on_selection_changed(self, selection: Optional[Slice]):
        self.plot()
        self.selection_changed.emit(selection)
