import html
import logging
import os
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QWidget,
)

from prioritywheel.core.application.details_service import DetailsService
from prioritywheel.core.application.interaction_service import InteractionController
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.application.tree_service import TreeLoadError, TreeService
from prioritywheel.core.dependency_injection import DIContainer
from prioritywheel.core.view_models import Slice
from prioritywheel.ui.wheel.services.chart_rendering_service import ChartRenderingService
from prioritywheel.ui.wheel.services.svg_rendering_service import SvgRenderingService
from prioritywheel.ui.wheel.wheel_widget import WheelWidget

logger = logging.getLogger(__name__)

DETAILS_PANEL_WIDTH = 280


class PriorityWheelMainWindow(QMainWindow):
    def __init__(self, container: DIContainer, parent=None):
        super().__init__(parent)
        self.tree_service = container.get(TreeService)
        self.layout_service = container.get(LayoutService)
        self.details_service = container.get(DetailsService)

        self.wheel_widget = WheelWidget(
            self.layout_service,
            container.get(InteractionController),
            self.details_service,
            self,
        )

        self.setWindowTitle("PriorityWheel")
        self.resize(900, 640)

        self._setup_ui()
        self._setup_menu()
        self._update_details(None)

    def _setup_ui(self):
        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.addWidget(self.wheel_widget, 1)

        self.details_label = QLabel(central)
        self.details_label.setFixedWidth(DETAILS_PANEL_WIDTH)
        self.details_label.setWordWrap(True)
        self.details_label.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
        self.details_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(self.details_label)

        self.setCentralWidget(central)
        self.wheel_widget.selection_changed.connect(self._update_details)

    def _setup_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_clicked)
        file_menu.addAction(open_action)

        export_action = QAction("&Export...", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._on_export_clicked)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    def load_tree(self, file_path: str) -> bool:
        """Loads tree file and shows it; errors are reported in a message box."""
        try:
            tree = self.tree_service.load_tree_from_file(file_path)
        except TreeLoadError as e:
            logger.error(f"Failed to load tree from {file_path}: {e}")
            QMessageBox.warning(self, "Load failed", str(e))
            return False

        issues = self.layout_service.validate_tree(tree)
        if issues:
            QMessageBox.warning(self, "Tree cannot be laid out", "\n".join(issues))

        self.wheel_widget.set_tree(tree)
        self.setWindowTitle(f"PriorityWheel - {os.path.basename(file_path)}")
        logger.info(f"Loaded tree from {file_path}")
        return True

    def _on_open_clicked(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open tree", "", "Tree files (*.json);;All files (*)"
        )
        if file_path:
            self.load_tree(file_path)

    def _on_export_clicked(self):
        view_model = self.wheel_widget.view_model
        if view_model.is_empty():
            QMessageBox.information(self, "Export", "There is nothing to export yet.")
            return

        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export wheel", "wheel.svg", "SVG image (*.svg);;PNG image (*.png)"
        )
        if not file_path:
            return

        try:
            if file_path.lower().endswith(".png"):
                ChartRenderingService(self.layout_service).save(view_model, file_path)
            else:
                SvgRenderingService(self.layout_service).save(view_model, file_path)
        except OSError as e:
            logger.error(f"Failed to export wheel to {file_path}: {e}")
            QMessageBox.warning(self, "Export failed", str(e))
            return

        self.statusBar().showMessage(f"Exported to {file_path}", 5000)

    def _update_details(self, selection: Optional[Slice]):
        lines = self.details_service.describe(selection)
        body = "<br>".join(html.escape(line) for line in lines[1:])
        self.details_label.setText(f"<h3>{html.escape(lines[0])}</h3>{body}")
