"""
Render command for CLI.

Renders the wheel of a tree to SVG (svgwrite) or PNG (matplotlib).
"""

import os
import traceback

from prioritywheel.cli.config_loader import ConfigLoader
from prioritywheel.cli.output_formatter import OutputFormatter
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.application.tree_service import TreeLoadError, TreeService
from prioritywheel.core.dependency_injection import setup_container
from prioritywheel.ui.wheel.services.chart_rendering_service import ChartRenderingService
from prioritywheel.ui.wheel.services.svg_rendering_service import SvgRenderingService


class RenderCommand:
    """Command to render the wheel to an image file."""

    def __init__(self):
        self.formatter = OutputFormatter()
        self.config_loader = ConfigLoader()

    def execute(self, args) -> int:
        """
        Execute render command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for error)
        """
        try:
            input_file = args.input
            output_file = args.output

            self.formatter.print_info(f"Rendering {input_file} to {output_file}")

            config, config_issues = self.config_loader.load_validated_config(args.config, args)
            if config_issues:
                self.formatter.print_issues("Configuration validation failed:", config_issues)
                return 1

            container = setup_container(config)
            tree_service = container.get(TreeService)
            layout_service = container.get(LayoutService)

            try:
                tree = tree_service.load_tree_from_file(input_file)
            except TreeLoadError as e:
                self.formatter.print_error(f"Failed to load tree: {e}")
                return 1

            view_model = layout_service.calculate_layout(
                tree, (config["canvas_width"], config["canvas_height"])
            )
            if view_model.is_empty():
                self.formatter.print_warning("Layout is empty, rendering a blank canvas")

            extension = os.path.splitext(output_file)[1].lower()
            try:
                if extension == ".svg":
                    SvgRenderingService(layout_service).save(view_model, output_file)
                else:
                    ChartRenderingService(layout_service).save(view_model, output_file)
            except OSError as e:
                self.formatter.print_error(f"Failed to save output file: {e}")
                return 1

            file_size = os.path.getsize(output_file)

            self.formatter.print_success("Rendering completed successfully!")
            self.formatter.print_info(f"Output file: {output_file}")
            self.formatter.print_info(f"File size: {file_size:,} bytes")
            self.formatter.print_info(f"Slices drawn: {len(view_model.drawable_slices())}")
            return 0

        except Exception as e:
            self.formatter.print_error(f"Unexpected error: {e}")
            if args.debug:
                traceback.print_exc()
            return 1
