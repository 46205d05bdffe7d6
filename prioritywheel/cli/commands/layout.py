"""
Layout command for CLI.

Computes the slice index of a tree and prints it as a table.
"""

import traceback

from prioritywheel.cli.config_loader import ConfigLoader
from prioritywheel.cli.output_formatter import OutputFormatter
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.application.tree_service import TreeLoadError, TreeService
from prioritywheel.core.dependency_injection import setup_container


class LayoutCommand:
    """Command to print the slice index of a tree."""

    def __init__(self):
        self.formatter = OutputFormatter()
        self.config_loader = ConfigLoader()

    def execute(self, args) -> int:
        """
        Execute layout command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for error)
        """
        try:
            config, config_issues = self.config_loader.load_validated_config(args.config, args)
            if config_issues:
                self.formatter.print_issues("Configuration validation failed:", config_issues)
                return 1

            container = setup_container(config)
            tree_service = container.get(TreeService)
            layout_service = container.get(LayoutService)

            try:
                tree = tree_service.load_tree_from_file(args.input)
            except TreeLoadError as e:
                self.formatter.print_error(f"Failed to load tree: {e}")
                return 1

            issues = layout_service.validate_tree(tree)
            if issues:
                self.formatter.print_issues("Tree cannot be laid out:", issues)
                return 1

            view_model = layout_service.calculate_layout(
                tree, (config["canvas_width"], config["canvas_height"])
            )

            slices = view_model.slices
            if not args.include_placeholders:
                slices = [s for s in slices if not s.is_placeholder]

            if not slices:
                self.formatter.print_warning("Tree is empty, nothing to lay out")
                return 0

            self.formatter.print_slice_table(slices)
            self.formatter.print_layout_statistics(
                layout_service.get_layout_statistics(view_model)
            )
            return 0

        except Exception as e:
            self.formatter.print_error(f"Unexpected error: {e}")
            if args.debug:
                traceback.print_exc()
            return 1
