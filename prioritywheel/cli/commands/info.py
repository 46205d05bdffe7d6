"""
Info command for CLI.

Shows information about a tree file without rendering it.
"""

import traceback

from prioritywheel.cli.config_loader import ConfigLoader
from prioritywheel.cli.output_formatter import OutputFormatter
from prioritywheel.core.application.layout_service import LayoutService
from prioritywheel.core.application.tree_service import TreeLoadError, TreeService
from prioritywheel.core.dependency_injection import setup_container


class InfoCommand:
    """Command to show information about a tree file."""

    def __init__(self):
        self.formatter = OutputFormatter()
        self.config_loader = ConfigLoader()

    def execute(self, args) -> int:
        """
        Execute info command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for error)
        """
        try:
            input_file = args.input

            self.formatter.print_info(f"Analyzing file: {input_file}")

            config, config_issues = self.config_loader.load_validated_config(args.config, args)
            if config_issues:
                self.formatter.print_issues("Configuration validation failed:", config_issues)
                return 1

            container = setup_container(config)
            tree_service = container.get(TreeService)
            layout_service = container.get(LayoutService)

            validation_result = tree_service.validate_file_before_load(input_file)

            if args.validate_only:
                self.formatter.print_file_validation(validation_result)
                return 0 if validation_result.get("is_valid", False) else 1

            if not validation_result.get("is_valid", False):
                self.formatter.print_error("File validation failed. Cannot load tree.")
                self.formatter.print_file_validation(validation_result)
                return 1

            try:
                tree = tree_service.load_tree_from_file(input_file)
            except TreeLoadError as e:
                self.formatter.print_error(f"Failed to load tree: {e}")
                return 1

            self.formatter.print_file_validation(validation_result)
            self.formatter.print_tree_info(tree_service.get_tree_statistics(tree))

            layout_issues = layout_service.validate_tree(tree)
            if layout_issues:
                self.formatter.print_issues("Layout issues:", layout_issues, as_warning=True)
                return 1

            view_model = layout_service.calculate_layout(
                tree, (config["canvas_width"], config["canvas_height"])
            )
            self.formatter.print_layout_statistics(
                layout_service.get_layout_statistics(view_model)
            )

            self.formatter.print_success("File analysis completed successfully!")
            return 0

        except Exception as e:
            self.formatter.print_error(f"Unexpected error: {e}")
            if args.debug:
                traceback.print_exc()
            return 1
