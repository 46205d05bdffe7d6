"""
Argument parser for CLI.

Handles parsing of command line arguments for all CLI commands.
"""

import argparse
import os
import sys
from typing import List, Optional

RENDER_FORMATS = (".svg", ".png")


class ArgumentParser:
    """Parses command line arguments for CLI commands."""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="prioritywheel-cli",
            description="PriorityWheel CLI - Lay out and render priority trees as radial wheels",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Print the slice index
  prioritywheel-cli layout -i tree.json

  # Render to SVG or PNG
  prioritywheel-cli render -i tree.json -o wheel.svg
  prioritywheel-cli render -i tree.json -o wheel.png --width 800 --height 800

  # Render with config file
  prioritywheel-cli render -i tree.json -o wheel.svg --config wheel.json

  # Show tree information
  prioritywheel-cli info -i tree.json
            """,
        )

        self.parser.add_argument(
            "--debug", "-d", action="store_true", help="Enable debug logging"
        )
        self.parser.add_argument(
            "--version", "-v", action="version", version="PriorityWheel CLI 1.0.0"
        )

        subparsers = self.parser.add_subparsers(
            dest="command", help="Available commands", required=True
        )

        self._setup_layout_parser(subparsers)
        self._setup_render_parser(subparsers)
        self._setup_info_parser(subparsers)

    def _setup_layout_parser(self, subparsers):
        """Setup layout command parser."""
        layout_parser = subparsers.add_parser(
            "layout", help="Compute the slice index and print it as a table"
        )
        layout_parser.add_argument(
            "-i", "--input", required=True, help="Input tree JSON file path"
        )
        layout_parser.add_argument(
            "--include-placeholders",
            action="store_true",
            help="Also list placeholder slices of empty categories and groups",
        )

        self._add_config_options(layout_parser)

    def _setup_render_parser(self, subparsers):
        """Setup render command parser."""
        render_parser = subparsers.add_parser(
            "render", help="Render the wheel to an SVG or PNG file"
        )
        render_parser.add_argument(
            "-i", "--input", required=True, help="Input tree JSON file path"
        )
        render_parser.add_argument(
            "-o", "--output", required=True, help="Output file path (.svg or .png)"
        )
        render_parser.add_argument(
            "--overwrite", action="store_true", help="Overwrite output file if it exists"
        )

        self._add_config_options(render_parser)

    def _setup_info_parser(self, subparsers):
        """Setup info command parser."""
        info_parser = subparsers.add_parser(
            "info", help="Show information about a tree file"
        )
        info_parser.add_argument(
            "-i", "--input", required=True, help="Input tree JSON file path"
        )
        info_parser.add_argument(
            "--validate-only",
            action="store_true",
            help="Only validate file without building the tree",
        )

        self._add_config_options(info_parser)

    def _add_config_options(self, parser):
        """Add configuration options to parser."""
        config_group = parser.add_argument_group("Configuration Options")

        config_group.add_argument("--config", "-c", help="Path to configuration file")
        config_group.add_argument("--width", type=float, help="Canvas width in pixels")
        config_group.add_argument("--height", type=float, help="Canvas height in pixels")
        config_group.add_argument(
            "--label-min-angle",
            type=float,
            help="Minimum slice span in degrees for a label to be drawn",
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments.

        Args:
            args: Arguments to parse (default: sys.argv[1:])

        Returns:
            argparse.Namespace: Parsed arguments
        """
        if args is None:
            args = sys.argv[1:]

        return self.parser.parse_args(args)

    def get_help_text(self) -> str:
        return self.parser.format_help()

    def validate_args(self, args: argparse.Namespace) -> List[str]:
        """
        Validate parsed arguments.

        Args:
            args: Parsed arguments

        Returns:
            List[str]: List of validation issues
        """
        issues = []

        if getattr(args, "input", None) and not os.path.exists(args.input):
            issues.append(f"Input file does not exist: {args.input}")

        for name in ("width", "height"):
            value = getattr(args, name, None)
            if value is not None and value <= 0:
                issues.append(f"Canvas {name} must be positive, got {value:g}")

        if args.command == "render":
            extension = os.path.splitext(args.output)[1].lower()
            if extension not in RENDER_FORMATS:
                issues.append(
                    f"Unsupported output format '{extension or args.output}'. "
                    f"Use one of: {', '.join(RENDER_FORMATS)}"
                )
            if os.path.exists(args.output) and not args.overwrite:
                issues.append(
                    f"Output file already exists: {args.output}. Use --overwrite to overwrite"
                )

        return issues
