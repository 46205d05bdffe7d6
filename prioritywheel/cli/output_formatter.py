"""
Output formatter for CLI.

Provides formatted output for console display including tables
and colored text.
"""

import sys
from typing import Any, Dict, List, Optional

import colorama
from colorama import Fore, Style

from prioritywheel.core.view_models import Slice


class OutputFormatter:
    """Formats output for console display."""

    def __init__(self, use_colors: bool = True):
        """
        Initialize formatter.

        Args:
            use_colors: Whether to use colored output
        """
        self.use_colors = use_colors
        if self.use_colors:
            colorama.init()

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors and color:
            return f"{color}{text}{Style.RESET_ALL}"
        return text

    def success(self, text: str) -> str:
        return self._colorize(text, Fore.GREEN)

    def error(self, text: str) -> str:
        return self._colorize(text, Fore.RED)

    def warning(self, text: str) -> str:
        return self._colorize(text, Fore.YELLOW)

    def info(self, text: str) -> str:
        return self._colorize(text, Fore.CYAN)

    def bold(self, text: str) -> str:
        if self.use_colors:
            return f"{Style.BRIGHT}{text}{Style.RESET_ALL}"
        return text

    def print_success(self, text: str):
        print(self.success(text))

    def print_error(self, text: str):
        print(self.error(text), file=sys.stderr)

    def print_warning(self, text: str):
        print(self.warning(text))

    def print_info(self, text: str):
        print(self.info(text))

    def print_bold(self, text: str):
        print(self.bold(text))

    def print_issues(self, header: str, issues: List[str], as_warning: bool = False):
        """Prints a header followed by a bulleted list of issues."""
        printer = self.print_warning if as_warning else self.print_error
        printer(header)
        for issue in issues:
            printer(f"  • {issue}")

    def print_table(
        self, headers: List[str], rows: List[List[str]], title: Optional[str] = None
    ) -> None:
        """
        Print formatted table.

        Args:
            headers: Table headers
            rows: Table rows
            title: Optional table title
        """
        if title:
            print()
            print(self.bold(title))
            print()

        if not headers or not rows:
            print("No data to display")
            return

        col_widths = [len(header) for header in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(col_widths):
                    col_widths[i] = max(col_widths[i], len(str(cell)))

        header_line = " | ".join(
            header.ljust(col_widths[i]) for i, header in enumerate(headers)
        )
        print(self.bold(header_line))
        print("-" * len(header_line))

        for row in rows:
            print(" | ".join(str(cell).ljust(col_widths[i]) for i, cell in enumerate(row)))
        print()

    def print_slice_table(self, slices: List[Slice]) -> None:
        """Print slice index in tree order."""
        headers = ["Key", "Level", "Start", "End", "Inner", "Outer", "Color", "Text"]
        rows = []

        for slice_ in slices:
            text = slice_.text
            if slice_.is_high_priority:
                text = f"{text} (!)"
            rows.append(
                [
                    slice_.key,
                    slice_.level.value,
                    f"{slice_.start_angle:.2f}",
                    f"{slice_.end_angle:.2f}",
                    f"{slice_.inner_radius:.1f}",
                    f"{slice_.outer_radius:.1f}",
                    slice_.color.to_css(),
                    text,
                ]
            )

        self.print_table(headers, rows, title="Slice Index")

    def print_tree_info(self, tree_stats: Dict[str, Any]) -> None:
        """
        Print tree information.

        Args:
            tree_stats: Tree statistics dictionary
        """
        print()
        print(self.bold("Tree Information"))
        print("=" * 50)

        labels = [
            ("Categories", "categories"),
            ("Groups", "groups"),
            ("Items", "items"),
            ("Empty categories", "empty_categories"),
            ("Empty groups", "empty_groups"),
            ("Items with due date", "items_with_due_date"),
        ]
        for label, key in labels:
            print(f"{label:<20}: {tree_stats.get(key, 0)}")

        print()

    def print_layout_statistics(self, layout_stats: Dict[str, Any]) -> None:
        print(self.bold("Layout Statistics"))
        print("-" * 30)
        for key, value in layout_stats.items():
            if isinstance(value, float):
                value = f"{value:.2f}"
            print(f"{key:<22}: {value}")
        print()

    def print_file_validation(self, validation_result: Dict[str, Any]) -> None:
        """
        Print file validation results.

        Args:
            validation_result: Validation result dictionary
        """
        print()
        print(self.bold("File Validation"))
        print("=" * 30)

        if validation_result.get("is_valid"):
            self.print_success("File is valid")
        else:
            self.print_error("File validation failed")

        print(f"File exists: {validation_result.get('file_exists', False)}")
        print(f"File size: {validation_result.get('file_size', 0):,} bytes")
        print(f"Is JSON: {validation_result.get('is_json', False)}")

        issues = validation_result.get("issues", [])
        if issues:
            print()
            print(self.warning("Issues found:"))
            for issue in issues:
                print(f"  • {issue}")

        parsing_stats = validation_result.get("parsing_stats", {})
        if parsing_stats:
            print()
            print(self.bold("Parsing Statistics:"))
            for key, value in parsing_stats.items():
                print(f"  {key}: {value}")

        print()
