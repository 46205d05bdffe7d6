"""
Main entry point for CLI.

Handles command routing and global error handling.
"""

import logging
import sys
import traceback
from typing import Optional

from prioritywheel.cli.argument_parser import ArgumentParser
from prioritywheel.cli.commands.info import InfoCommand
from prioritywheel.cli.commands.layout import LayoutCommand
from prioritywheel.cli.commands.render import RenderCommand
from prioritywheel.cli.output_formatter import OutputFormatter
from prioritywheel.shared_toolkit.core.logging import LOG_FORMAT

COMMANDS = {
    "layout": LayoutCommand,
    "render": RenderCommand,
    "info": InfoCommand,
}


def setup_logging(debug: bool = False):
    """
    Setup logging configuration.

    Args:
        debug: Whether to enable debug logging
    """
    level = logging.DEBUG if debug else logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    # Suppress noisy loggers
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def main(args: Optional[list] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (default: sys.argv[1:])

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    debug = "--debug" in (args if args is not None else sys.argv[1:])

    try:
        parser = ArgumentParser()
        parsed_args = parser.parse_args(args)
        debug = parsed_args.debug

        setup_logging(parsed_args.debug)

        validation_issues = parser.validate_args(parsed_args)
        if validation_issues:
            formatter = OutputFormatter()
            formatter.print_error("Argument validation failed:")
            for issue in validation_issues:
                formatter.print_error(f"  • {issue}")
            return 1

        command_class = COMMANDS.get(parsed_args.command)
        if command_class is None:
            formatter = OutputFormatter()
            formatter.print_error(f"Unknown command: {parsed_args.command}")
            formatter.print_info(f"Available commands: {', '.join(COMMANDS)}")
            return 1

        return command_class().execute(parsed_args)

    except KeyboardInterrupt:
        OutputFormatter().print_warning("\nOperation cancelled by user")
        return 130

    except Exception as e:
        OutputFormatter().print_error(f"Unexpected error: {e}")
        if debug:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
