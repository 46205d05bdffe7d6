import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from prioritywheel.core.dependency_injection import setup_container
from prioritywheel.core.settings import SettingsManager
from prioritywheel.shared_toolkit.core import setup_logging
from prioritywheel.ui.main_window import PriorityWheelMainWindow


def main():
    parser = argparse.ArgumentParser(description="PriorityWheel - radial priority viewer")
    parser.add_argument("tree", nargs="?", help="Tree JSON file to open on start.")
    parser.add_argument(
        "--enable-logging", action="store_true", help="Permanently enable logging."
    )
    parser.add_argument(
        "--disable-logging", action="store_true", help="Permanently disable logging."
    )
    args, unknown = parser.parse_known_args()

    settings_manager = SettingsManager("prioritywheel", "prioritywheel")

    if args.enable_logging or args.disable_logging:
        enabled = args.enable_logging
        settings_manager.save_debug_mode(enabled)
        status = "enabled" if enabled else "disabled"
        print(f"Permanent logging was {status}.")
        sys.exit(0)

    app = QApplication(sys.argv[:1] + unknown)

    app.setApplicationName("PriorityWheel")
    app.setApplicationDisplayName("PriorityWheel")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("prioritywheel")

    setup_logging(
        "prioritywheel",
        "PriorityWheel",
        debug_enabled=settings_manager.load_debug_mode(),
        debug_env_var="PRIORITYWHEEL_DEBUG",
    )
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    container = setup_container(settings_manager.load_layout_config())

    main_window = PriorityWheelMainWindow(container)
    main_window.show()

    if args.tree and os.path.exists(args.tree):
        main_window.load_tree(args.tree)
    elif args.tree:
        logging.getLogger("prioritywheel").warning(f"Tree file not found: {args.tree}")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
