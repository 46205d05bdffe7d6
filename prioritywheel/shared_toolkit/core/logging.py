import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - (%(filename)s:%(lineno)d) - %(message)s"


def get_log_directory(app_name: str) -> str:
    """
    Get the appropriate log directory for the application based on the platform.

    Args:
        app_name: Name of the application (e.g., "PriorityWheel")

    Returns:
        str: Path to the log directory
    """
    if sys.platform == "win32":
        app_data_dir = os.getenv("APPDATA")
        if not app_data_dir:
            app_data_dir = os.path.expanduser("~")
            logging.getLogger(app_name).warning(
                "Could not find APPDATA env variable, falling back to home directory."
            )
        return os.path.join(app_data_dir, app_name)

    if sys.platform == "darwin":
        return os.path.join(
            os.path.expanduser("~/Library/Application Support"), app_name
        )

    xdg_data_home = os.getenv("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
    return os.path.join(xdg_data_home, app_name)


def setup_logging(
    logger_name: str,
    app_name: str,
    debug_enabled: bool = False,
    debug_env_var: Optional[str] = None,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        logger_name: Root logger of the package (e.g., "prioritywheel")
        app_name: Name of the application, used for the log directory
        debug_enabled: Whether to enable debug logging
        debug_env_var: Environment variable that forces debug mode (e.g., "PRIORITYWHEEL_DEBUG")
        log_to_file: Whether to also write log.txt into the log directory

    Returns:
        logging.Logger: Configured package logger
    """
    logger = logging.getLogger(logger_name)

    if debug_env_var and os.getenv(debug_env_var, "0").lower() in ("1", "true", "yes"):
        debug_enabled = True

    level = logging.DEBUG if debug_enabled else logging.INFO

    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)

    if not log_to_file:
        return logger

    try:
        log_dir = get_log_directory(app_name)
        os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(
            os.path.join(log_dir, "log.txt"), mode="w", encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
    except OSError:
        logger.error(
            "Failed to set up file logger. Continuing with console-only logging.",
            exc_info=True,
        )

    return logger
