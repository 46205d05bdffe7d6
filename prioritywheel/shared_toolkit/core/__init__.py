from .logging import get_log_directory, setup_logging

__all__ = ["get_log_directory", "setup_logging"]
