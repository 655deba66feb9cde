from .logger import setup_logger, LOGGER_NAMES

__all__ = ["setup_logger", "LOGGER_NAMES"]
