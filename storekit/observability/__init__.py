"""storekit logging setup."""

from .config import LoggingConfig
from .logging import configure_logging, get_logger

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_logger",
]
