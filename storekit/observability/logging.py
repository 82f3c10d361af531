"""Structured logging."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from .config import LoggingConfig


def add_timestamp(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_level(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add log level to event dict."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structlog and the standard library root logger."""
    if config is None:
        config = LoggingConfig.from_env()

    processors_list = [
        structlog.stdlib.filter_by_level,
        add_timestamp,
        add_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.format == "json":
        processors_list.append(structlog.processors.JSONRenderer())
    else:
        processors_list.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors_list,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler: logging.Handler
    if config.output == "file" and config.file_path:
        handler = logging.FileHandler(config.file_path)
    elif config.output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.WARNING))


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)
