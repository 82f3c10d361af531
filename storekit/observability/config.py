"""Configuration for logging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="text", description="Log format (json or text)")
    output: str = Field(default="stderr", description="Log output (stderr, stdout or file)")
    file_path: str | None = Field(default=None, description="Log file path")

    @classmethod
    def from_file(cls, config_path: Path | str) -> LoggingConfig:
        """Load configuration from the ``logging`` section of a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data.get("logging", {}))

    @classmethod
    def from_env(cls) -> LoggingConfig:
        """Load configuration from environment variables."""
        config = cls()

        config.level = os.getenv("STOREKIT_LOG_LEVEL", config.level)
        config.format = os.getenv("STOREKIT_LOG_FORMAT", config.format)
        config.output = os.getenv("STOREKIT_LOG_OUTPUT", config.output)
        config.file_path = os.getenv("STOREKIT_LOG_FILE", config.file_path)

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
