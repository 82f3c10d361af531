"""Command-line interface for storekit."""

from .main import cli, main

__all__ = ["cli", "main"]
