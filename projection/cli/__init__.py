"""Command line interface for projection"""

from .main import cli, main

__all__ = ["cli", "main"]
