"""CLI commands"""

from . import deploy
from . import status
from . import admin

__all__ = [
    "deploy",
    "status",
    "admin",
]
