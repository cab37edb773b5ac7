"""HTTP admin API for projection deploy"""

from .app import create_app

__all__ = ["create_app"]
