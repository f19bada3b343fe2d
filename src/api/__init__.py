"""HTTP API for Talent-Match."""

from .app import create_app

__all__ = [
    "create_app",
]
