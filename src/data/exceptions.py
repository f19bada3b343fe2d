"""
Data layer exceptions for Talent-Match.
"""

from typing import Optional


class StorageError(Exception):
    """A store operation failed (unreachable server, query error, ...)."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Storage operation '{operation}' failed{detail}")
