"""
Data layer for Talent-Match.

Provides database connections, data models, and repository classes
for data access throughout the application.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models/schemas
- repositories: Database operations and queries
- exceptions: Storage error types
"""

from .database import (
    DatabaseManager,
    get_database_manager,
)
from .exceptions import StorageError

__all__ = [
    "DatabaseManager",
    "StorageError",
    "get_database_manager",
]
