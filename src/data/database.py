"""
Database connection manager for Talent-Match.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from src.utils.config import get_settings
from src.utils.constants import (
    CANDIDATE_PROFILES_COLLECTION,
    JOB_ROLES_COLLECTION,
    JOBS_COLLECTION,
    MATCHES_COLLECTION,
    RESUMES_COLLECTION,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Supports both synchronous and asynchronous operations.
    Implements singleton pattern for connection reuse.
    """

    _instance: Optional["DatabaseManager"] = None
    _sync_client: Optional[MongoClient] = None
    _async_client: Optional[AsyncIOMotorClient] = None

    def __new__(cls) -> "DatabaseManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        if hasattr(self, "_initialized") and self._initialized:
            return

        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._initialized = True

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded so special characters survive.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    def _client_options(self) -> dict[str, Any]:
        db_settings = self._settings.database
        return {
            "serverSelectionTimeoutMS": db_settings.server_selection_timeout_ms,
            "connectTimeoutMS": db_settings.server_selection_timeout_ms,
            "maxPoolSize": db_settings.max_pool_size,
        }

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            self._sync_client = MongoClient(self._uri, **self._client_options())
        return self._sync_client

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            self._sync_client = None
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            self._async_client = AsyncIOMotorClient(self._uri, **self._client_options())
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_sync(self) -> None:
        """Close synchronous client connection."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None

    def close_async(self) -> None:
        """Close asynchronous client connection."""
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    def close_all(self) -> None:
        """Close all database connections."""
        self.close_sync()
        self.close_async()

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create indexes for all collections."""
        logger.info("Ensuring database indexes")

        try:
            job_roles = self.get_async_collection(JOB_ROLES_COLLECTION)
            await job_roles.create_index("name", unique=True)
            await job_roles.create_index("is_active")

            jobs = self.get_async_collection(JOBS_COLLECTION)
            await jobs.create_index("job_classification")
            await jobs.create_index("status")
            await jobs.create_index("created_at")

            # Pool selection filters on is_active plus one of these
            profiles = self.get_async_collection(CANDIDATE_PROFILES_COLLECTION)
            await profiles.create_index("user_id", unique=True)
            await profiles.create_index([("is_active", ASCENDING), ("current_job_title", ASCENDING)])
            await profiles.create_index([("is_active", ASCENDING), ("job_classification", ASCENDING)])

            # Latest resume per candidate
            resumes = self.get_async_collection(RESUMES_COLLECTION)
            await resumes.create_index([("candidate_id", ASCENDING), ("uploaded_at", DESCENDING)])

            # One match per (job, candidate); the upsert relies on this
            matches = self.get_async_collection(MATCHES_COLLECTION)
            await matches.create_index(
                [("job_id", ASCENDING), ("candidate_id", ASCENDING)], unique=True
            )
            await matches.create_index("candidate_id")
            await matches.create_index([("job_id", ASCENDING), ("match_score", DESCENDING)])
        except PyMongoError as e:
            logger.error(f"Index creation failed: {e}")
            raise

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
