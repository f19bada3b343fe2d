"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.results import InsertOneResult, UpdateResult

from src.data.database import get_database_manager
from src.data.models.base import BaseDocument, utcnow
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common asynchronous operations.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self) -> None:
        """Initialize repository with database connection."""
        self._db_manager = get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        return ObjectId(id_value)

    # -------------------------------------------------------------------------
    # CRUD Operations
    # -------------------------------------------------------------------------

    async def create(self, model: T) -> T:
        """Insert a new document and set its id on the model."""
        collection = self._get_collection()
        now = utcnow()
        model.created_at = now
        model.updated_at = now

        result: InsertOneResult = await collection.insert_one(model.model_dump_mongo())
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    async def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID."""
        collection = self._get_collection()
        document = await collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    async def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: Optional[list[tuple[str, int]]] = None,
    ) -> list[T]:
        """Find documents matching a query, newest first unless sorted."""
        collection = self._get_collection()
        cursor = collection.find(query).sort(sort or [("created_at", -1)]).skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        documents = await cursor.to_list(length=limit or None)
        return self._to_models(documents)

    async def find_one(
        self,
        query: dict[str, Any],
        sort: Optional[list[tuple[str, int]]] = None,
    ) -> Optional[T]:
        """Find a single document matching a query."""
        collection = self._get_collection()
        document = await collection.find_one(query, sort=sort)
        return self._to_model(document)

    async def update(
        self, id_value: str | ObjectId, update_data: dict[str, Any]
    ) -> Optional[T]:
        """Update a document by ID and return the stored result."""
        collection = self._get_collection()
        update_data["updated_at"] = utcnow()

        result: UpdateResult = await collection.update_one(
            {"_id": self._to_object_id(id_value)},
            {"$set": update_data},
        )

        if result.matched_count > 0:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
            return await self.get_by_id(id_value)
        return None
