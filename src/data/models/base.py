"""
Base model classes for Talent-Match data models.

Provides the ObjectId field type, UTC timestamps and the document base
shared by every stored record.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PyObjectId(ObjectId):
    """ObjectId accepted from strings, serialized to strings in JSON."""

    @classmethod
    def __get_pydantic_core_schema__(cls, _source_type: Any, _handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(ObjectId),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(cls.validate),
                    ]
                ),
            ],
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        """Validate and convert string to ObjectId."""
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError(f"Invalid ObjectId: {value}")


class TimestampMixin(BaseModel):
    """Mixin providing creation and modification timestamps."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class BaseDocument(TimestampMixin):
    """Base model for documents stored in their own collection."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    # Fields computed at read time (joins) that must never be written back
    transient_fields: ClassVar[frozenset[str]] = frozenset()

    def model_dump_mongo(self) -> dict[str, Any]:
        """Convert model to a MongoDB-compatible dictionary."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if data.get("_id") is None:
            data.pop("_id", None)
        for name in self.transient_fields:
            data.pop(name, None)
        return data


class EmbeddedModel(BaseModel):
    """Base model for values returned by the API or embedded in documents."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )
