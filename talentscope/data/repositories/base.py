"""
Base repository class providing common read operations.

All entity-specific repositories inherit from this base class. TalentScope
never writes to the tracker's collections, so only queries live here.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Optional, TypeVar

from bson import ObjectId
from pydantic import ValidationError
from pymongo.collection import Collection

from talentscope.data.database import get_database_manager
from talentscope.data.models.base import BaseDocument
from talentscope.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract read-only repository.

    Queries are synchronous snapshot reads. Subclasses must define the collection name and model class.
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

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_models(self, documents: Iterable[dict[str, Any]]) -> list[T]:
        """
        Convert MongoDB documents to Pydantic models.

        Documents that fail validation are skipped with a warning so one
        corrupt record cannot take a whole report down.
        """
        models = []
        for doc in documents:
            if doc is None:
                continue
            try:
                models.append(self.model_class.model_validate(doc))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid {self.collection_name} document "
                    f"{doc.get('_id')}: {e.error_count()} validation error(s)"
                )
        return models

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        return ObjectId(id_value)

    @classmethod
    def _in_ids(cls, ids: Iterable[str | ObjectId]) -> dict[str, Any]:
        """Build an ``$in`` clause from a collection of ids."""
        return {"$in": [cls._to_object_id(i) for i in ids]}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_many(self, ids: Iterable[str | ObjectId]) -> list[T]:
        """Get every document whose ID is in ``ids``."""
        ids = list(ids)
        if not ids:
            return []
        return self.find_all({"_id": self._in_ids(ids)})

    def find_all(
        self,
        query: Optional[dict[str, Any]] = None,
        projection: Optional[dict[str, Any]] = None,
    ) -> list[T]:
        """Find every document matching a query (a full snapshot read)."""
        collection = self._get_sync_collection()
        cursor = collection.find(query or {}, projection).sort("createdAt", -1)
        return self._to_models(cursor)

