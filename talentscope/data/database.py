"""
Database connection manager for TalentScope.

Reports are snapshot reads over PyMongo. Motor is used for index
maintenance, which creates every index concurrently.
"""

import asyncio
from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from talentscope.utils.config import DatabaseSettings, get_settings
from talentscope.utils.logger import get_logger

logger = get_logger(__name__)

# Keys the visibility filters and report sorts query on, per collection
# settings attribute
REPORT_INDEXES: dict[str, list[Any]] = {
    "users_collection": ["reporter", "designation"],
    "jobs_collection": ["status", "CreatedBy", "assignedRecruiters", "leadRecruiter", "createdAt"],
    "candidates_collection": [
        "jobId",
        "createdBy",
        "status",
        [("jobId", ASCENDING), ("createdAt", DESCENDING)],
    ],
}


def build_mongo_uri(db_settings: DatabaseSettings) -> str:
    """Connection URI for the tracker database, credentials URL-encoded."""
    host = db_settings.host.strip()
    if not host or any(c in host for c in ";&|$`"):
        raise ValueError(f"Invalid database host: {host}")

    auth = ""
    if db_settings.username and db_settings.password:
        auth = f"{quote_plus(db_settings.username)}:{quote_plus(db_settings.password)}@"
    return f"mongodb://{auth}{host}:{db_settings.port}"


class DatabaseManager:
    """
    Singleton owner of the MongoDB clients.

    Stored dates are naive UTC and are kept naive on read.
    """

    _instance: Optional["DatabaseManager"] = None
    _sync_client: Optional[MongoClient] = None
    _async_client: Optional[AsyncIOMotorClient] = None

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._settings = get_settings().database
        self._uri = build_mongo_uri(self._settings)
        self._initialized = True

    def _client_options(self) -> dict[str, Any]:
        return {
            "serverSelectionTimeoutMS": 5000,
            "connectTimeoutMS": 5000,
            "tz_aware": False,
        }

    def get_sync_client(self) -> MongoClient:
        """Get or create the client used for report reads."""
        if self._sync_client is None:
            logger.info(f"Connecting to MongoDB database '{self._settings.name}'")
            self._sync_client = MongoClient(self._uri, **self._client_options())
        return self._sync_client

    def get_sync_collection(self, collection_name: str) -> Collection:
        return self.get_sync_client()[self._settings.name][collection_name]

    def check_sync_connection(self) -> bool:
        """Ping the server; a failed ping drops the cached client."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"MongoDB ping failed: {e}")
            self._sync_client = None
            return False

    def get_async_collection(self, collection_name: str) -> Any:
        if self._async_client is None:
            self._async_client = AsyncIOMotorClient(self._uri, **self._client_options())
        return self._async_client[self._settings.name][collection_name]

    async def ensure_indexes(self) -> list[str]:
        """Create the indexes the visibility and report queries rely on."""
        pending = []
        for setting, keys in REPORT_INDEXES.items():
            collection = self.get_async_collection(getattr(self._settings, setting))
            pending.extend(collection.create_index(key) for key in keys)

        logger.info(f"Ensuring {len(pending)} report indexes")
        names = await asyncio.gather(*pending)
        logger.info("Report indexes ready")
        return list(names)


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
