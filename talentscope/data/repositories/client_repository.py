"""Client repository for TalentScope."""

from typing import Iterable, Optional

from bson import ObjectId

from talentscope.data.models.client import Client
from talentscope.utils.config import get_settings

from .base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    """Repository for client document queries."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.clients_collection

    @property
    def model_class(self) -> type[Client]:
        return Client

    def get_for_jobs(self, client_ids: Iterable[Optional[str | ObjectId]]) -> list[Client]:
        """Load the clients referenced by a set of jobs."""
        return self.get_many({cid for cid in client_ids if cid is not None})


# Singleton instance
_client_repository: Optional[ClientRepository] = None


def get_client_repository() -> ClientRepository:
    """Get the client repository singleton instance."""
    global _client_repository
    if _client_repository is None:
        _client_repository = ClientRepository()
    return _client_repository
