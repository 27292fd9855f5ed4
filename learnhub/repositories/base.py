"""
Generic document CRUD repository.

Every LearnHub record lives in a named collection, keyed by a string "_id"
and stamped with "_createdDate"/"_updatedDate". Services only talk to this
interface so the aggregator and player logic run the same against MongoDB
and the in-memory store.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class CrudServiceError(Exception):
    """Storage failure. Never means "no data"."""

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message)
        self.collection = collection


class RecordNotFoundError(CrudServiceError):
    """Update targeted an _id that does not exist."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"No record {record_id} in {collection}", collection)
        self.record_id = record_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    return str(uuid.uuid4())


class CrudRepository(ABC):
    """
    Four-verb CRUD contract keyed by collection name and record _id.

    get_all returns records in insertion order.
    """

    @abstractmethod
    async def get_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        List records, optionally filtered by field equality.

        Args:
            collection: Collection name
            filters: Field/value pairs every returned record must match

        Returns:
            Records in insertion order (empty list when none match)

        Raises:
            CrudServiceError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def get_by_id(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one record, or None when the id is unknown."""
        pass

    @abstractmethod
    async def create(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a record.

        Fills in "_id" (UUID4) when missing and stamps both timestamps.

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    async def update(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update the record identified by record["_id"].

        Returns:
            The merged record

        Raises:
            RecordNotFoundError: If no record has that id
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        """Delete a record. Returns False when the id was unknown."""
        pass

    @staticmethod
    def prepare_new(record: Dict[str, Any]) -> Dict[str, Any]:
        """Copy a record and stamp the fields every stored record carries."""
        now = utc_now()
        document = dict(record)
        document["_id"] = document.get("_id") or new_record_id()
        document["_createdDate"] = now
        document["_updatedDate"] = now
        return document

    @staticmethod
    def prepare_changes(record: Dict[str, Any]) -> Dict[str, Any]:
        """Strip identity fields from an update and refresh _updatedDate."""
        changes = {k: v for k, v in record.items() if k not in ("_id", "_createdDate")}
        changes["_updatedDate"] = utc_now()
        return changes
