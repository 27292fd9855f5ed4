"""
In-process implementation of the CRUD repository.

Used for local development (CRUD_BACKEND=memory) and as the fake behind
service tests. Records are kept in insertion order and copied on the way
in and out so callers never share mutable state with the store.
"""

import copy
from typing import Any, Dict, List, Optional

from learnhub.repositories.base import CrudRepository, CrudServiceError, RecordNotFoundError


class InMemoryCrudRepository(CrudRepository):

    def __init__(self, seed: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for collection, records in (seed or {}).items():
            for record in records:
                document = self.prepare_new(record)
                self._store(collection)[document["_id"]] = document

    def _store(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    async def get_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        filters = filters or {}
        return [
            copy.deepcopy(record)
            for record in self._store(collection).values()
            if all(record.get(field) == value for field, value in filters.items())
        ]

    async def get_by_id(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        record = self._store(collection).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def create(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        document = self.prepare_new(copy.deepcopy(record))
        if document["_id"] in self._store(collection):
            raise CrudServiceError(f"Duplicate _id {document['_id']} in {collection}", collection)
        self._store(collection)[document["_id"]] = document
        return copy.deepcopy(document)

    async def update(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        record_id = record["_id"]
        existing = self._store(collection).get(record_id)
        if existing is None:
            raise RecordNotFoundError(collection, record_id)

        existing.update(copy.deepcopy(self.prepare_changes(record)))
        return copy.deepcopy(existing)

    async def delete(self, collection: str, record_id: str) -> bool:
        return self._store(collection).pop(record_id, None) is not None
