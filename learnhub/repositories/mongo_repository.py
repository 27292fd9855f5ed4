"""
MongoDB implementation of the CRUD repository (Motor).
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from learnhub.repositories.base import CrudRepository, CrudServiceError, RecordNotFoundError

logger = logging.getLogger(__name__)


class MongoCrudRepository(CrudRepository):
    """
    Stores each collection as a MongoDB collection of the same name.

    Every driver error is logged and re-raised as CrudServiceError.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize MongoCrudRepository.

        Args:
            db: MongoDB database connection
        """
        self._db = db

    async def get_all(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self._db[collection].find(filters or {}).sort("_createdDate", ASCENDING)
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list {collection}: {e}")
            raise CrudServiceError(f"Failed to list {collection}", collection) from e

    async def get_by_id(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self._db[collection].find_one({"_id": record_id})
        except PyMongoError as e:
            logger.error(f"Failed to read {collection}/{record_id}: {e}")
            raise CrudServiceError(f"Failed to read {collection}", collection) from e

    async def create(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        document = self.prepare_new(record)
        try:
            await self._db[collection].insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to create record in {collection}: {e}")
            raise CrudServiceError(f"Failed to create record in {collection}", collection) from e

        logger.debug(f"Created {collection}/{document['_id']}")
        return document

    async def update(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        record_id = record["_id"]
        try:
            updated = await self._db[collection].find_one_and_update(
                {"_id": record_id},
                {"$set": self.prepare_changes(record)},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update {collection}/{record_id}: {e}")
            raise CrudServiceError(f"Failed to update record in {collection}", collection) from e

        if updated is None:
            raise RecordNotFoundError(collection, record_id)
        return updated

    async def delete(self, collection: str, record_id: str) -> bool:
        try:
            result = await self._db[collection].delete_one({"_id": record_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete {collection}/{record_id}: {e}")
            raise CrudServiceError(f"Failed to delete record in {collection}", collection) from e

        return result.deleted_count > 0
