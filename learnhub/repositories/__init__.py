"""Document repositories."""

from learnhub.repositories.base import CrudRepository, CrudServiceError, RecordNotFoundError
from learnhub.repositories.mongo_repository import MongoCrudRepository
from learnhub.repositories.memory_repository import InMemoryCrudRepository

__all__ = [
    "CrudRepository",
    "CrudServiceError",
    "RecordNotFoundError",
    "MongoCrudRepository",
    "InMemoryCrudRepository",
]
