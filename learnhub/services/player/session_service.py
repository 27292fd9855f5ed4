"""
Persistence of lesson player snapshots.

Each learner has at most one saved player per course, keyed
"{userId}:{courseId}", so they resume where they left off.
"""

import logging
from typing import Any, Dict, Optional

from learnhub.database.collections import PLAYER_SESSIONS
from learnhub.repositories.base import CrudRepository

logger = logging.getLogger(__name__)


def session_id(user_id: str, course_id: str) -> str:
    return f"{user_id}:{course_id}"


class PlayerSessionService:
    """Loads and saves LessonPlayer snapshots."""

    def __init__(self, repository: CrudRepository):
        """
        Initialize PlayerSessionService.

        Args:
            repository: Document store holding player sessions
        """
        self._repository = repository

    async def load(self, user_id: str, course_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a learner's saved snapshot for a course.

        Args:
            user_id: Member ID
            course_id: Course ID

        Returns:
            Snapshot dict, or None if the learner never opened the course
        """
        return await self._repository.get_by_id(PLAYER_SESSIONS, session_id(user_id, course_id))

    async def save(self, user_id: str, course_id: str, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a snapshot, replacing the previous one.

        Args:
            user_id: Member ID
            course_id: Course ID
            snapshot: LessonPlayer.to_snapshot() output

        Returns:
            Stored session record
        """
        record = {
            "_id": session_id(user_id, course_id),
            "userId": user_id,
            "courseId": course_id,
            **snapshot,
        }

        if await self._repository.get_by_id(PLAYER_SESSIONS, record["_id"]) is None:
            logger.info(f"Starting player session for user {user_id} on course {course_id}")
            return await self._repository.create(PLAYER_SESSIONS, record)
        return await self._repository.update(PLAYER_SESSIONS, record)
