"""
Learner course progress aggregation.

Keeps one completion record per (user, course) and derives the enrolled /
completed partition and dashboard stats from it.
"""

import asyncio
import logging
import math
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, List, Optional

from learnhub.database.collections import COURSES, USER_COURSE_PROGRESS
from learnhub.repositories.base import CrudRepository, utc_now
from learnhub.schemas.course import Course
from learnhub.schemas.progress import CourseWithProgress, DashboardStats, UserCourseProgress

logger = logging.getLogger(__name__)


def clamp_percentage(value: float) -> float:
    """Clamp a completion percentage to [0, 100]."""
    return max(0.0, min(100.0, float(value)))


class UserProgressService:
    """
    Tracks each learner's completion percentage per course.

    Repository failures propagate as CrudServiceError so an empty result
    always means "no data".
    """

    def __init__(self, repository: CrudRepository):
        """
        Initialize UserProgressService.

        Args:
            repository: Document store holding courses and progress rows
        """
        self._repository = repository
        # Per-user and per-(user, course) locks, dropped once nobody holds or waits on them
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._lock_users: Counter = Counter()

    @asynccontextmanager
    async def _locked(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[key] -= 1
            if self._lock_users[key] == 0:
                del self._lock_users[key]
                del self._locks[key]

    async def initialize_user_progress(self, user_id: str) -> int:
        """
        Create a 0% row for every course the first time a user shows up.

        Does nothing when the user already has any progress rows, so it is
        safe to call on every dashboard load. Concurrent calls for the same
        user are serialised, and each row is created under the same lock
        update_course_progress takes, so seeding never duplicates a row.

        Args:
            user_id: Member ID

        Returns:
            Number of rows created
        """
        async with self._locked((user_id,)):
            existing = await self._repository.get_all(USER_COURSE_PROGRESS, {"userId": user_id})
            if existing:
                return 0

            courses = await self._repository.get_all(COURSES)
            now = utc_now()
            created = 0
            for course in courses:
                async with self._locked((user_id, course["_id"])):
                    if await self.get_course_progress(user_id, course["_id"]) is not None:
                        continue
                    await self._repository.create(USER_COURSE_PROGRESS, {
                        "userId": user_id,
                        "courseId": course["_id"],
                        "completionPercentage": 0,
                        "isCompleted": False,
                        "lastUpdatedDate": now,
                    })
                    created += 1

        logger.info(f"Initialized progress for user {user_id}: {created} courses")
        return created

    async def get_user_progress(self, user_id: str) -> List[UserCourseProgress]:
        """
        Get every progress row for a user.

        Args:
            user_id: Member ID

        Returns:
            Progress rows in creation order
        """
        rows = await self._repository.get_all(USER_COURSE_PROGRESS, {"userId": user_id})
        return [UserCourseProgress.model_validate(row) for row in rows]

    async def get_course_progress(self, user_id: str, course_id: str) -> Optional[UserCourseProgress]:
        """Get a user's row for one course, or None if they never touched it."""
        for row in await self.get_user_progress(user_id):
            if row.courseId == course_id:
                return row
        return None

    async def update_course_progress(
        self,
        user_id: str,
        course_id: str,
        completion_percentage: float,
    ) -> UserCourseProgress:
        """
        Record a new completion percentage, creating the row if needed.

        Args:
            user_id: Member ID
            course_id: Course ID
            completion_percentage: New percentage, clamped to 0-100

        Returns:
            The stored progress row
        """
        percentage = clamp_percentage(completion_percentage)
        changes = {
            "completionPercentage": percentage,
            "isCompleted": percentage >= 100,
            "lastUpdatedDate": utc_now(),
        }

        async with self._locked((user_id, course_id)):
            existing = await self.get_course_progress(user_id, course_id)
            if existing is None:
                stored = await self._repository.create(USER_COURSE_PROGRESS, {
                    "userId": user_id,
                    "courseId": course_id,
                    **changes,
                })
            else:
                stored = await self._repository.update(USER_COURSE_PROGRESS, {
                    "_id": existing.id,
                    **changes,
                })

        logger.info(f"Progress for user {user_id} on course {course_id}: {percentage}%")
        return UserCourseProgress.model_validate(stored)

    async def get_user_courses_with_progress(self, user_id: str) -> List[CourseWithProgress]:
        """
        Join every course with the user's progress row.

        Courses without a row report progress 0 and not completed.

        Args:
            user_id: Member ID

        Returns:
            One entry per course, in catalog order
        """
        courses = await self._repository.get_all(COURSES)
        progress_by_course = {row.courseId: row for row in await self.get_user_progress(user_id)}

        joined = []
        for course in courses:
            row = progress_by_course.get(course["_id"])
            joined.append(CourseWithProgress.model_validate({
                **course,
                "progress": row.completionPercentage if row else 0,
                "isCompleted": row.isCompleted if row else False,
            }))
        return joined

    async def get_completed_courses(self, user_id: str) -> List[Course]:
        """Courses the user has finished."""
        return [
            Course.model_validate(course.model_dump(by_alias=True))
            for course in await self.get_user_courses_with_progress(user_id)
            if course.isCompleted
        ]

    async def get_enrolled_courses(self, user_id: str) -> List[CourseWithProgress]:
        """Courses the user has started but not finished."""
        return [
            course
            for course in await self.get_user_courses_with_progress(user_id)
            if course.progress > 0 and not course.isCompleted
        ]

    async def get_dashboard_stats(self, user_id: str) -> DashboardStats:
        """
        Summarise a user's learning for the dashboard.

        hoursLearned weights each course duration by its completion;
        averageProgress only counts courses the user has started.

        Args:
            user_id: Member ID

        Returns:
            DashboardStats
        """
        courses = await self.get_user_courses_with_progress(user_id)

        completed = [c for c in courses if c.isCompleted]
        enrolled = [c for c in courses if c.progress > 0 and not c.isCompleted]
        started = [c for c in courses if c.progress > 0]

        minutes = sum((c.durationMinutes or 0) * c.progress / 100 for c in courses)
        average = sum(c.progress for c in started) / len(started) if started else 0

        return DashboardStats(
            coursesEnrolled=len(enrolled),
            coursesCompleted=len(completed),
            certificatesEarned=len(completed),
            hoursLearned=round(minutes / 60, 1),
            averageProgress=math.floor(average + 0.5),
        )
