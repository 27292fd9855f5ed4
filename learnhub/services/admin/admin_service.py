"""
Admin management of courses and course content.

Create/update/delete for both collections plus a full JSON export.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from common.utils.exceptions import NotFoundException, ValidationException
from learnhub.database.collections import COURSE_CONTENT, COURSES
from learnhub.repositories.base import CrudRepository
from learnhub.schemas.course import CONTENT_TYPES, Course, CourseContent

logger = logging.getLogger(__name__)


def export_filename(export_date: datetime) -> str:
    return f"learnhub-data-{export_date.strftime('%Y-%m-%d')}.json"


class AdminService:
    """
    Course and content CRUD for administrators.
    """

    def __init__(self, repository: CrudRepository):
        """
        Initialize AdminService.

        Args:
            repository: Document store holding courses and content
        """
        self._repository = repository

    # ─────────────────────────────────────────────────────────────────
    # Courses
    # ─────────────────────────────────────────────────────────────────

    async def list_courses(self) -> List[Course]:
        return [Course.model_validate(c) for c in await self._repository.get_all(COURSES)]

    async def create_course(self, data: Dict[str, Any]) -> Course:
        """
        Create a course.

        Args:
            data: Course fields

        Returns:
            Created course
        """
        record = await self._repository.create(COURSES, data)
        logger.info(f"Created course: {record.get('titleEn', 'Untitled')}")
        return Course.model_validate(record)

    async def update_course(self, course_id: str, data: Dict[str, Any]) -> Course:
        """
        Update a course.

        Raises:
            NotFoundException: If the course does not exist
        """
        await self._require(COURSES, course_id, "COURSE_NOT_FOUND")
        record = await self._repository.update(COURSES, {**data, "_id": course_id})
        logger.info(f"Updated course: {course_id}")
        return Course.model_validate(record)

    async def delete_course(self, course_id: str) -> None:
        if not await self._repository.delete(COURSES, course_id):
            raise NotFoundException("Course not found", code="COURSE_NOT_FOUND")
        logger.info(f"Deleted course: {course_id}")

    # ─────────────────────────────────────────────────────────────────
    # Content
    # ─────────────────────────────────────────────────────────────────

    async def list_content(self, course_id: Optional[str] = None) -> List[CourseContent]:
        filters = {"courseId": course_id} if course_id else None
        return [CourseContent.model_validate(c) for c in await self._repository.get_all(COURSE_CONTENT, filters)]

    async def create_content(self, data: Dict[str, Any]) -> CourseContent:
        """
        Create a content item.

        Args:
            data: Content fields

        Returns:
            Created content item

        Raises:
            ValidationException: If contentType is not supported
        """
        self._validate_content_type(data.get("contentType"))
        record = await self._repository.create(COURSE_CONTENT, data)
        logger.info(f"Created content item: {record.get('title', 'Untitled')}")
        return CourseContent.model_validate(record)

    async def update_content(self, content_id: str, data: Dict[str, Any]) -> CourseContent:
        """
        Update a content item.

        Raises:
            NotFoundException: If the content does not exist
            ValidationException: If contentType is not supported
        """
        if "contentType" in data:
            self._validate_content_type(data["contentType"])
        await self._require(COURSE_CONTENT, content_id, "CONTENT_NOT_FOUND")

        record = await self._repository.update(COURSE_CONTENT, {**data, "_id": content_id})
        logger.info(f"Updated content item: {content_id}")
        return CourseContent.model_validate(record)

    async def delete_content(self, content_id: str) -> None:
        if not await self._repository.delete(COURSE_CONTENT, content_id):
            raise NotFoundException("Content not found", code="CONTENT_NOT_FOUND")
        logger.info(f"Deleted content item: {content_id}")

    # ─────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────

    async def export_data(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Export every course and content item.

        Returns:
            Dict with courses, courseContent, exportDate and the download filename
        """
        now = now or datetime.now(timezone.utc)
        courses = await self.list_courses()
        contents = await self.list_content()

        logger.info(f"Exported {len(courses)} courses and {len(contents)} content items")
        return {
            "courses": [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in courses],
            "courseContent": [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in contents],
            "exportDate": now.isoformat(),
            "filename": export_filename(now),
        }

    @staticmethod
    def _validate_content_type(content_type: Optional[str]) -> None:
        if content_type not in CONTENT_TYPES:
            raise ValidationException(
                message=f"Invalid content type. Must be one of: {', '.join(CONTENT_TYPES)}",
                code="INVALID_CONTENT_TYPE",
            )

    async def _require(self, collection: str, record_id: str, code: str) -> None:
        if await self._repository.get_by_id(collection, record_id) is None:
            raise NotFoundException("Record not found", code=code)
