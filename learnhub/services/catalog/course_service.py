"""
Course catalog service.

Browsing, filtering and lesson ordering for courses.
"""

import logging
from typing import Dict, List, Optional

from common.utils.exceptions import NotFoundException
from learnhub.database.collections import COURSE_CONTENT, COURSES
from learnhub.repositories.base import CrudRepository
from learnhub.schemas.course import Course, CourseContent, CourseWithLessons

logger = logging.getLogger(__name__)

ALL = "all"


def order_lessons(contents: List[CourseContent]) -> List[CourseContent]:
    """Sort by orderIndex (missing counts as 0); ties keep their stored order."""
    return sorted(contents, key=lambda content: content.display_order)


class CourseService:
    """Read access to courses and their lessons."""

    def __init__(self, repository: CrudRepository):
        """
        Initialize CourseService.

        Args:
            repository: Document store holding courses and content
        """
        self._repository = repository

    async def list_courses(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> List[Course]:
        """
        List courses, optionally filtered.

        Args:
            search: Case-insensitive match on English title, English description or instructor
            category: Exact category, or "all"
            difficulty: Exact difficulty level, or "all"

        Returns:
            Matching courses in catalog order
        """
        courses = [Course.model_validate(c) for c in await self._repository.get_all(COURSES)]

        if search and search.strip():
            term = search.strip().lower()
            courses = [
                c for c in courses
                if any(term in (value or "").lower() for value in (c.titleEn, c.descriptionEn, c.instructorName))
            ]

        if category and category != ALL:
            courses = [c for c in courses if c.category == category]

        if difficulty and difficulty != ALL:
            courses = [c for c in courses if c.difficultyLevel == difficulty]

        return courses

    async def get_facets(self) -> Dict[str, List[str]]:
        """Distinct non-empty categories and difficulty levels, in first-seen order."""
        courses = [Course.model_validate(c) for c in await self._repository.get_all(COURSES)]
        return {
            "categories": list(dict.fromkeys(c.category for c in courses if c.category)),
            "difficultyLevels": list(dict.fromkeys(c.difficultyLevel for c in courses if c.difficultyLevel)),
        }

    async def get_course(self, course_id: str) -> Course:
        """
        Get a course by ID.

        Raises:
            NotFoundException: If the course does not exist
        """
        record = await self._repository.get_by_id(COURSES, course_id)
        if record is None:
            raise NotFoundException("Course not found", code="COURSE_NOT_FOUND")
        return Course.model_validate(record)

    async def get_course_lessons(self, course_id: str) -> List[CourseContent]:
        """
        Lessons for a course in display order.

        Includes content linked to the course and shared content with no
        courseId.
        """
        contents = [
            CourseContent.model_validate(c)
            for c in await self._repository.get_all(COURSE_CONTENT)
            if c.get("courseId") in (None, "", course_id)
        ]
        return order_lessons(contents)

    async def get_course_detail(self, course_id: str) -> CourseWithLessons:
        course = await self.get_course(course_id)
        return CourseWithLessons(course=course, lessons=await self.get_course_lessons(course_id))

    async def get_lesson(self, content_id: str) -> CourseContent:
        """
        Get a single content item.

        Raises:
            NotFoundException: If the content does not exist
        """
        record = await self._repository.get_by_id(COURSE_CONTENT, content_id)
        if record is None:
            raise NotFoundException("Lesson not found", code="CONTENT_NOT_FOUND")
        return CourseContent.model_validate(record)
