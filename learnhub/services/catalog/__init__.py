"""Catalog services."""

from learnhub.services.catalog.course_service import CourseService, order_lessons

__all__ = [
    "CourseService",
    "order_lessons",
]
