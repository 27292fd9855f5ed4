"""Shared test fixtures for LearnHub backend tests."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from learnhub.database.collections import COURSE_CONTENT, COURSES
from learnhub.repositories import InMemoryCrudRepository
from learnhub.schemas.course import CourseContent


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # find_one_and_update etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_courses():
    return [
        {
            "_id": "course-dataviz",
            "titleEn": "Advanced Data Visualization",
            "titleEs": "Visualización de Datos Avanzada",
            "descriptionEn": "Charts, dashboards and storytelling with data.",
            "category": "Data Science",
            "difficultyLevel": "Advanced",
            "durationMinutes": 240,
            "instructorName": "Priya Raman",
        },
        {
            "_id": "course-ai",
            "titleEn": "AI & Machine Learning Principles",
            "descriptionEn": "Foundations of modern machine learning.",
            "category": "AI",
            "difficultyLevel": "Intermediate",
            "durationMinutes": 300,
            "instructorName": "Marco Diaz",
        },
        {
            "_id": "course-ux",
            "titleEn": "UX/UI Design Fundamentals",
            "descriptionEn": "Design thinking and visual design.",
            "category": "Design",
            "difficultyLevel": "Beginner",
            "durationMinutes": 120,
            "instructorName": "Lena Okafor",
        },
    ]


@pytest.fixture
def sample_lessons():
    """Three dataviz lessons stored out of display order."""
    objectives = json.dumps([
        {"id": "o1", "text": "Pick the right chart"},
        {"id": "o2", "text": "Avoid misleading axes"},
    ])
    quiz = json.dumps([
        {"id": "q1", "question": "Best chart for trends?", "options": ["Pie", "Line"], "correctAnswer": 1},
        {"id": "q2", "question": "Axes may be truncated freely", "type": "true-false", "correctAnswer": False},
    ])
    return [
        {
            "_id": "lesson-2",
            "courseId": "course-dataviz",
            "title": "Interactive Charts",
            "contentType": "text",
            "orderIndex": 2,
            "estimatedDurationMinutes": 30,
        },
        {
            "_id": "lesson-1",
            "courseId": "course-dataviz",
            "title": "Visualization Principles",
            "contentType": "video",
            "orderIndex": 1,
            "estimatedDurationMinutes": 25,
            "learningObjectives": objectives,
            "assessmentQuestions": quiz,
        },
        {
            "_id": "lesson-3",
            "courseId": "course-dataviz",
            "title": "Data Storytelling",
            "contentType": "module",
            "orderIndex": 3,
            "estimatedDurationMinutes": 30,
        },
        {
            "_id": "lesson-ai-1",
            "courseId": "course-ai",
            "title": "Foundations of AI",
            "contentType": "video",
            "orderIndex": 1,
        },
    ]


@pytest.fixture
def repository(sample_courses, sample_lessons):
    return InMemoryCrudRepository(seed={
        COURSES: sample_courses,
        COURSE_CONTENT: sample_lessons,
    })


@pytest.fixture
def empty_repository():
    return InMemoryCrudRepository()


def make_lessons(count, **fields):
    """Plain lessons with no objectives or activity, in display order."""
    return [
        CourseContent.model_validate({
            "_id": f"lesson-{i}",
            "title": f"Lesson {i + 1}",
            "contentType": "text",
            "orderIndex": i + 1,
            **fields,
        })
        for i in range(count)
    ]


@pytest.fixture
def five_lessons():
    return make_lessons(5)


@pytest.fixture
def lesson_factory():
    return make_lessons
