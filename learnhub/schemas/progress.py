"""
Pydantic models for learner progress.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from learnhub.schemas.course import Course, Record


class UserCourseProgress(Record):
    """One learner's completion record for one course."""
    userId: str
    courseId: str
    completionPercentage: float = 0
    isCompleted: bool = False
    lastUpdatedDate: Optional[datetime] = None


class CourseWithProgress(Course):
    """Course joined with the learner's progress row."""
    progress: float = 0
    isCompleted: bool = False


class DashboardStats(BaseModel):
    """Headline numbers for the learner dashboard."""
    coursesEnrolled: int = 0
    coursesCompleted: int = 0
    certificatesEarned: int = 0
    hoursLearned: float = 0.0
    averageProgress: int = 0


class UpdateProgressRequest(BaseModel):
    """Request body for PUT /progress/courses/{course_id}."""
    completionPercentage: float = Field(..., description="Values outside 0-100 are clamped")


class DashboardResponse(BaseModel):
    stats: DashboardStats
    enrolledCourses: List[CourseWithProgress] = []
    completedCourses: List[Course] = []
