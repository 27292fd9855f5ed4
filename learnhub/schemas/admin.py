"""
Pydantic models for admin course and content management.
"""

from typing import Optional
from pydantic import BaseModel, Field


class CreateCourseRequest(BaseModel):
    """Request body for creating a course."""
    titleEn: str = Field(..., min_length=1, max_length=500)
    titleEs: Optional[str] = Field(None, max_length=500)
    descriptionEn: Optional[str] = None
    descriptionEs: Optional[str] = None
    category: Optional[str] = None
    difficultyLevel: Optional[str] = None
    durationMinutes: Optional[float] = Field(None, ge=0)
    instructorName: Optional[str] = None
    thumbnail: Optional[str] = None


class UpdateCourseRequest(BaseModel):
    """Request body for updating a course. Omitted fields are left unchanged."""
    titleEn: Optional[str] = Field(None, min_length=1, max_length=500)
    titleEs: Optional[str] = Field(None, max_length=500)
    descriptionEn: Optional[str] = None
    descriptionEs: Optional[str] = None
    category: Optional[str] = None
    difficultyLevel: Optional[str] = None
    durationMinutes: Optional[float] = Field(None, ge=0)
    instructorName: Optional[str] = None
    thumbnail: Optional[str] = None


class ContentFields(BaseModel):
    courseId: Optional[str] = None
    description: Optional[str] = None
    orderIndex: Optional[float] = None
    estimatedDurationMinutes: Optional[float] = Field(None, ge=0)
    timeLimitMinutes: Optional[float] = Field(None, ge=0)
    videoLectureUrl: Optional[str] = None
    contentUrl: Optional[str] = None
    textContent: Optional[str] = None
    moduleContent: Optional[str] = None
    thumbnailImage: Optional[str] = None
    downloadableNotes: Optional[str] = None
    captionsHindi: Optional[str] = None
    captionsTamil: Optional[str] = None
    captionsTelugu: Optional[str] = None
    activityType: Optional[str] = None
    learningObjectives: Optional[str] = Field(None, description="JSON list of {id, text}")
    keyTakeaways: Optional[str] = Field(None, description="JSON list of {id, text, icon}")
    interactiveElements: Optional[str] = Field(None, description="JSON list of {id, type, content, position, title}")
    assessmentQuestions: Optional[str] = Field(None, description="JSON list of quiz questions")
    scoringSystem: Optional[str] = None
    activityData: Optional[str] = Field(None, description="JSON activity object")


class CreateContentRequest(ContentFields):
    """Request body for creating course content."""
    title: str = Field(..., min_length=1, max_length=500)
    contentType: str = Field(..., description="video | text | quiz | assessment | module")


class UpdateContentRequest(ContentFields):
    """Request body for updating course content. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    contentType: Optional[str] = Field(None, description="video | text | quiz | assessment | module")
