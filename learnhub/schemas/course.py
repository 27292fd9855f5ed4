"""
Pydantic models for courses and course content.

Records keep the field names used in the document store ("_id",
"titleEn", "orderIndex", ...). JSON-encoded blob fields stay strings here;
learnhub.services.content.blob_parser turns them into typed structures.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

CONTENT_TYPES = ("video", "text", "quiz", "assessment", "module")


class Record(BaseModel):
    """Fields every stored document carries."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    createdDate: Optional[datetime] = Field(None, alias="_createdDate")
    updatedDate: Optional[datetime] = Field(None, alias="_updatedDate")


class Course(Record):
    """A catalog course with bilingual title and description."""
    titleEn: Optional[str] = None
    titleEs: Optional[str] = None
    descriptionEn: Optional[str] = None
    descriptionEs: Optional[str] = None
    category: Optional[str] = None
    difficultyLevel: Optional[str] = None
    durationMinutes: Optional[float] = None
    instructorName: Optional[str] = None
    thumbnail: Optional[str] = None

    def localized_title(self, language: str = "en") -> str:
        if language == "es" and self.titleEs:
            return self.titleEs
        return self.titleEn or self.titleEs or ""

    def localized_description(self, language: str = "en") -> str:
        if language == "es" and self.descriptionEs:
            return self.descriptionEs
        return self.descriptionEn or self.descriptionEs or ""


class CourseContent(Record):
    """One lesson or assessment. Content without courseId is shared by all courses."""
    courseId: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    contentType: Optional[str] = None
    orderIndex: Optional[float] = None
    estimatedDurationMinutes: Optional[float] = None
    timeLimitMinutes: Optional[float] = None
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

    # JSON-encoded blobs, left untyped so a bad value cannot reject the whole record
    learningObjectives: Any = None
    keyTakeaways: Any = None
    interactiveElements: Any = None
    assessmentQuestions: Any = None
    scoringSystem: Any = None
    activityData: Any = None

    @property
    def display_order(self) -> float:
        return self.orderIndex or 0


class CourseWithLessons(BaseModel):
    """Course detail response."""
    course: Course
    lessons: List[CourseContent] = []
