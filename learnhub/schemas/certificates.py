"""
Pydantic models for course completion certificates.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from learnhub.schemas.course import Course


class CertificateRecord(BaseModel):
    """A certificate earned by completing a course."""
    id: str
    course: Course
    completionDate: datetime
    certificateId: str
    learnerName: Optional[str] = None
    verified: bool = True
    shareText: str
    verifyUrl: str
