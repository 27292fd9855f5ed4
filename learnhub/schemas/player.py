"""
Pydantic models for lesson player requests.
"""

from typing import Any, Dict
from pydantic import BaseModel, Field


class ScrollRequest(BaseModel):
    """Read position through the current lesson."""
    fraction: float = Field(..., allow_inf_nan=False, description="0-1, values outside are clamped")


class SelectLessonRequest(BaseModel):
    """Sidebar jump to a lesson."""
    index: int = Field(..., description="Lesson index, clamped to the lesson range")


class SubmitActivityRequest(BaseModel):
    """Answers keyed by question, item or prompt id."""
    answers: Dict[str, Any] = {}
