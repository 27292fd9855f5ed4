"""Lesson player services."""

from learnhub.services.player.reading_tracker import (
    InvalidPlayerActionError,
    LessonReadingTracker,
    PlayerState,
)
from learnhub.services.player.lesson_player import LessonPlayer
from learnhub.services.player.session_service import PlayerSessionService

__all__ = [
    "InvalidPlayerActionError",
    "LessonReadingTracker",
    "PlayerState",
    "LessonPlayer",
    "PlayerSessionService",
]
