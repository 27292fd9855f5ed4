"""Progress services."""

from learnhub.services.progress.progress_service import UserProgressService, clamp_percentage

__all__ = [
    "UserProgressService",
    "clamp_percentage",
]
