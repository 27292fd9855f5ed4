"""Content services."""

from learnhub.services.content.notes_service import build_text_notes, notes_filename

__all__ = [
    "build_text_notes",
    "notes_filename",
]
