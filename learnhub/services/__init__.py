"""
LearnHub Services.

All service classes organized by feature.
"""

# Catalog services
from learnhub.services.catalog.course_service import CourseService

# Progress services
from learnhub.services.progress.progress_service import UserProgressService

# Player services
from learnhub.services.player.lesson_player import LessonPlayer
from learnhub.services.player.reading_tracker import LessonReadingTracker
from learnhub.services.player.session_service import PlayerSessionService

# Certificate services
from learnhub.services.certificates.certificate_service import CertificateService

# Admin services
from learnhub.services.admin.admin_service import AdminService

__all__ = [
    "CourseService",
    "UserProgressService",
    "LessonPlayer",
    "LessonReadingTracker",
    "PlayerSessionService",
    "CertificateService",
    "AdminService",
]
