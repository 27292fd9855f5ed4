"""
LearnHub API Routers.

All routers are imported here for easy access.
"""

from learnhub.routers.courses import router as courses_router
from learnhub.routers.progress import router as progress_router
from learnhub.routers.player import router as player_router
from learnhub.routers.certificates import router as certificates_router
from learnhub.routers.admin import router as admin_router

__all__ = [
    "courses_router",
    "progress_router",
    "player_router",
    "certificates_router",
    "admin_router",
]
