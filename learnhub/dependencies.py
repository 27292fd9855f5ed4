"""
FastAPI dependencies for LearnHub application.

Provides dependency injection for all services.
"""

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends

from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils.exceptions import ForbiddenException
from learnhub.config import settings
from learnhub.membership.member_context import MemberContext
from learnhub.repositories.base import CrudRepository
from learnhub.services.admin.admin_service import AdminService
from learnhub.services.catalog.course_service import CourseService
from learnhub.services.certificates.certificate_service import CertificateService
from learnhub.services.player.session_service import PlayerSessionService
from learnhub.services.progress.progress_service import UserProgressService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_auth_provider: Optional[AuthProvider] = None

# Learning
_progress_service: Optional[UserProgressService] = None
_course_service: Optional[CourseService] = None
_session_service: Optional[PlayerSessionService] = None
_certificate_service: Optional[CertificateService] = None

# Admin
_admin_service: Optional[AdminService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(jwt_secret: str, jwt_algorithm: str = "HS256") -> None:
    """Initialize membership token verification."""
    global _auth_provider
    _auth_provider = JWTAuth(secret=jwt_secret, algorithm=jwt_algorithm)


def init_learning_services(repository: CrudRepository, frontend_url: str) -> None:
    """Initialize catalog, progress, player and certificate services."""
    global _progress_service, _course_service, _session_service, _certificate_service

    _progress_service = UserProgressService(repository=repository)
    _course_service = CourseService(repository=repository)
    _session_service = PlayerSessionService(repository=repository)
    _certificate_service = CertificateService(repository=repository, frontend_url=frontend_url)


def init_admin_services(repository: CrudRepository) -> None:
    """Initialize admin services."""
    global _admin_service
    _admin_service = AdminService(repository=repository)


def init_all_services(
    repository: CrudRepository,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    frontend_url: str = "http://localhost:3000",
) -> None:
    """
    Initialize all services at application startup.

    Args:
        repository: Document store (MongoDB or in-memory)
        jwt_secret: Secret shared with the membership provider
        jwt_algorithm: Token signing algorithm
        frontend_url: Origin for certificate verification links
    """
    init_auth_services(jwt_secret, jwt_algorithm)
    init_learning_services(repository, frontend_url)
    init_admin_services(repository)


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get membership token verifier."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_provider


get_current_claims = create_auth_dependency(get_auth_provider)


async def require_member(
    claims: Annotated[Dict[str, Any], Depends(get_current_claims)],
) -> MemberContext:
    """Dependency that requires an authenticated member."""
    return MemberContext.from_claims(claims, settings.get_admin_member_ids())


async def require_admin(
    member: Annotated[MemberContext, Depends(require_member)],
) -> MemberContext:
    """Dependency that requires the member to be an admin."""
    if not member.is_admin:
        raise ForbiddenException("Admin access required", code="ADMIN_REQUIRED")
    return member


# ─────────────────────────────────────────────────────────────────
# Learning getters
# ─────────────────────────────────────────────────────────────────

def get_progress_service() -> UserProgressService:
    """Get progress aggregator."""
    if _progress_service is None:
        raise RuntimeError("Learning services not initialized.")
    return _progress_service


def get_course_service() -> CourseService:
    """Get course catalog service."""
    if _course_service is None:
        raise RuntimeError("Learning services not initialized.")
    return _course_service


def get_session_service() -> PlayerSessionService:
    """Get player session service."""
    if _session_service is None:
        raise RuntimeError("Learning services not initialized.")
    return _session_service


def get_certificate_service() -> CertificateService:
    """Get certificate service."""
    if _certificate_service is None:
        raise RuntimeError("Learning services not initialized.")
    return _certificate_service


# ─────────────────────────────────────────────────────────────────
# Admin getters
# ─────────────────────────────────────────────────────────────────

def get_admin_service() -> AdminService:
    """Get admin service."""
    if _admin_service is None:
        raise RuntimeError("Admin services not initialized.")
    return _admin_service
