"""
Certificate records for completed courses.

A certificate exists for every completed progress row. Its id is derived
from the learner, the course and the completion time, so the same
completion always yields the same id and can be verified later.
"""

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from learnhub.database.collections import COURSES, USER_COURSE_PROGRESS
from learnhub.membership.member_context import MemberContext
from learnhub.repositories.base import CrudRepository
from learnhub.schemas.certificates import CertificateRecord
from learnhub.schemas.course import Course
from learnhub.schemas.progress import UserCourseProgress

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def _as_utc(moment: datetime) -> datetime:
    # MongoDB hands back naive UTC datetimes
    return moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment.astimezone(timezone.utc)


def certificate_id(user_id: str, course_id: str, completed_at: datetime) -> str:
    """CERT-{base36 completion millis}-{5 hex of sha1(user:course)}, upper-cased."""
    millis = (_as_utc(completed_at) - _EPOCH) // timedelta(milliseconds=1)
    digest = hashlib.sha1(f"{user_id}:{course_id}".encode("utf-8")).hexdigest()[:5]
    return f"CERT-{to_base36(millis)}-{digest}".upper()


def completion_date(progress: UserCourseProgress) -> datetime:
    """When a completed row was last written; older rows may only carry _updatedDate."""
    return _as_utc(progress.lastUpdatedDate or progress.updatedDate or _EPOCH)


class CertificateService:
    """Lists and verifies course certificates."""

    def __init__(self, repository: CrudRepository, frontend_url: str):
        """
        Initialize CertificateService.

        Args:
            repository: Document store holding courses and progress
            frontend_url: Origin used to build verification links
        """
        self._repository = repository
        self._frontend_url = frontend_url.rstrip("/")

    def verify_url(self, cert_id: str) -> str:
        return f"{self._frontend_url}/certificates/verify/{cert_id}"

    async def list_certificates(
        self,
        member: MemberContext,
        search: Optional[str] = None,
    ) -> List[CertificateRecord]:
        """
        Certificates earned by a member.

        Args:
            member: Authenticated member
            search: Case-insensitive match on course title, category or certificate id

        Returns:
            One record per completed course
        """
        rows = await self._repository.get_all(
            USER_COURSE_PROGRESS,
            {"userId": member.member_id, "isCompleted": True},
        )
        courses = {c["_id"]: Course.model_validate(c) for c in await self._repository.get_all(COURSES)}

        certificates = []
        for row in rows:
            progress = UserCourseProgress.model_validate(row)
            course = courses.get(progress.courseId)
            if course is None:
                continue
            certificates.append(self._build_record(progress, course, member.display_name))

        if search and search.strip():
            term = search.strip().lower()
            certificates = [
                cert for cert in certificates
                if term in (cert.course.titleEn or "").lower()
                or term in (cert.course.category or "").lower()
                or term in cert.certificateId.lower()
            ]

        return certificates

    async def verify_certificate(self, cert_id: str) -> Optional[CertificateRecord]:
        """
        Look up a certificate by id across all completed courses.

        Args:
            cert_id: Certificate id (case-insensitive)

        Returns:
            The matching record without learner name, or None
        """
        wanted = cert_id.strip().upper()
        rows = await self._repository.get_all(USER_COURSE_PROGRESS, {"isCompleted": True})

        for row in rows:
            progress = UserCourseProgress.model_validate(row)
            if certificate_id(progress.userId, progress.courseId, completion_date(progress)) != wanted:
                continue

            record = await self._repository.get_by_id(COURSES, progress.courseId)
            if record is None:
                break
            return self._build_record(progress, Course.model_validate(record), learner_name=None)

        logger.info(f"Certificate verification failed: {wanted}")
        return None

    def _build_record(
        self,
        progress: UserCourseProgress,
        course: Course,
        learner_name: Optional[str],
    ) -> CertificateRecord:
        completed_at = completion_date(progress)
        cert_id = certificate_id(progress.userId, progress.courseId, completed_at)
        return CertificateRecord(
            id=f"cert-{course.id}",
            course=course,
            completionDate=completed_at,
            certificateId=cert_id,
            learnerName=learner_name,
            shareText=f'I just completed "{course.titleEn or ""}" and earned a verified certificate! 🎓',
            verifyUrl=self.verify_url(cert_id),
        )
