"""
FastAPI router for course certificates.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils import NotFoundException, list_response, success_response
from learnhub.dependencies import get_certificate_service, require_member
from learnhub.membership.member_context import MemberContext
from learnhub.services.certificates.certificate_service import CertificateService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/certificates", tags=["certificates"])


@router.get("")
async def list_certificates(
    member: Annotated[MemberContext, Depends(require_member)],
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
    search: Optional[str] = Query(None),
):
    """List the member's certificates."""
    certificates = await certificate_service.list_certificates(member, search=search)
    return list_response([c.model_dump(mode="json", by_alias=True) for c in certificates])


@router.get("/verify/{certificate_id}")
async def verify_certificate(
    certificate_id: str,
    certificate_service: Annotated[CertificateService, Depends(get_certificate_service)],
):
    """Publicly verify a certificate id."""
    certificate = await certificate_service.verify_certificate(certificate_id)
    if certificate is None:
        raise NotFoundException("Certificate not found", code="CERTIFICATE_NOT_FOUND")
    return success_response(certificate.model_dump(mode="json", by_alias=True), message="Certificate verified")
