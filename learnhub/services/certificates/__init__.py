"""Certificate services."""

from learnhub.services.certificates.certificate_service import CertificateService, certificate_id

__all__ = [
    "CertificateService",
    "certificate_id",
]
