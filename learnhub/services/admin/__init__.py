"""Admin services."""

from learnhub.services.admin.admin_service import AdminService, export_filename

__all__ = [
    "AdminService",
    "export_filename",
]
