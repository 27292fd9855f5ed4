"""
LearnHub application settings.

Extends the base settings with LearnHub-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """LearnHub-specific settings."""

    # ==========================================================================
    # Storage
    # ==========================================================================
    # "mongodb" for the Motor-backed repository, "memory" for local development
    CRUD_BACKEND: str = "mongodb"

    # ==========================================================================
    # Membership
    # ==========================================================================
    # Comma-separated member ids that get admin access without the "admin" role
    ADMIN_MEMBER_IDS: str = ""

    # ==========================================================================
    # Learning Settings
    # ==========================================================================
    # Minimum activity score (0-100) that counts as a pass
    ACTIVITY_PASS_THRESHOLD: float = 70.0

    # ==========================================================================
    # Branding and links
    # ==========================================================================
    PLATFORM_NAME: str = "LearnHub"

    # Frontend URL (for certificate verification links)
    FRONTEND_URL: str = "http://localhost:3000"

    def get_admin_member_ids(self) -> list:
        """Parse ADMIN_MEMBER_IDS into a list."""
        return [member_id.strip() for member_id in self.ADMIN_MEMBER_IDS.split(",") if member_id.strip()]

    def uses_memory_backend(self) -> bool:
        """Check if records are kept in process memory instead of MongoDB."""
        return self.CRUD_BACKEND.lower() == "memory"


# Global settings instance
settings = Settings()
