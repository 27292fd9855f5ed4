"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- database: Async MongoDB connection manager (Motor)
- auth: Bearer token verification for an external membership provider
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils import (
    success_response,
    error_response,
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "create_auth_dependency",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
