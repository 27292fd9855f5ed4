"""
FastAPI authentication dependencies.

Provides factory functions to create auth dependencies that can be
injected into route handlers. Works with any AuthProvider implementation.

Example:
    from common.auth import JWTAuth, create_auth_dependency

    auth = JWTAuth(secret="your-secret")
    get_current_claims = create_auth_dependency(lambda: auth)

    @app.get("/profile")
    async def get_profile(claims: dict = Depends(get_current_claims)):
        return {"member_id": claims["sub"]}
"""

from typing import Any, Callable, Dict, Optional
from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: Callable that returns the AuthProvider instance
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency function that verifies the token and returns its claims
    """

    async def get_current_claims(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> Dict[str, Any]:
        """
        Extract and verify the token claims from the authorization header.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        if not authorization:
            raise UnauthorizedException("Missing authorization header")

        prefix = f"{scheme} "
        if not authorization.startswith(prefix):
            raise UnauthorizedException(
                f"Invalid authorization scheme. Expected: {scheme}",
                code="INVALID_AUTH_SCHEME",
            )

        token = authorization[len(prefix) :]

        if not token:
            raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")

        auth = get_auth_provider()
        try:
            payload = await auth.verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        if not payload.get("sub"):
            raise UnauthorizedException("Token missing member ID", code="INVALID_TOKEN")

        return payload

    return get_current_claims

