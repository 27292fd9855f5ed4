"""
Abstract token verification interface.

Members sign in with an external membership provider, which issues the
bearer tokens this service receives. A provider here only has to turn a
token into its claims, so the verification strategy can be swapped
without touching route code.

Example:
    from common.auth import AuthProvider, JWTAuth

    def get_auth_provider(settings) -> AuthProvider:
        return JWTAuth(secret=settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract token verifier.

    Implement this interface for each membership provider.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a bearer token issued by the membership provider.

        Args:
            token: The token to verify

        Returns:
            Dictionary containing decoded token claims (at minimum: sub)

        Raises:
            ValueError: If token is invalid or expired
        """
        pass
