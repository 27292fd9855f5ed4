"""
JWT token verification for membership-provider tokens.

The membership provider signs tokens with a shared secret. This provider
decodes them and returns the member claims (sub, nickname, firstName,
lastName, email, roles).

Example:
    auth = JWTAuth(secret="shared-secret")

    claims = await auth.verify_token(token)
    print(claims["sub"])  # member id
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, JWTError

from common.auth.base import AuthProvider


class JWTAuth(AuthProvider):
    """
    Shared-secret JWT verifier.

    Token issuance belongs to the membership provider; create_token only
    exists so local tooling and tests can mint tokens the same way.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key shared with the membership provider
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Lifetime of tokens minted by create_token
        """
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

    def create_token(self, member_id: str, **claims: Any) -> str:
        """Mint a signed token for a member."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": member_id,
            "exp": now + self.access_token_expire,
            "iat": now,
            **claims,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode a JWT token."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")
