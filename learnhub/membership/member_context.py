"""
Member identity read from the external membership provider.

The provider exposes {member, isAuthenticated, isLoading}; this service
only ever reads that shape from verified token claims.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_DISPLAY_NAME = "Learner"


@dataclass
class MemberContext:
    member: Optional[Dict[str, Any]] = None
    is_authenticated: bool = False
    is_loading: bool = False
    admin_member_ids: Tuple[str, ...] = field(default=(), repr=False)

    @classmethod
    def from_claims(cls, claims: Dict[str, Any], admin_member_ids: Iterable[str] = ()) -> "MemberContext":
        """Build an authenticated context from verified token claims."""
        member = {
            "_id": claims["sub"],
            "nickname": claims.get("nickname"),
            "firstName": claims.get("firstName"),
            "lastName": claims.get("lastName"),
            "email": claims.get("email"),
            "roles": list(claims.get("roles") or []),
        }
        return cls(
            member=member,
            is_authenticated=True,
            admin_member_ids=tuple(admin_member_ids),
        )

    @property
    def member_id(self) -> Optional[str]:
        return self.member["_id"] if self.member else None

    @property
    def display_name(self) -> str:
        """Nickname, else "first last", else "Learner"."""
        if not self.member:
            return DEFAULT_DISPLAY_NAME
        if self.member.get("nickname"):
            return self.member["nickname"]
        full_name = f"{self.member.get('firstName') or ''} {self.member.get('lastName') or ''}".strip()
        return full_name or DEFAULT_DISPLAY_NAME

    @property
    def is_admin(self) -> bool:
        if not self.is_authenticated or not self.member:
            return False
        return "admin" in self.member["roles"] or self.member_id in self.admin_member_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "member": self.member,
            "isAuthenticated": self.is_authenticated,
            "isLoading": self.is_loading,
            "displayName": self.display_name,
            "isAdmin": self.is_admin,
        }
