"""Unit tests for membership token verification and MemberContext."""

import pytest

from common.auth import JWTAuth, create_auth_dependency
from common.utils import UnauthorizedException
from learnhub.membership import MemberContext

SECRET = "test-secret"


@pytest.fixture
def auth():
    return JWTAuth(secret=SECRET)


@pytest.fixture
def get_claims(auth):
    return create_auth_dependency(lambda: auth)


# ─────────────────────────────────────────────────────────────────
# JWTAuth
# ─────────────────────────────────────────────────────────────────


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_round_trip(self, auth):
        token = auth.create_token("member-1", nickname="Sam", roles=["admin"])

        claims = await auth.verify_token(token)

        assert claims["sub"] == "member-1"
        assert claims["roles"] == ["admin"]

    @pytest.mark.asyncio
    async def test_wrong_secret(self, auth):
        token = JWTAuth(secret="other").create_token("member-1")
        with pytest.raises(ValueError):
            await auth.verify_token(token)

    @pytest.mark.asyncio
    async def test_expired(self):
        auth = JWTAuth(secret=SECRET, access_token_expire_minutes=-1)
        with pytest.raises(ValueError):
            await auth.verify_token(auth.create_token("member-1"))


# ─────────────────────────────────────────────────────────────────
# create_auth_dependency
# ─────────────────────────────────────────────────────────────────


class TestAuthDependency:
    @pytest.mark.asyncio
    async def test_valid_header(self, auth, get_claims):
        claims = await get_claims(f"Bearer {auth.create_token('member-1')}")
        assert claims["sub"] == "member-1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header, code", [
        (None, "UNAUTHORIZED"),
        ("Token abc", "INVALID_AUTH_SCHEME"),
        ("Bearer ", "EMPTY_TOKEN"),
        ("Bearer not-a-jwt", "INVALID_TOKEN"),
    ])
    async def test_rejected_headers(self, get_claims, header, code):
        with pytest.raises(UnauthorizedException) as exc:
            await get_claims(header)
        assert exc.value.code == code
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_token_without_subject(self, auth, get_claims):
        with pytest.raises(UnauthorizedException):
            await get_claims(f"Bearer {auth.create_token('')}")


# ─────────────────────────────────────────────────────────────────
# MemberContext
# ─────────────────────────────────────────────────────────────────


class TestMemberContext:
    def test_display_name_fallbacks(self):
        assert MemberContext.from_claims({"sub": "m", "nickname": "Sam", "firstName": "S"}).display_name == "Sam"
        assert MemberContext.from_claims({"sub": "m", "firstName": "Ada", "lastName": "Lovelace"}).display_name == "Ada Lovelace"
        assert MemberContext.from_claims({"sub": "m", "lastName": "Lovelace"}).display_name == "Lovelace"
        assert MemberContext.from_claims({"sub": "m"}).display_name == "Learner"
        assert MemberContext().display_name == "Learner"

    def test_admin_by_role_or_listed_id(self):
        assert MemberContext.from_claims({"sub": "m", "roles": ["admin"]}).is_admin is True
        assert MemberContext.from_claims({"sub": "m"}, admin_member_ids=["m"]).is_admin is True
        assert MemberContext.from_claims({"sub": "m"}, admin_member_ids=["x"]).is_admin is False

    def test_anonymous(self):
        member = MemberContext()
        assert member.member_id is None
        assert member.is_admin is False
        assert member.to_dict()["isAuthenticated"] is False

    def test_to_dict(self):
        data = MemberContext.from_claims({"sub": "m", "nickname": "Sam"}).to_dict()
        assert data["member"]["_id"] == "m"
        assert data["isAuthenticated"] is True
        assert data["isLoading"] is False
        assert data["displayName"] == "Sam"
