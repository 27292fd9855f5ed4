"""Membership identity."""

from learnhub.membership.member_context import MemberContext

__all__ = ["MemberContext"]
