"""Partner relationship structures."""

from __future__ import annotations

import msgspec


class Partner(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A member the current user collaborates with."""

    id: str
    name: str
    email: str
    avatar_url: str
    linkedin_member_urn: str
    dma_active: bool
    created_at: str


class Partnership(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A link between two users."""

    id: str
    a_user_id: str
    b_user_id: str
    created_at: str


__all__ = ["Partner", "Partnership"]
