"""Partner relationship operations backed by fixed sample data.

Nothing here is persisted. The user id resolver accepts any non-empty
authorization header and returns the same placeholder id.
"""

from __future__ import annotations

import datetime as dt

from ligrowth.common.time import epoch_ms, utcnow
from ligrowth.logging import get_logger, log_info

from .errors import PartnerIdRequiredError
from .models import Partner, Partnership

logger = get_logger(__name__)

PLACEHOLDER_USER_ID = "user-123"

_AVATAR_QUERY = "auto=compress&cs=tinysrgb&w=100&h=100&dpr=1"


def _isoformat(moment: dt.datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def user_id_from_token(authorization: str | None) -> str | None:
    """Return the user id for an authorization header, or ``None``."""
    if not authorization or not authorization.strip():
        return None
    return PLACEHOLDER_USER_ID


def list_partners(*, now: dt.datetime | None = None) -> list[Partner]:
    """Return the partners of the current user."""
    created_at = _isoformat(now or utcnow())
    return [
        Partner(
            id="partner-1",
            name="Sarah Johnson",
            email="sarah@example.com",
            avatar_url=(
                "https://images.pexels.com/photos/415829/pexels-photo-415829.jpeg?"
                + _AVATAR_QUERY
            ),
            linkedin_member_urn="urn:li:person:sarah123",
            dma_active=True,
            created_at=created_at,
        ),
        Partner(
            id="partner-2",
            name="Michael Chen",
            email="michael@example.com",
            avatar_url=(
                "https://images.pexels.com/photos/1222271/pexels-photo-1222271.jpeg?"
                + _AVATAR_QUERY
            ),
            linkedin_member_urn="urn:li:person:michael456",
            dma_active=True,
            created_at=created_at,
        ),
    ]


def add_partner(
    user_id: str, partner_id: str | None, *, now: dt.datetime | None = None
) -> Partnership:
    """Create a partnership between ``user_id`` and ``partner_id``.

    Raises
    ------
    PartnerIdRequiredError
        If ``partner_id`` is empty.

    """
    if not partner_id:
        raise PartnerIdRequiredError
    moment = now or utcnow()
    partnership = Partnership(
        id=f"partnership-{epoch_ms(moment)}",
        a_user_id=user_id,
        b_user_id=partner_id,
        created_at=_isoformat(moment),
    )
    log_info(logger, "Partnership %s created for %s", partnership.id, user_id)
    return partnership


def remove_partner(user_id: str, partner_id: str | None) -> None:
    """Remove the partnership between ``user_id`` and ``partner_id``.

    Raises
    ------
    PartnerIdRequiredError
        If ``partner_id`` is empty.

    """
    if not partner_id:
        raise PartnerIdRequiredError
    log_info(logger, "Partner %s removed for %s", partner_id, user_id)


__all__ = [
    "PLACEHOLDER_USER_ID",
    "add_partner",
    "list_partners",
    "remove_partner",
    "user_id_from_token",
]
