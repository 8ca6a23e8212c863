"""Partner relationships (sample data only)."""

from __future__ import annotations

from .errors import PartnerIdRequiredError
from .models import Partner, Partnership
from .partners import add_partner, list_partners, remove_partner, user_id_from_token

__all__ = [
    "Partner",
    "PartnerIdRequiredError",
    "Partnership",
    "add_partner",
    "list_partners",
    "remove_partner",
    "user_id_from_token",
]
