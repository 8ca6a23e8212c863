"""Partner relationship resource backed by sample data."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import msgspec

from ligrowth.api.errors import MissingCredentialError
from ligrowth.synergy import (
    add_partner,
    list_partners,
    remove_partner,
    user_id_from_token,
)

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["PartnersResource"]


def _resolve_user(req: Request) -> str:
    user_id = user_id_from_token(req.get_header("Authorization"))
    if user_id is None:
        raise MissingCredentialError
    return user_id


async def _partner_id(req: Request) -> str | None:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        return None
    partner_id = body.get("partnerId")
    return partner_id if isinstance(partner_id, str) else None


class PartnersResource:
    """``/synergy/partners``: list, add and remove partners."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return the current user's partners."""
        _resolve_user(req)
        resp.media = {"partners": msgspec.to_builtins(list_partners())}
        resp.status = HTTPStatus.OK

    async def on_post(self, req: Request, resp: Response) -> None:
        """Create a partnership with ``partnerId`` from the JSON body."""
        user_id = _resolve_user(req)
        partnership = add_partner(user_id, await _partner_id(req))
        resp.media = {
            "success": True,
            "partnership": msgspec.to_builtins(partnership),
            "message": "Partner added successfully",
        }
        resp.status = HTTPStatus.CREATED

    async def on_delete(self, req: Request, resp: Response) -> None:
        """Remove the partnership with ``partnerId`` from the JSON body."""
        user_id = _resolve_user(req)
        remove_partner(user_id, await _partner_id(req))
        resp.media = {"success": True, "message": "Partner removed successfully"}
        resp.status = HTTPStatus.OK
