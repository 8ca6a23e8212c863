"""LinkedIn proxy resources.

Each resource reads the member's bearer token, forwards one request to
LinkedIn through the shared :class:`~ligrowth.linkedin.client.LinkedInRestClient`
and reshapes the JSON response for the web client.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/linkedin/changelog", ChangelogResource(client))
    app.add_route("/linkedin/media/{asset_id}", MediaResource(client))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import msgspec

from ligrowth.api.auth import bearer_token
from ligrowth.changelog import (
    fetch_changelog_page,
    fetch_last_28_days_changelog,
    group_events_by_resource_name,
    summarize_by_week,
)
from ligrowth.changelog.fetcher import MAX_PAGE_SIZE
from ligrowth.linkedin.dma import enable_dma, ensure_dma_enabled
from ligrowth.linkedin.member import download_media, fetch_profile, fetch_snapshot

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from ligrowth.linkedin.client import LinkedInRestClient

__all__ = [
    "ChangelogGroupsResource",
    "ChangelogResource",
    "DmaResource",
    "MediaResource",
    "ProfileResource",
    "SnapshotResource",
]

_MEDIA_CACHE_CONTROL = ["public", "max-age=3600"]


class _LinkedInResource:
    """Base class holding the shared LinkedIn client."""

    def __init__(self, client: LinkedInRestClient) -> None:
        """Store the LinkedIn client used by the responders."""
        self._client = client


class ProfileResource(_LinkedInResource):
    """``GET /linkedin/profile`` proxies the OpenID ``userinfo`` document."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return the member profile."""
        token = bearer_token(req)
        resp.media = await fetch_profile(self._client, token)
        resp.status = HTTPStatus.OK


class ChangelogResource(_LinkedInResource):
    """``GET /linkedin/changelog`` returns one page of changelog events.

    Query parameters
    ----------------
    count
        Page size, clamped into 1..50. Defaults to 50.
    startTime
        Optional epoch-millisecond lower bound.

    """

    async def on_get(self, req: Request, resp: Response) -> None:
        """Relay LinkedIn's page, ``elements`` and ``paging`` untouched."""
        token = bearer_token(req)
        count = req.get_param_as_int("count", default=MAX_PAGE_SIZE)
        since_ms = req.get_param_as_int("startTime")
        resp.media = await fetch_changelog_page(
            self._client, token, since_ms=since_ms, count=count
        )
        resp.status = HTTPStatus.OK


class ChangelogGroupsResource(_LinkedInResource):
    """``GET /linkedin/changelog/groups`` buckets the last 28 days of events."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return events grouped by resource name with per-week counts."""
        token = bearer_token(req)
        events = await fetch_last_28_days_changelog(self._client, token)
        groups = group_events_by_resource_name(events)
        resp.media = {
            "total": len(events),
            "groups": msgspec.to_builtins(groups),
            "weeks": summarize_by_week(events),
        }
        resp.status = HTTPStatus.OK


class SnapshotResource(_LinkedInResource):
    """``GET /linkedin/snapshot`` proxies member snapshot data."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return snapshot data, optionally filtered by ``domain``."""
        token = bearer_token(req)
        domain = req.get_param("domain")
        resp.media = await fetch_snapshot(self._client, token, domain=domain)
        resp.status = HTTPStatus.OK


class DmaResource(_LinkedInResource):
    """``/linkedin/dma`` reports and enables DMA archiving."""

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return whether DMA consent is present."""
        token = bearer_token(req)
        enabled = await ensure_dma_enabled(self._client, token)
        resp.media = {"enabled": enabled}
        resp.status = HTTPStatus.OK

    async def on_post(self, req: Request, resp: Response) -> None:
        """Enable DMA archiving for the member."""
        token = bearer_token(req)
        await enable_dma(self._client, token)
        resp.media = {
            "success": True,
            "message": "DMA authorization enabled successfully",
        }
        resp.status = HTTPStatus.OK


class MediaResource(_LinkedInResource):
    """``GET /linkedin/media/{asset_id}`` streams a member media asset."""

    async def on_get(self, req: Request, resp: Response, *, asset_id: str) -> None:
        """Return the asset bytes with LinkedIn's content type."""
        token = bearer_token(req)
        media = await download_media(self._client, token, asset_id)
        resp.data = media.content
        resp.content_type = media.content_type
        resp.cache_control = _MEDIA_CACHE_CONTROL
        resp.status = HTTPStatus.OK
