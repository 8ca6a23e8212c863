"""Member changelog window fetching.

LinkedIn's ``memberChangeLogs`` finder accepts a page size between 1 and 50
and rejects anything else with HTTP 400. Requested counts are clamped into
that range rather than rejected, so callers never see a page-size error from
this layer.

Usage
-----
>>> events = await fetch_changelog_window(client, token, since_ms=ts, count=20)
>>> recent = await fetch_last_28_days_changelog(client, token)

"""

from __future__ import annotations

import typing as typ

import msgspec

from ligrowth.common.time import MS_PER_DAY, epoch_ms
from ligrowth.linkedin.errors import LinkedInResponseShapeError
from ligrowth.logging import get_logger, log_info

from .models import ChangelogEvent

if typ.TYPE_CHECKING:
    from ligrowth.linkedin.client import LinkedInRestClient

logger = get_logger(__name__)

CHANGELOG_PATH = "/rest/memberChangeLogs"
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10
RECENT_WINDOW_DAYS = 28
RECENT_WINDOW_MS = RECENT_WINDOW_DAYS * MS_PER_DAY


def clamp_page_size(count: int) -> int:
    """Clamp ``count`` into ``[MIN_PAGE_SIZE, MAX_PAGE_SIZE]``."""
    return min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, count))


def build_changelog_params(
    *, since_ms: int | None = None, count: int = DEFAULT_PAGE_SIZE
) -> dict[str, str]:
    """Return the query parameters for one changelog page.

    ``since_ms`` is forwarded verbatim when truthy; ``None`` and ``0`` both
    mean "no start time".
    """
    params = {"q": "memberAndApplication", "count": str(clamp_page_size(count))}
    if since_ms:
        params["startTime"] = str(since_ms)
    return params


def _decode_elements(data: dict[str, typ.Any]) -> list[ChangelogEvent]:
    elements = data.get("elements") or []
    try:
        return msgspec.convert(elements, type=list[ChangelogEvent])
    except msgspec.ValidationError as exc:
        raise LinkedInResponseShapeError.invalid_field("elements", str(exc)) from exc


async def _fetch_page(
    client: LinkedInRestClient,
    token: str,
    *,
    since_ms: int | None,
    count: int,
) -> tuple[dict[str, typ.Any], list[ChangelogEvent]]:
    params = build_changelog_params(since_ms=since_ms, count=count)
    data = await client.get_json(CHANGELOG_PATH, token, params=params)
    events = _decode_elements(data)
    log_info(
        logger,
        "Changelog window fetched (count=%s, startTime=%s, events=%d)",
        params["count"],
        params.get("startTime", "-"),
        len(events),
    )
    return data, events


async def fetch_changelog_page(
    client: LinkedInRestClient,
    token: str,
    *,
    since_ms: int | None = None,
    count: int = DEFAULT_PAGE_SIZE,
) -> dict[str, typ.Any]:
    """Fetch one page and return LinkedIn's JSON document unchanged.

    Elements are validated like :func:`fetch_changelog_window` but every
    upstream field, ``paging`` included, is kept for relaying.
    """
    data, _ = await _fetch_page(client, token, since_ms=since_ms, count=count)
    return data


async def fetch_changelog_window(
    client: LinkedInRestClient,
    token: str,
    *,
    since_ms: int | None = None,
    count: int = DEFAULT_PAGE_SIZE,
) -> list[ChangelogEvent]:
    """Fetch one page of member changelog events.

    Parameters
    ----------
    client
        LinkedIn REST client.
    token
        Member bearer token; must be non-empty.
    since_ms
        Optional epoch-millisecond lower bound, passed through verbatim.
    count
        Requested page size, clamped into 1..50.

    Returns
    -------
    list[ChangelogEvent]
        Events in the order LinkedIn returned them; empty when the response
        has no ``elements`` field.

    Raises
    ------
    UpstreamRequestError
        If LinkedIn answers with a non-2xx status.
    LinkedInTransportError
        If LinkedIn could not be reached.
    LinkedInResponseShapeError
        If an element is not event-shaped.

    """
    _, events = await _fetch_page(client, token, since_ms=since_ms, count=count)
    return events


async def fetch_last_28_days_changelog(
    client: LinkedInRestClient,
    token: str,
    *,
    now_ms: int | None = None,
) -> list[ChangelogEvent]:
    """Fetch up to 50 events from the 28 days before ``now_ms``.

    Only the first page is requested; older or additional events are not
    paginated.
    """
    now = now_ms if now_ms is not None else epoch_ms()
    return await fetch_changelog_window(
        client,
        token,
        since_ms=now - RECENT_WINDOW_MS,
        count=MAX_PAGE_SIZE,
    )


__all__ = [
    "CHANGELOG_PATH",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "RECENT_WINDOW_MS",
    "build_changelog_params",
    "clamp_page_size",
    "fetch_changelog_page",
    "fetch_changelog_window",
    "fetch_last_28_days_changelog",
]
