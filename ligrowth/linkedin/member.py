"""Member profile, snapshot and media lookups."""

from __future__ import annotations

import typing as typ
import urllib.parse

from ligrowth.logging import get_logger, log_info

from .errors import InvalidAssetIdError, InvalidSnapshotDomainError

if typ.TYPE_CHECKING:
    from .client import LinkedInRestClient, MediaPayload

logger = get_logger(__name__)

PROFILE_PATH = "/v2/userinfo"
SNAPSHOT_PATH = "/rest/memberSnapshotData"
MEDIA_DOWNLOAD_PATH = "/mediaDownload"

SNAPSHOT_DOMAINS: tuple[str, ...] = (
    "PROFILE",
    "CONNECTIONS",
    "MEMBER_SHARE_INFO",
    "ALL_COMMENTS",
    "ALL_LIKES",
    "SKILLS",
    "POSITIONS",
    "EDUCATION",
)

_ASSET_URN_PREFIX = "urn:li:digitalmediaAsset:"


async def fetch_profile(client: LinkedInRestClient, token: str) -> dict[str, typ.Any]:
    """Return the OpenID ``userinfo`` document for the member."""
    return await client.get_json(PROFILE_PATH, token)


def validate_snapshot_domain(domain: str | None) -> str | None:
    """Return ``domain`` unchanged when it is empty or a known snapshot domain.

    Raises
    ------
    InvalidSnapshotDomainError
        If ``domain`` is not one of :data:`SNAPSHOT_DOMAINS`.

    """
    if domain and domain not in SNAPSHOT_DOMAINS:
        raise InvalidSnapshotDomainError(domain, SNAPSHOT_DOMAINS)
    return domain or None


async def fetch_snapshot(
    client: LinkedInRestClient,
    token: str,
    *,
    domain: str | None = None,
) -> dict[str, typ.Any]:
    """Return member snapshot data, optionally restricted to one domain."""
    checked = validate_snapshot_domain(domain)
    params: dict[str, str] = {"q": "criteria"}
    if checked is not None:
        params["domain"] = checked
    data = await client.get_json(SNAPSHOT_PATH, token, params=params)
    elements = data.get("elements")
    log_info(
        logger,
        "Snapshot fetched (domain=%s, elements=%d)",
        checked or "ALL",
        len(elements) if isinstance(elements, list) else 0,
    )
    return data


def clean_asset_id(asset_id: str) -> str:
    """Strip the digital media asset URN prefix from ``asset_id``.

    Raises
    ------
    InvalidAssetIdError
        If the id is empty or still contains ``:`` after stripping.

    """
    if not asset_id:
        raise InvalidAssetIdError.missing()
    cleaned = asset_id.replace(_ASSET_URN_PREFIX, "")
    if not cleaned:
        raise InvalidAssetIdError.missing()
    if ":" in cleaned:
        raise InvalidAssetIdError.still_urn(asset_id)
    return cleaned


async def download_media(
    client: LinkedInRestClient, token: str, asset_id: str
) -> MediaPayload:
    """Download the binary content of a member media asset."""
    cleaned = clean_asset_id(asset_id)
    path = f"{MEDIA_DOWNLOAD_PATH}/{urllib.parse.quote(cleaned, safe='')}"
    media = await client.get_bytes(path, token)
    log_info(
        logger,
        "Fetched media %s: %d bytes, type %s",
        cleaned,
        len(media.content),
        media.content_type,
    )
    return media


__all__ = [
    "SNAPSHOT_DOMAINS",
    "clean_asset_id",
    "download_media",
    "fetch_profile",
    "fetch_snapshot",
    "validate_snapshot_domain",
]
