"""Data Portability (DMA) archiving helpers."""

from __future__ import annotations

import typing as typ

from ligrowth.logging import get_logger, log_exception, log_info

from .errors import LinkedInError

if typ.TYPE_CHECKING:
    from .client import LinkedInRestClient

logger = get_logger(__name__)

MEMBER_AUTHORIZATIONS_PATH = "/rest/memberAuthorizations"


async def ensure_dma_enabled(client: LinkedInRestClient, token: str) -> bool:
    """Return whether the member has granted DMA consent.

    Consent is present when the member authorization finder returns at least
    one element carrying ``regulatedAt``. Upstream failures are logged and
    reported as ``False``.
    """
    try:
        finder = await client.get_json(
            MEMBER_AUTHORIZATIONS_PATH, token, params={"q": "memberAndApplication"}
        )
    except LinkedInError as exc:
        log_exception(logger, "Error checking DMA enablement", exc)
        return False

    elements = finder.get("elements")
    if not isinstance(elements, list) or not elements:
        return False
    return any(
        isinstance(element, dict) and element.get("regulatedAt")
        for element in elements
    )


async def enable_dma(client: LinkedInRestClient, token: str) -> None:
    """Enable archiving for the member.

    LinkedIn expects an empty JSON object as the body. Failures propagate.
    """
    await client.post_json(MEMBER_AUTHORIZATIONS_PATH, token, {})
    log_info(logger, "DMA authorization enabled")


__all__ = ["MEMBER_AUTHORIZATIONS_PATH", "enable_dma", "ensure_dma_enabled"]
