"""LinkedIn OAuth authorization-code helpers.

Token exchange is a single POST: no refresh, retry or revocation.
"""

from __future__ import annotations

import typing as typ
import urllib.parse

from ligrowth.logging import get_logger, log_info, log_warning

from .errors import LinkedInResponseShapeError, OAuthExchangeError

if typ.TYPE_CHECKING:
    from .client import LinkedInRestClient
    from .config import OAuthConfig, OAuthFlow

logger = get_logger(__name__)


def build_authorization_url(config: OAuthConfig, flow: OAuthFlow) -> str:
    """Return the LinkedIn authorization URL that starts ``flow``.

    The flow name travels in ``state`` so the callback can pick the matching
    client credentials.

    Raises
    ------
    OAuthConfigError
        If no client id is configured for ``flow``.

    """
    query = urllib.parse.urlencode(
        {
            "response_type": "code",
            "client_id": config.client_id_for(flow),
            "redirect_uri": config.redirect_uri,
            "scope": flow.scope,
            "state": flow.value,
        },
        quote_via=urllib.parse.quote,
    )
    return f"{config.authorization_url}?{query}"


async def exchange_code(
    client: LinkedInRestClient,
    config: OAuthConfig,
    code: str,
    flow: OAuthFlow,
) -> str:
    """Exchange an authorization ``code`` for an access token.

    Raises
    ------
    OAuthConfigError
        If the flow's client credentials are not configured.
    OAuthExchangeError
        If LinkedIn reports an ``error`` in the token response.
    LinkedInResponseShapeError
        If the response carries no ``access_token``.

    """
    client_id, client_secret = config.credentials_for(flow)
    payload = await client.post_form(
        config.token_url,
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.redirect_uri,
            "client_id": client_id,
            "client_secret": client_secret,
        },
    )
    if payload.get("error"):
        log_warning(logger, "OAuth token exchange rejected for flow %s", flow.value)
        raise OAuthExchangeError.from_payload(payload)

    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise LinkedInResponseShapeError.invalid_field(
            "access_token", "missing from token response"
        )
    log_info(logger, "OAuth token issued for flow %s", flow.value)
    return access_token


def frontend_redirect_url(
    config: OAuthConfig, flow: OAuthFlow, access_token: str
) -> str:
    """Return the web client URL that receives ``access_token``."""
    query = urllib.parse.urlencode({flow.token_param: access_token})
    return f"{config.frontend_url}/?{query}"


__all__ = ["build_authorization_url", "exchange_code", "frontend_redirect_url"]
