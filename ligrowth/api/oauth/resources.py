"""OAuth redirect resources.

``GET /oauth/linkedin/start`` sends the browser to LinkedIn's consent page;
``GET /oauth/linkedin/callback`` exchanges the returned code and sends the
browser back to the web client with the token in the query string.
"""

from __future__ import annotations

import typing as typ

import falcon

from ligrowth.api.errors import InvalidInputError
from ligrowth.linkedin.config import OAuthFlow
from ligrowth.linkedin.oauth import (
    build_authorization_url,
    exchange_code,
    frontend_redirect_url,
)
from ligrowth.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from ligrowth.linkedin.client import LinkedInRestClient
    from ligrowth.linkedin.config import OAuthConfig

__all__ = ["OAuthCallbackResource", "OAuthStartResource"]

logger = get_logger(__name__)

_NO_CACHE = ["no-cache", "no-store", "must-revalidate"]


def _redirect(resp: Response, location: str) -> None:
    resp.status = falcon.HTTP_302
    resp.location = location


class OAuthStartResource:
    """Redirect to the LinkedIn authorization URL for ``?type=basic|dma``."""

    def __init__(self, config: OAuthConfig) -> None:
        """Store the OAuth configuration."""
        self._config = config

    async def on_get(self, req: Request, resp: Response) -> None:
        """Handle GET /oauth/linkedin/start."""
        flow = OAuthFlow.parse(req.get_param("type"))
        url = build_authorization_url(self._config, flow)
        log_info(logger, "Starting %s OAuth flow", flow.value)
        _redirect(resp, url)


class OAuthCallbackResource:
    """Exchange ``?code`` for a token and redirect to the web client."""

    def __init__(self, client: LinkedInRestClient, config: OAuthConfig) -> None:
        """Store the LinkedIn client and OAuth configuration."""
        self._client = client
        self._config = config

    async def on_get(self, req: Request, resp: Response) -> None:
        """Handle GET /oauth/linkedin/callback.

        Raises
        ------
        InvalidInputError
            If LinkedIn did not supply an authorization code.

        """
        code = req.get_param("code")
        if not code:
            msg = "No authorization code provided"
            raise InvalidInputError(msg, field="code")
        flow = OAuthFlow.parse(req.get_param("state"))
        access_token = await exchange_code(self._client, self._config, code, flow)
        _redirect(resp, frontend_redirect_url(self._config, flow, access_token))
        resp.cache_control = _NO_CACHE
        resp.set_header("Pragma", "no-cache")
        resp.set_header("Expires", "0")
