"""Configuration for the LinkedIn REST client and OAuth flows.

Usage
-----
Load both configurations from the environment:

>>> api_config = LinkedInConfig.from_env()
>>> oauth_config = OAuthConfig.from_env()

"""

from __future__ import annotations

import dataclasses
import enum
import os

from .errors import LinkedInConfigError, OAuthConfigError

_DEFAULT_API_BASE = "https://api.linkedin.com"
_DEFAULT_API_VERSION = "202312"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "LinkedInGrowth/1.0"
_DEFAULT_AUTHORIZATION_URL = "https://www.linkedin.com/oauth/v2/authorization"
_DEFAULT_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
_DEFAULT_PUBLIC_URL = "http://localhost:8080"
_CALLBACK_PATH = "/oauth/linkedin/callback"


class OAuthFlow(enum.StrEnum):
    """LinkedIn OAuth applications the service can authorize against."""

    BASIC = "basic"
    DMA = "dma"

    @property
    def scope(self) -> str:
        """Return the space-separated scopes requested for this flow."""
        if self is OAuthFlow.DMA:
            return "r_dma_portability_3rd_party"
        return "openid profile email w_member_social"

    @property
    def token_param(self) -> str:
        """Return the query parameter the frontend reads the token from."""
        if self is OAuthFlow.DMA:
            return "dma_token"
        return "access_token"

    @classmethod
    def parse(cls, raw: str | None) -> OAuthFlow:
        """Return the flow named by ``raw``; anything but ``dma`` is basic."""
        if raw == cls.DMA.value:
            return cls.DMA
        return cls.BASIC


@dataclasses.dataclass(frozen=True, slots=True)
class LinkedInConfig:
    """Configuration for :class:`~ligrowth.linkedin.client.LinkedInRestClient`.

    Attributes
    ----------
    api_base
        Scheme and host of the LinkedIn API.
    api_version
        Value sent in the ``LinkedIn-Version`` header on versioned endpoints.
    timeout_s
        Request timeout in seconds.
    user_agent
        ``User-Agent`` header sent with every request.

    """

    api_base: str = _DEFAULT_API_BASE
    api_version: str = _DEFAULT_API_VERSION
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw = os.environ.get("LIGROWTH_LINKEDIN_TIMEOUT_S", "")
        if not raw.strip():
            return _DEFAULT_TIMEOUT_S
        try:
            value = float(raw)
        except ValueError as exc:
            raise LinkedInConfigError.invalid_timeout(raw) from exc
        if value <= 0:
            raise LinkedInConfigError.invalid_timeout(raw)
        return value

    @classmethod
    def from_env(cls) -> LinkedInConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``LIGROWTH_LINKEDIN_API_BASE``: Optional API base override
        - ``LIGROWTH_LINKEDIN_TIMEOUT_S``: Optional timeout (positive number)

        Raises
        ------
        LinkedInConfigError
            If the timeout is not a positive number.

        """
        api_base = os.environ.get("LIGROWTH_LINKEDIN_API_BASE", "").strip()
        return cls(
            api_base=(api_base or _DEFAULT_API_BASE).rstrip("/"),
            timeout_s=cls._parse_timeout_from_env(),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class OAuthConfig:
    """Client credentials and redirect targets for LinkedIn OAuth.

    Attributes
    ----------
    client_id, client_secret
        Credentials of the basic sign-in application.
    dma_client_id, dma_client_secret
        Credentials of the DMA portability application.
    public_url
        Externally visible base URL of this service; the OAuth callback
        redirect URI is derived from it.
    frontend_url
        Base URL of the web client receiving the issued token.

    """

    client_id: str | None = None
    client_secret: str | None = None
    dma_client_id: str | None = None
    dma_client_secret: str | None = None
    public_url: str = _DEFAULT_PUBLIC_URL
    frontend_url: str = _DEFAULT_PUBLIC_URL
    authorization_url: str = _DEFAULT_AUTHORIZATION_URL
    token_url: str = _DEFAULT_TOKEN_URL

    @property
    def redirect_uri(self) -> str:
        """Return the callback URI registered with LinkedIn."""
        return f"{self.public_url}{_CALLBACK_PATH}"

    def client_id_for(self, flow: OAuthFlow) -> str:
        """Return the client id for ``flow``.

        Raises
        ------
        OAuthConfigError
            If no client id is configured for the flow.

        """
        client_id = self.dma_client_id if flow is OAuthFlow.DMA else self.client_id
        if not client_id:
            raise OAuthConfigError.missing_client_id(flow.value)
        return client_id

    def credentials_for(self, flow: OAuthFlow) -> tuple[str, str]:
        """Return ``(client_id, client_secret)`` for ``flow``.

        Raises
        ------
        OAuthConfigError
            If either value is missing.

        """
        if flow is OAuthFlow.DMA:
            client_id, secret = self.dma_client_id, self.dma_client_secret
        else:
            client_id, secret = self.client_id, self.client_secret
        if not client_id or not secret:
            raise OAuthConfigError.missing_credentials(flow.value)
        return (client_id, secret)

    @classmethod
    def from_env(cls) -> OAuthConfig:
        """Build configuration from environment variables.

        Reads ``LINKEDIN_CLIENT_ID``, ``LINKEDIN_CLIENT_SECRET``,
        ``LINKEDIN_DMA_CLIENT_ID``, ``LINKEDIN_DMA_CLIENT_SECRET``,
        ``LIGROWTH_PUBLIC_URL`` and ``LIGROWTH_FRONTEND_URL``. The frontend
        URL falls back to the public URL. Missing credentials are not an
        error here; they are reported when a flow needs them.
        """

        def _optional(name: str) -> str | None:
            value = os.environ.get(name, "").strip()
            return value or None

        public_url = (_optional("LIGROWTH_PUBLIC_URL") or _DEFAULT_PUBLIC_URL).rstrip(
            "/"
        )
        frontend_url = (_optional("LIGROWTH_FRONTEND_URL") or public_url).rstrip("/")
        return cls(
            client_id=_optional("LINKEDIN_CLIENT_ID"),
            client_secret=_optional("LINKEDIN_CLIENT_SECRET"),
            dma_client_id=_optional("LINKEDIN_DMA_CLIENT_ID"),
            dma_client_secret=_optional("LINKEDIN_DMA_CLIENT_SECRET"),
            public_url=public_url,
            frontend_url=frontend_url,
        )


__all__ = ["LinkedInConfig", "OAuthConfig", "OAuthFlow"]
