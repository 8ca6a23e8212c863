"""LinkedIn REST API access: client, configuration, OAuth and DMA helpers."""

from __future__ import annotations

from .client import LinkedInRestClient, MediaPayload
from .config import LinkedInConfig, OAuthConfig, OAuthFlow
from .errors import (
    LinkedInError,
    LinkedInInputError,
    LinkedInResponseShapeError,
    LinkedInTransportError,
    UpstreamRequestError,
)

__all__ = [
    "LinkedInConfig",
    "LinkedInError",
    "LinkedInInputError",
    "LinkedInResponseShapeError",
    "LinkedInRestClient",
    "LinkedInTransportError",
    "MediaPayload",
    "OAuthConfig",
    "OAuthFlow",
    "UpstreamRequestError",
]
