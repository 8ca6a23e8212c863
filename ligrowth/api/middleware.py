"""ASGI lifespan middleware owning the shared LinkedIn client.

The app builds one :class:`~ligrowth.linkedin.client.LinkedInRestClient` at
startup and every resource borrows it. This middleware closes the client's
connection pool when the server shuts down.

Usage
-----
::

    app = falcon.asgi.App(middleware=[LinkedInClientLifespan(client)])

"""

from __future__ import annotations

import typing as typ

from ligrowth.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from ligrowth.linkedin.client import LinkedInRestClient

__all__ = ["LinkedInClientLifespan"]

logger = get_logger(__name__)


class LinkedInClientLifespan:
    """Falcon middleware closing the LinkedIn client on shutdown."""

    def __init__(self, client: LinkedInRestClient) -> None:
        """Store the client whose resources are released at shutdown."""
        self._client = client

    async def process_startup(self, _scope: object, _event: object) -> None:
        """Log that the proxy is ready to serve."""
        api_base = self._client.config.api_base
        log_info(logger, "LinkedIn proxy started (api_base=%s)", api_base)

    async def process_shutdown(self, _scope: object, _event: object) -> None:
        """Close the LinkedIn client's connection pool."""
        await self._client.aclose()
        log_info(logger, "LinkedIn client closed")
