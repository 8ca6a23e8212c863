"""Liveness and readiness probe resources.

Both probes are stateless and never call LinkedIn; they are registered even
when the app runs without a LinkedIn client.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting whether the LinkedIn proxy is wired.

    Parameters
    ----------
    proxy_enabled
        ``True`` when LinkedIn routes are registered.

    """

    def __init__(self, *, proxy_enabled: bool = False) -> None:
        """Record whether the LinkedIn proxy routes are available."""
        self._proxy_enabled = proxy_enabled

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready."""
        resp.media = {
            "status": "ready",
            "linkedin": "enabled" if self._proxy_enabled else "disabled",
        }
        resp.status = HTTPStatus.OK
