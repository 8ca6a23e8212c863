"""Process entrypoint: environment settings, ASGI factory and Granian server.

Granian imports ``ligrowth.runtime:create_app`` in every worker, so the
factory reads its configuration from the environment rather than from
arguments. Variables:

- ``LIGROWTH_HOST`` / ``LIGROWTH_PORT``: bind address (``0.0.0.0:8080``)
- ``LIGROWTH_LOG_LEVEL``: femtologging level (``INFO``)
- ``LIGROWTH_PROXY_ENABLED``: ``0``, ``false``, ``no`` or ``off`` serves the
  probes only
- LinkedIn and OAuth settings, see :mod:`ligrowth.linkedin.config`

``python -m ligrowth.runtime`` starts the server.
"""

from __future__ import annotations

import dataclasses
import os
import typing as typ

from ligrowth.logging import (
    configure_logging_from_env,
    get_logger,
    log_error,
    log_info,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["RuntimeSettings", "create_app", "main"]

logger = get_logger(__name__)

_APP_FACTORY = "ligrowth.runtime:create_app"
_PORT_RANGE = range(1, 65536)
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_port(raw: str) -> int:
    """Return ``raw`` as a TCP port, exiting with status 1 when it is not one."""
    try:
        port = int(raw)
    except ValueError:
        port = None
    if port is None or port not in _PORT_RANGE:
        log_error(
            logger,
            "Invalid LIGROWTH_PORT value: %r (must be %d-%d)",
            raw,
            _PORT_RANGE.start,
            _PORT_RANGE.stop - 1,
        )
        raise SystemExit(1)
    return port


def _flag(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


@dataclasses.dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Server bind address and feature switches."""

    host: str = "0.0.0.0"  # noqa: S104 - containers bind every interface
    port: int = 8080
    proxy_enabled: bool = True

    @classmethod
    def from_env(cls) -> RuntimeSettings:
        """Read settings from ``LIGROWTH_*`` variables.

        Raises
        ------
        SystemExit
            If ``LIGROWTH_PORT`` is not an integer in 1-65535.

        """
        defaults = cls()
        return cls(
            host=os.environ.get("LIGROWTH_HOST", defaults.host),
            port=_parse_port(os.environ.get("LIGROWTH_PORT", str(defaults.port))),
            proxy_enabled=_flag("LIGROWTH_PROXY_ENABLED", default=True),
        )


def create_app() -> falcon.asgi.App:
    """Build the Falcon app for a Granian worker.

    The LinkedIn client and OAuth settings are created here, once per worker.
    With the proxy disabled no client is built and only the probes respond.
    """
    from ligrowth.api.app import AppDependencies
    from ligrowth.api.app import create_app as build_api

    if not _flag("LIGROWTH_PROXY_ENABLED", default=True):
        return build_api()

    from ligrowth.linkedin import LinkedInConfig, LinkedInRestClient, OAuthConfig

    return build_api(
        AppDependencies(
            linkedin_client=LinkedInRestClient(LinkedInConfig.from_env()),
            oauth_config=OAuthConfig.from_env(),
        )
    )


def main() -> None:
    """Configure logging and serve :func:`create_app` with Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    settings = RuntimeSettings.from_env()
    level = configure_logging_from_env()
    log_info(
        logger,
        "Starting ligrowth on %s:%d (log_level=%s, proxy=%s)",
        settings.host,
        settings.port,
        level,
        "on" if settings.proxy_enabled else "off",
    )
    Granian(
        _APP_FACTORY,
        address=settings.host,
        port=settings.port,
        interface=Interfaces.ASGI,
        factory=True,
    ).serve()


if __name__ == "__main__":
    main()
