"""Application factory for the ligrowth Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI app with
CORS, health endpoints and, when a LinkedIn client is supplied, the LinkedIn
proxy, OAuth and partner endpoints.

Usage
-----
Create a health-only app::

    app = create_app()

Create the full proxy::

    from ligrowth.api.app import AppDependencies, create_app

    deps = AppDependencies(
        linkedin_client=LinkedInRestClient(LinkedInConfig.from_env()),
        oauth_config=OAuthConfig.from_env(),
    )
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon
import falcon.asgi

from ligrowth.api.errors import register_error_handlers
from ligrowth.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    from ligrowth.linkedin.client import LinkedInRestClient
    from ligrowth.linkedin.config import OAuthConfig

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Collaborators for the Falcon ASGI application.

    Attributes
    ----------
    linkedin_client
        Shared LinkedIn REST client; closed when the app shuts down.
    oauth_config
        OAuth client credentials and redirect targets.

    """

    linkedin_client: LinkedInRestClient
    oauth_config: OAuthConfig


def _add_proxy_routes(app: falcon.asgi.App, deps: AppDependencies) -> None:
    from ligrowth.api.linkedin.resources import (
        ChangelogGroupsResource,
        ChangelogResource,
        DmaResource,
        MediaResource,
        ProfileResource,
        SnapshotResource,
    )
    from ligrowth.api.oauth.resources import OAuthCallbackResource, OAuthStartResource
    from ligrowth.api.synergy.resources import PartnersResource

    client = deps.linkedin_client
    app.add_route("/oauth/linkedin/start", OAuthStartResource(deps.oauth_config))
    app.add_route(
        "/oauth/linkedin/callback",
        OAuthCallbackResource(client, deps.oauth_config),
    )
    app.add_route("/linkedin/profile", ProfileResource(client))
    app.add_route("/linkedin/changelog", ChangelogResource(client))
    app.add_route("/linkedin/changelog/groups", ChangelogGroupsResource(client))
    app.add_route("/linkedin/snapshot", SnapshotResource(client))
    app.add_route("/linkedin/dma", DmaResource(client))
    app.add_route("/linkedin/media/{asset_id}", MediaResource(client))
    app.add_route("/synergy/partners", PartnersResource())


def create_app(dependencies: AppDependencies | None = None) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional collaborators. When ``None`` only ``/health`` and ``/ready``
        are registered.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    middleware: list[object] = [falcon.CORSMiddleware(allow_origins="*")]
    if dependencies is not None:
        from ligrowth.api.middleware import LinkedInClientLifespan

        middleware.append(LinkedInClientLifespan(dependencies.linkedin_client))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route(
        "/ready", ReadyResource(proxy_enabled=dependencies is not None)
    )

    if dependencies is not None:
        _add_proxy_routes(app, dependencies)

    register_error_handlers(app)
    return app
