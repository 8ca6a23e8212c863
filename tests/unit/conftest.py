"""Unit-test fixtures for the Falcon API."""

from __future__ import annotations

import dataclasses
import typing as typ

import falcon.testing
import pytest

from ligrowth.api.app import AppDependencies, create_app
from ligrowth.linkedin.config import OAuthConfig

if typ.TYPE_CHECKING:
    from tests.conftest import Handler, UpstreamFactory, UpstreamStub


@dataclasses.dataclass(frozen=True, slots=True)
class ApiHarness:
    """A Falcon test client wired to a stubbed LinkedIn upstream."""

    client: falcon.testing.TestClient
    upstream: UpstreamStub


class ApiFactory(typ.Protocol):
    """Callable fixture building an :class:`ApiHarness`."""

    def __call__(self, handler: Handler) -> ApiHarness:
        """Build a harness whose upstream responses come from ``handler``."""
        ...


@pytest.fixture
def oauth_config() -> OAuthConfig:
    """Return OAuth settings with both applications registered."""
    return OAuthConfig(
        client_id="basic-id",
        client_secret="basic-secret",
        dma_client_id="dma-id",
        dma_client_secret="dma-secret",
        public_url="https://growth.test",
        frontend_url="https://app.growth.test",
    )


@pytest.fixture
def api(upstream: UpstreamFactory, oauth_config: OAuthConfig) -> ApiFactory:
    """Return a factory for full-proxy test clients."""

    def _factory(handler: Handler) -> ApiHarness:
        stub = upstream(handler)
        app = create_app(
            AppDependencies(linkedin_client=stub.client, oauth_config=oauth_config)
        )
        return ApiHarness(client=falcon.testing.TestClient(app), upstream=stub)

    return _factory
