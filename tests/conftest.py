"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import pytest

from ligrowth.linkedin import LinkedInConfig, LinkedInRestClient

Handler = typ.Callable[[httpx.Request], httpx.Response]

TEST_API_BASE = "https://linkedin.test"


@dataclasses.dataclass(slots=True)
class UpstreamStub:
    """A LinkedIn client wired to an in-memory transport.

    ``requests`` records every request the client sent, in order.
    """

    client: LinkedInRestClient
    http_client: httpx.AsyncClient
    requests: list[httpx.Request]

    @property
    def last_request(self) -> httpx.Request:
        """Return the most recent upstream request."""
        assert self.requests, "expected at least one upstream request"
        return self.requests[-1]


class UpstreamFactory(typ.Protocol):
    """Callable fixture building an :class:`UpstreamStub`."""

    def __call__(self, handler: Handler) -> UpstreamStub:
        """Build a stub whose responses come from ``handler``."""
        ...


@pytest.fixture
def upstream() -> UpstreamFactory:
    """Return a factory for LinkedIn clients backed by ``httpx.MockTransport``."""

    def _factory(handler: Handler) -> UpstreamStub:
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        client = LinkedInRestClient(
            LinkedInConfig(api_base=TEST_API_BASE), http_client=http_client
        )
        return UpstreamStub(
            client=client, http_client=http_client, requests=requests
        )

    return _factory


@pytest.fixture
def sample_events() -> list[dict[str, typ.Any]]:
    """Return three raw changelog elements as LinkedIn serialises them."""
    return [
        {
            "resourceName": "ugcPosts",
            "method": "CREATE",
            "capturedAt": 1_707_955_200_000,
            "processedAt": 1_707_955_201_000,
            "owner": "urn:li:person:abc",
            "actor": "urn:li:person:abc",
            "resourceId": "urn:li:share:1",
            "activity": {"lifecycleState": "PUBLISHED"},
        },
        {
            "resourceName": "socialActions/likes",
            "method": "CREATE",
            "capturedAt": 1_708_041_600_000,
        },
        {
            "resourceName": "ugcPosts",
            "method": "DELETE",
            "capturedAt": 1_708_560_000_000,
            "processedActivity": {"id": "urn:li:share:1"},
        },
    ]
