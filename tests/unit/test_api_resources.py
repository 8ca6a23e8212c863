"""Unit tests for the LinkedIn proxy, OAuth and partner resources.

Requests go through the full Falcon app; LinkedIn is replaced by an
``httpx.MockTransport`` so the upstream requests can be inspected.
"""

from __future__ import annotations

import typing as typ

import falcon
import falcon.testing
import httpx
import pytest

from ligrowth.api.app import AppDependencies, create_app
from ligrowth.linkedin.config import OAuthConfig
from tests.helpers import AUTH_HEADERS, json_response

if typ.TYPE_CHECKING:
    from tests.conftest import UpstreamFactory
    from tests.unit.conftest import ApiFactory


def _empty(_request: httpx.Request) -> httpx.Response:
    return json_response({})


class TestAuthentication:
    """Bearer token handling shared by every proxy resource."""

    @pytest.mark.parametrize(
        "path",
        [
            "/linkedin/profile",
            "/linkedin/changelog",
            "/linkedin/changelog/groups",
            "/linkedin/snapshot",
            "/linkedin/dma",
            "/linkedin/media/abc",
            "/synergy/partners",
        ],
    )
    def test_missing_token_is_rejected(self, api: ApiFactory, path: str) -> None:
        """Without Authorization the request never reaches LinkedIn."""
        harness = api(_empty)

        result = harness.client.simulate_get(path)

        assert result.status == falcon.HTTP_401
        assert result.json == {
            "title": "Unauthorized",
            "description": "No authorization token",
        }
        assert harness.upstream.requests == []

    @pytest.mark.parametrize("header", ["Bearer abc", "bearer abc", "abc"])
    def test_token_is_forwarded(self, api: ApiFactory, header: str) -> None:
        """The member token is relayed as a bearer token."""
        harness = api(_empty)

        harness.client.simulate_get(
            "/linkedin/profile", headers={"Authorization": header}
        )

        assert harness.upstream.last_request.headers["Authorization"] == "Bearer abc"

    def test_blank_bearer_is_rejected(self, api: ApiFactory) -> None:
        """A scheme without a token counts as missing."""
        harness = api(_empty)

        result = harness.client.simulate_get(
            "/linkedin/profile", headers={"Authorization": "Bearer   "}
        )

        assert result.status == falcon.HTTP_401


class TestChangelog:
    """GET /linkedin/changelog and /linkedin/changelog/groups."""

    def test_elements_are_returned_in_camel_case(
        self, api: ApiFactory, sample_events: list[dict[str, typ.Any]]
    ) -> None:
        """Events round-trip with LinkedIn's field names."""
        harness = api(lambda _request: json_response({"elements": sample_events}))

        result = harness.client.simulate_get(
            "/linkedin/changelog", headers=AUTH_HEADERS
        )

        assert result.status == falcon.HTTP_200
        assert result.json == {"elements": sample_events}

    def test_upstream_document_is_relayed_unchanged(self, api: ApiFactory) -> None:
        """Unmodelled fields, explicit nulls and paging reach the caller."""
        document = {
            "elements": [
                {
                    "resourceName": "ugcPosts",
                    "method": "CREATE",
                    "id": 77,
                    "configVersion": 3,
                    "activityStatus": "SUCCESS",
                    "activity": None,
                }
            ],
            "paging": {"count": 50, "start": 0, "links": []},
        }
        harness = api(lambda _request: json_response(document))

        result = harness.client.simulate_get(
            "/linkedin/changelog", headers=AUTH_HEADERS
        )

        assert result.status == falcon.HTTP_200
        assert result.json == document

    def test_default_count_is_fifty(self, api: ApiFactory) -> None:
        """The proxy asks for a full page unless told otherwise."""
        harness = api(_empty)

        harness.client.simulate_get("/linkedin/changelog", headers=AUTH_HEADERS)

        params = harness.upstream.last_request.url.params
        assert params["count"] == "50"
        assert "startTime" not in params

    def test_query_parameters_are_forwarded(self, api: ApiFactory) -> None:
        """count is clamped and startTime forwarded."""
        harness = api(_empty)

        harness.client.simulate_get(
            "/linkedin/changelog",
            headers=AUTH_HEADERS,
            params={"count": "500", "startTime": "1700000000000"},
        )

        params = harness.upstream.last_request.url.params
        assert params["count"] == "50"
        assert params["startTime"] == "1700000000000"

    def test_non_numeric_count_is_rejected(self, api: ApiFactory) -> None:
        """Malformed query parameters are client errors."""
        harness = api(_empty)

        result = harness.client.simulate_get(
            "/linkedin/changelog", headers=AUTH_HEADERS, params={"count": "many"}
        )

        assert result.status == falcon.HTTP_400
        assert harness.upstream.requests == []

    def test_upstream_unauthorized_is_relayed(self, api: ApiFactory) -> None:
        """LinkedIn's 401 reaches the caller with the upstream body."""
        body = '{"message":"Expired token"}'
        harness = api(lambda _request: httpx.Response(401, text=body))

        result = harness.client.simulate_get(
            "/linkedin/changelog", headers=AUTH_HEADERS
        )

        assert result.status_code == 401
        assert result.json["status"] == 401
        assert result.json["details"] == body
        assert len(harness.upstream.requests) == 1

    def test_groups_bucket_recent_events(
        self, api: ApiFactory, sample_events: list[dict[str, typ.Any]]
    ) -> None:
        """The groups endpoint partitions 28 days of events by resource."""
        harness = api(lambda _request: json_response({"elements": sample_events}))

        result = harness.client.simulate_get(
            "/linkedin/changelog/groups", headers=AUTH_HEADERS
        )

        body = result.json
        assert result.status == falcon.HTTP_200
        assert body["total"] == 3
        assert list(body["groups"]) == ["ugcPosts", "socialActions/likes"]
        assert [e["method"] for e in body["groups"]["ugcPosts"]] == ["CREATE", "DELETE"]
        assert sum(body["weeks"].values()) == 3
        assert harness.upstream.last_request.url.params["count"] == "50"


class TestSnapshot:
    """GET /linkedin/snapshot."""

    def test_invalid_domain(self, api: ApiFactory) -> None:
        """Unknown domains are rejected with the accepted list."""
        harness = api(_empty)

        result = harness.client.simulate_get(
            "/linkedin/snapshot", headers=AUTH_HEADERS, params={"domain": "PHOTOS"}
        )

        assert result.status == falcon.HTTP_400
        assert "PROFILE" in result.json["validDomains"]
        assert harness.upstream.requests == []

    def test_snapshot_is_proxied(self, api: ApiFactory) -> None:
        """The upstream document is returned verbatim."""
        payload = {"elements": [{"snapshotDomain": "SKILLS", "snapshotData": []}]}
        harness = api(lambda _request: json_response(payload))

        result = harness.client.simulate_get(
            "/linkedin/snapshot", headers=AUTH_HEADERS, params={"domain": "SKILLS"}
        )

        assert result.json == payload
        assert harness.upstream.last_request.url.params["domain"] == "SKILLS"


class TestDma:
    """GET and POST /linkedin/dma."""

    def test_status(self, api: ApiFactory) -> None:
        """Consent is reported as a boolean."""
        harness = api(
            lambda _request: json_response({"elements": [{"regulatedAt": 1}]})
        )

        result = harness.client.simulate_get("/linkedin/dma", headers=AUTH_HEADERS)

        assert result.json == {"enabled": True}

    def test_status_when_upstream_fails(self, api: ApiFactory) -> None:
        """Upstream errors read as not enabled rather than failing."""
        harness = api(lambda _request: httpx.Response(500))

        result = harness.client.simulate_get("/linkedin/dma", headers=AUTH_HEADERS)

        assert result.status == falcon.HTTP_200
        assert result.json == {"enabled": False}

    def test_enable(self, api: ApiFactory) -> None:
        """Enabling posts to LinkedIn and confirms."""
        harness = api(lambda _request: httpx.Response(201))

        result = harness.client.simulate_post("/linkedin/dma", headers=AUTH_HEADERS)

        assert result.json == {
            "success": True,
            "message": "DMA authorization enabled successfully",
        }
        assert harness.upstream.last_request.method == "POST"

    def test_enable_failure_is_relayed(self, api: ApiFactory) -> None:
        """A rejected enablement returns LinkedIn's status."""
        harness = api(lambda _request: httpx.Response(403, text="nope"))

        result = harness.client.simulate_post("/linkedin/dma", headers=AUTH_HEADERS)

        assert result.status_code == 403


class TestMedia:
    """GET /linkedin/media/{asset_id}."""

    def test_bytes_are_streamed(self, api: ApiFactory) -> None:
        """Binary content keeps its type and is cacheable for an hour."""
        harness = api(
            lambda _request: httpx.Response(
                200, content=b"\xff\xd8jpeg", headers={"content-type": "image/jpeg"}
            )
        )

        result = harness.client.simulate_get(
            "/linkedin/media/urn:li:digitalmediaAsset:C4E22AQ", headers=AUTH_HEADERS
        )

        assert result.status == falcon.HTTP_200
        assert result.content == b"\xff\xd8jpeg"
        assert result.headers["Content-Type"] == "image/jpeg"
        assert result.headers["Cache-Control"] == "public, max-age=3600"
        assert harness.upstream.last_request.url.path == "/mediaDownload/C4E22AQ"

    def test_urn_asset_id_is_rejected(self, api: ApiFactory) -> None:
        """Ids that are not digital media assets are client errors."""
        harness = api(_empty)

        result = harness.client.simulate_get(
            "/linkedin/media/urn:li:image:abc", headers=AUTH_HEADERS
        )

        assert result.status == falcon.HTTP_400
        assert result.json["field"] == "assetId"


class TestProfile:
    """GET /linkedin/profile."""

    def test_transport_failure_is_bad_gateway(self, api: ApiFactory) -> None:
        """Network failures map to 502."""

        def _refuse(request: httpx.Request) -> httpx.Response:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)

        harness = api(_refuse)

        result = harness.client.simulate_get("/linkedin/profile", headers=AUTH_HEADERS)

        assert result.status == falcon.HTTP_502


class TestOAuth:
    """GET /oauth/linkedin/start and /oauth/linkedin/callback."""

    @pytest.mark.parametrize(
        ("flow", "client_id"), [("basic", "basic-id"), ("dma", "dma-id")]
    )
    def test_start_redirects_to_linkedin(
        self, api: ApiFactory, flow: str, client_id: str
    ) -> None:
        """The browser is sent to LinkedIn's consent page."""
        harness = api(_empty)

        result = harness.client.simulate_get(
            "/oauth/linkedin/start", params={"type": flow}
        )

        location = result.headers["Location"]
        assert result.status == falcon.HTTP_302
        assert location.startswith("https://www.linkedin.com/oauth/v2/authorization?")
        assert f"client_id={client_id}" in location
        assert f"state={flow}" in location

    def test_start_without_configuration(self, upstream: UpstreamFactory) -> None:
        """Unconfigured flows are reported as client errors."""
        stub = upstream(_empty)
        app = create_app(
            AppDependencies(linkedin_client=stub.client, oauth_config=OAuthConfig())
        )

        result = falcon.testing.TestClient(app).simulate_get(
            "/oauth/linkedin/start", params={"type": "dma"}
        )

        assert result.status == falcon.HTTP_400
        assert result.json["description"] == "Missing client ID for type: dma"

    def test_callback_redirects_with_token(self, api: ApiFactory) -> None:
        """The issued token is handed to the web client, uncached."""
        harness = api(lambda _request: json_response({"access_token": "issued"}))

        result = harness.client.simulate_get(
            "/oauth/linkedin/callback", params={"code": "abc", "state": "dma"}
        )

        location = result.headers["Location"]
        assert result.status == falcon.HTTP_302
        assert location == "https://app.growth.test/?dma_token=issued"
        assert "no-store" in result.headers["Cache-Control"]
        assert result.headers["Pragma"] == "no-cache"
        assert result.headers["Expires"] == "0"

    def test_callback_without_code(self, api: ApiFactory) -> None:
        """A callback without code is rejected before any exchange."""
        harness = api(_empty)

        result = harness.client.simulate_get("/oauth/linkedin/callback")

        assert result.status == falcon.HTTP_400
        assert result.json["field"] == "code"
        assert harness.upstream.requests == []

    def test_callback_exchange_failure(self, api: ApiFactory) -> None:
        """LinkedIn rejecting the code is a server error."""
        harness = api(
            lambda _request: json_response(
                {"error": "invalid_grant", "error_description": "bad code"},
                status_code=400,
            )
        )

        result = harness.client.simulate_get(
            "/oauth/linkedin/callback", params={"code": "abc"}
        )

        assert result.status == falcon.HTTP_500
        assert result.json["description"] == "bad code"


class TestPartners:
    """GET, POST and DELETE /synergy/partners."""

    def test_list(self, api: ApiFactory) -> None:
        """The sample partners are returned."""
        result = api(_empty).client.simulate_get(
            "/synergy/partners", headers=AUTH_HEADERS
        )

        assert result.status == falcon.HTTP_200
        assert [p["id"] for p in result.json["partners"]] == ["partner-1", "partner-2"]

    def test_add(self, api: ApiFactory) -> None:
        """Adding a partner returns 201 with the partnership."""
        result = api(_empty).client.simulate_post(
            "/synergy/partners", headers=AUTH_HEADERS, json={"partnerId": "p-9"}
        )

        body = result.json
        assert result.status == falcon.HTTP_201
        assert body["success"] is True
        assert body["partnership"]["aUserId"] == "user-123"
        assert body["partnership"]["bUserId"] == "p-9"
        assert body["message"] == "Partner added successfully"

    @pytest.mark.parametrize("method", ["POST", "DELETE"])
    def test_partner_id_required(self, api: ApiFactory, method: str) -> None:
        """Mutations without partnerId are rejected."""
        result = api(_empty).client.simulate_request(
            method, "/synergy/partners", headers=AUTH_HEADERS, json={}
        )

        assert result.status == falcon.HTTP_400
        assert result.json["description"] == "Partner ID is required"

    def test_remove(self, api: ApiFactory) -> None:
        """Removing a partner confirms success."""
        result = api(_empty).client.simulate_delete(
            "/synergy/partners", headers=AUTH_HEADERS, json={"partnerId": "p-9"}
        )

        assert result.json == {
            "success": True,
            "message": "Partner removed successfully",
        }
