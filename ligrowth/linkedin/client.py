"""LinkedIn REST API client shared by the proxy handlers.

The client holds one ``httpx.AsyncClient`` for the lifetime of the service.
Bearer tokens belong to the calling member, so they are supplied per request
rather than baked into the client headers.
"""

from __future__ import annotations

import dataclasses
import json
import typing as typ

import httpx

from ligrowth.logging import get_logger, log_debug, log_warning

from .errors import (
    LinkedInResponseShapeError,
    LinkedInTransportError,
    UpstreamRequestError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import LinkedInConfig

logger = get_logger(__name__)

# Endpoints under the versioned REST surface that reject unversioned calls.
_VERSIONED_PREFIXES = ("/rest/memberChangeLogs", "/rest/memberSnapshotData")

QueryParams: typ.TypeAlias = "cabc.Mapping[str, str | int]"


@dataclasses.dataclass(frozen=True, slots=True)
class MediaPayload:
    """Binary media returned by the media download endpoint."""

    content: bytes
    content_type: str


def _body_text(response: httpx.Response) -> str:
    """Return the response text, or an empty string when it cannot be decoded."""
    try:
        return response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError, LookupError):
        return ""


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "application/json" in content_type.lower()


class LinkedInRestClient:
    """Thin async wrapper around the LinkedIn REST and v2 APIs."""

    def __init__(
        self,
        config: LinkedInConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={"User-Agent": config.user_agent},
        )

    @property
    def config(self) -> LinkedInConfig:
        """Read-only access to the client configuration."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self._config.api_base}{path}"

    def _headers(self, path: str, token: str) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {token}"}
        if path.startswith(_VERSIONED_PREFIXES):
            headers["LinkedIn-Version"] = self._config.api_version
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        token: str,
        **kwargs: typ.Any,  # noqa: ANN401 - forwarded verbatim to httpx
    ) -> httpx.Response:
        """Issue one request and raise for transport or HTTP failures.

        Raises
        ------
        LinkedInTransportError
            If no response was received.
        UpstreamRequestError
            If LinkedIn answered with a non-2xx status.

        """
        url = self._url(path)
        headers = self._headers(path, token)
        headers.update(kwargs.pop("headers", {}))
        log_debug(logger, "LinkedIn %s %s", method, path)
        try:
            response = await self._client.request(
                method, url, headers=headers, **kwargs
            )
        except httpx.TimeoutException as exc:
            raise LinkedInTransportError.timeout(url) from exc
        except httpx.RequestError as exc:
            raise LinkedInTransportError.network_error(url, str(exc)) from exc

        if not response.is_success:
            body = _body_text(response)
            log_warning(
                logger,
                "LinkedIn %s %s failed with HTTP %d",
                method,
                path,
                response.status_code,
            )
            raise UpstreamRequestError(response.status_code, body)
        return response

    async def get_json(
        self,
        path: str,
        token: str,
        *,
        params: QueryParams | None = None,
    ) -> dict[str, typ.Any]:
        """GET ``path`` and return the decoded JSON object.

        Parameters
        ----------
        path
            Path below the API base, e.g. ``/rest/memberChangeLogs``.
        token
            Member bearer token.
        params
            Optional query parameters.

        Raises
        ------
        LinkedInResponseShapeError
            If the body is not a JSON object.

        """
        response = await self._send("GET", path, token, params=params)
        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            raise LinkedInResponseShapeError.invalid_json(path) from exc
        if not isinstance(data, dict):
            raise LinkedInResponseShapeError.invalid_json(path)
        return data

    async def post_json(
        self,
        path: str,
        token: str,
        body: object,
    ) -> dict[str, typ.Any] | None:
        """POST ``body`` as JSON; return the decoded object, if any.

        Some LinkedIn endpoints reply with an empty body, so non-JSON
        responses yield ``None``.
        """
        response = await self._send("POST", path, token, json=body)
        if not _is_json(response) or not response.content:
            return None
        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            raise LinkedInResponseShapeError.invalid_json(path) from exc
        return data if isinstance(data, dict) else None

    async def get_bytes(self, path: str, token: str) -> MediaPayload:
        """GET ``path`` following redirects and return the raw body."""
        response = await self._send("GET", path, token, follow_redirects=True)
        content_type = response.headers.get("content-type") or (
            "application/octet-stream"
        )
        return MediaPayload(content=response.content, content_type=content_type)

    async def post_form(
        self,
        url: str,
        form: cabc.Mapping[str, str],
    ) -> dict[str, typ.Any]:
        """POST a form-encoded body to an absolute ``url`` and decode the JSON.

        Used for the OAuth token endpoint, which lives outside the API base,
        takes no bearer token and reports failures in the JSON body.
        """
        try:
            response = await self._client.post(url, data=dict(form))
        except httpx.TimeoutException as exc:
            raise LinkedInTransportError.timeout(url) from exc
        except httpx.RequestError as exc:
            raise LinkedInTransportError.network_error(url, str(exc)) from exc
        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            if not response.is_success:
                raise UpstreamRequestError(
                    response.status_code, _body_text(response)
                ) from exc
            raise LinkedInResponseShapeError.invalid_json(url) from exc
        if not isinstance(data, dict):
            raise LinkedInResponseShapeError.invalid_json(url)
        return data


__all__ = ["LinkedInRestClient", "MediaPayload"]
