"""LinkedIn API errors."""

from __future__ import annotations

_BODY_PREVIEW_LIMIT = 500


class LinkedInError(RuntimeError):
    """Base class for failures talking to LinkedIn."""


class UpstreamRequestError(LinkedInError):
    """Raised when LinkedIn answers with a non-2xx status.

    Attributes
    ----------
    status_code
        HTTP status returned by LinkedIn.
    body
        Response body text, or an empty string when it could not be read.

    """

    def __init__(self, status_code: int, body: str = "") -> None:
        """Initialise with the upstream status code and body text."""
        self.status_code = status_code
        self.body = body
        preview = body[:_BODY_PREVIEW_LIMIT] if body else "No body"
        super().__init__(f"LinkedIn {status_code}: {preview}")


class LinkedInTransportError(LinkedInError):
    """Raised when no response was received from LinkedIn."""

    @classmethod
    def timeout(cls, url: str) -> LinkedInTransportError:
        """Return an error for a request that timed out."""
        return cls(f"LinkedIn request timed out: {url}")

    @classmethod
    def network_error(cls, url: str, detail: str) -> LinkedInTransportError:
        """Return an error for connection-level failures."""
        return cls(f"LinkedIn request failed: {url}: {detail}")


class LinkedInResponseShapeError(LinkedInError):
    """Raised when a LinkedIn payload is missing expected fields."""

    @classmethod
    def invalid_json(cls, path: str) -> LinkedInResponseShapeError:
        """Return an error for a body that is not a JSON object."""
        return cls(f"LinkedIn response for {path} is not a JSON object")

    @classmethod
    def invalid_field(cls, field: str, detail: str) -> LinkedInResponseShapeError:
        """Return an error for a field that does not match the expected shape."""
        return cls(f"LinkedIn response field {field} is malformed: {detail}")


class LinkedInInputError(ValueError):
    """Raised when caller input cannot be forwarded to LinkedIn.

    Attributes
    ----------
    reason
        Human-readable description of the problem.
    field
        Name of the offending request parameter.

    """

    def __init__(self, reason: str, *, field: str) -> None:
        """Initialise with a reason and the offending field name."""
        self.reason = reason
        self.field = field
        super().__init__(f"{field}: {reason}")


class InvalidSnapshotDomainError(LinkedInInputError):
    """Raised for a snapshot domain LinkedIn does not recognise."""

    def __init__(self, domain: str, valid_domains: tuple[str, ...]) -> None:
        """Initialise with the rejected domain and the accepted values."""
        self.domain = domain
        self.valid_domains = valid_domains
        super().__init__("Invalid domain parameter", field="domain")


class InvalidAssetIdError(LinkedInInputError):
    """Raised when a media asset id is missing or still a URN."""

    @classmethod
    def missing(cls) -> InvalidAssetIdError:
        """Return an error for an empty asset id."""
        return cls("Missing assetId", field="assetId")

    @classmethod
    def still_urn(cls, asset_id: str) -> InvalidAssetIdError:
        """Return an error for an id that still contains URN separators."""
        return cls(
            f"Invalid assetId {asset_id!r} (does it still include a URN?)",
            field="assetId",
        )


class LinkedInConfigError(RuntimeError):
    """Raised when LinkedIn client configuration is invalid."""

    @classmethod
    def invalid_timeout(cls, raw: str) -> LinkedInConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        msg = f"LIGROWTH_LINKEDIN_TIMEOUT_S must be a positive number, got: {raw!r}"
        return cls(msg)


class OAuthConfigError(LinkedInConfigError):
    """Raised when OAuth client credentials are missing for a flow."""

    def __init__(self, message: str, *, flow: str) -> None:
        """Initialise with a message and the OAuth flow name."""
        self.flow = flow
        super().__init__(message)

    @classmethod
    def missing_client_id(cls, flow: str) -> OAuthConfigError:
        """Return an error when no client id is configured for ``flow``."""
        return cls(f"Missing client ID for type: {flow}", flow=flow)

    @classmethod
    def missing_credentials(cls, flow: str) -> OAuthConfigError:
        """Return an error when the client id or secret is missing."""
        return cls(f"Missing client credentials for state: {flow}", flow=flow)


class OAuthExchangeError(LinkedInError):
    """Raised when LinkedIn rejects an authorization code exchange."""

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> OAuthExchangeError:
        """Build an error from the ``error`` fields of a token response."""
        detail = payload.get("error_description") or payload.get("error")
        return cls(str(detail))


__all__ = [
    "InvalidAssetIdError",
    "InvalidSnapshotDomainError",
    "LinkedInConfigError",
    "LinkedInError",
    "LinkedInInputError",
    "LinkedInResponseShapeError",
    "LinkedInTransportError",
    "OAuthConfigError",
    "OAuthExchangeError",
    "UpstreamRequestError",
]
