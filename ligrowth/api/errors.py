"""Domain exceptions and Falcon error handlers for the API layer.

Resources raise domain exceptions from ``ligrowth.linkedin``,
``ligrowth.synergy`` and this module; the handlers below translate them into
JSON error responses with ``title`` and ``description`` members.

Usage
-----
Register every handler on the Falcon app::

    from ligrowth.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from ligrowth.linkedin.errors import (
    InvalidSnapshotDomainError,
    LinkedInError,
    LinkedInInputError,
    OAuthConfigError,
    OAuthExchangeError,
    UpstreamRequestError,
)
from ligrowth.logging import get_logger, log_error, log_exception
from ligrowth.synergy.errors import PartnerIdRequiredError

if typ.TYPE_CHECKING:
    from falcon.asgi import App, Request, Response

__all__ = [
    "InvalidInputError",
    "MissingCredentialError",
    "register_error_handlers",
]

logger = get_logger(__name__)


class MissingCredentialError(Exception):
    """Raised when a request carries no bearer token."""

    def __init__(self) -> None:
        """Initialise with the fixed client-facing message."""
        super().__init__("No authorization token")


class InvalidInputError(Exception):
    """Raised for client validation errors that should map to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the validation failure.
    field
        Optional name of the input field that failed validation.

    """

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialise with a validation reason and optional field name."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


def _error_media(
    title: str, description: str, **extra: object
) -> dict[str, object]:
    media: dict[str, object] = {"title": title, "description": description}
    media.update({key: value for key, value in extra.items() if value is not None})
    return media


async def handle_missing_credential(
    _req: Request,
    resp: Response,
    ex: MissingCredentialError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``MissingCredentialError`` to HTTP 401."""
    resp.status = falcon.HTTP_401
    resp.media = _error_media("Unauthorized", str(ex))


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to HTTP 400."""
    resp.status = falcon.HTTP_400
    resp.media = _error_media("Invalid input", ex.reason, field=ex.field)


async def handle_linkedin_input(
    _req: Request,
    resp: Response,
    ex: LinkedInInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map rejected LinkedIn parameters to HTTP 400.

    Snapshot domain errors also list the accepted domains.
    """
    valid = (
        list(ex.valid_domains) if isinstance(ex, InvalidSnapshotDomainError) else None
    )
    resp.status = falcon.HTTP_400
    resp.media = _error_media(
        "Invalid input", ex.reason, field=ex.field, validDomains=valid
    )


async def handle_partner_id_required(
    _req: Request,
    resp: Response,
    ex: PartnerIdRequiredError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``PartnerIdRequiredError`` to HTTP 400."""
    resp.status = falcon.HTTP_400
    resp.media = _error_media("Invalid input", str(ex), field="partnerId")


async def handle_upstream_request(
    req: Request,
    resp: Response,
    ex: UpstreamRequestError,
    _params: dict[str, typ.Any],
) -> None:
    """Relay LinkedIn's status code and body text to the caller."""
    log_error(
        logger,
        "LinkedIn returned HTTP %d while serving %s",
        ex.status_code,
        req.path,
    )
    resp.status = falcon.code_to_http_status(ex.status_code)
    resp.media = _error_media(
        "LinkedIn request failed",
        str(ex),
        status=ex.status_code,
        details=ex.body,
    )


async def handle_oauth_config(
    _req: Request,
    resp: Response,
    ex: OAuthConfigError,
    _params: dict[str, typ.Any],
) -> None:
    """Map missing OAuth client configuration to HTTP 400."""
    log_error(logger, "%s", ex)
    resp.status = falcon.HTTP_400
    resp.media = _error_media("Missing client configuration", str(ex))


async def handle_oauth_exchange(
    _req: Request,
    resp: Response,
    ex: OAuthExchangeError,
    _params: dict[str, typ.Any],
) -> None:
    """Map a rejected authorization code exchange to HTTP 500."""
    log_exception(logger, "OAuth callback error", ex)
    resp.status = falcon.HTTP_500
    resp.media = _error_media("OAuth token exchange failed", str(ex))


async def handle_linkedin_error(
    _req: Request,
    resp: Response,
    ex: LinkedInError,
    _params: dict[str, typ.Any],
) -> None:
    """Map transport and response-shape failures to HTTP 502."""
    log_exception(logger, "LinkedIn request failed", ex)
    resp.status = falcon.HTTP_502
    resp.media = _error_media("LinkedIn unavailable", str(ex))


def register_error_handlers(app: App) -> None:
    """Register all domain error handlers on ``app``.

    Falcon selects the handler registered for the most specific class in the
    exception's MRO, so the generic ``LinkedInError`` handler only catches
    what the specific ones do not.
    """
    app.add_error_handler(MissingCredentialError, handle_missing_credential)
    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(LinkedInInputError, handle_linkedin_input)
    app.add_error_handler(PartnerIdRequiredError, handle_partner_id_required)
    app.add_error_handler(OAuthConfigError, handle_oauth_config)
    app.add_error_handler(LinkedInError, handle_linkedin_error)
    app.add_error_handler(UpstreamRequestError, handle_upstream_request)
    app.add_error_handler(OAuthExchangeError, handle_oauth_exchange)
