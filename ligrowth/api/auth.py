"""Bearer token extraction for API resources."""

from __future__ import annotations

import typing as typ

from ligrowth.api.errors import MissingCredentialError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request

_BEARER_SCHEME = "bearer"


def bearer_token(req: Request) -> str:
    """Return the bearer token from the ``Authorization`` header.

    A header without the ``Bearer`` scheme is treated as the raw token.

    Raises
    ------
    MissingCredentialError
        If the header is absent or carries an empty token.

    """
    header = (req.get_header("Authorization") or "").strip()
    scheme, _, rest = header.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        header = rest.strip()
    if not header:
        raise MissingCredentialError
    return header
