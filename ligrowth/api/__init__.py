"""ligrowth HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that proxies LinkedIn on behalf of the web client.

Public API
----------
create_app
    Application factory registering health endpoints and, when a LinkedIn
    client is provided, the proxy, OAuth and partner endpoints.
"""

from ligrowth.api.app import create_app

__all__ = ["create_app"]
