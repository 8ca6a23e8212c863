"""Shared test utilities."""

from __future__ import annotations

import asyncio
import json
import typing as typ

import httpx

T = typ.TypeVar("T")


def run_async(coro_func: typ.Callable[[], typ.Coroutine[typ.Any, typ.Any, T]]) -> T:
    """Execute an async callable within the test context."""
    return asyncio.run(coro_func())


def json_response(payload: object, *, status_code: int = 200) -> httpx.Response:
    """Build an upstream JSON response with the right content type."""
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


AUTH_HEADERS = {"Authorization": "Bearer member-token"}
