"""Common time utilities."""

from __future__ import annotations

import datetime as dt

MS_PER_DAY = 86_400_000


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def epoch_ms(moment: dt.datetime | None = None) -> int:
    """Return ``moment`` (default: now) as integer epoch milliseconds."""
    value = moment if moment is not None else utcnow()
    return int(value.timestamp() * 1000)
