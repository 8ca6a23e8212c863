"""Client-side bucketing of changelog events."""

from __future__ import annotations

import datetime as dt
import math
import typing as typ

from ligrowth.common.time import MS_PER_DAY

from .models import ChangelogEvent, EventGroups

if typ.TYPE_CHECKING:
    import collections.abc as cabc

UNKNOWN_WEEK = "unknown"
_DAYS_PER_WEEK = 7


def group_events_by_resource_name(
    events: cabc.Iterable[ChangelogEvent],
) -> EventGroups:
    """Partition ``events`` by ``resource_name``.

    Groups appear in first-seen order and each group keeps the input order
    of its events. Nothing is sorted, deduplicated or dropped.
    """
    groups: EventGroups = {}
    for event in events:
        groups.setdefault(event.resource_name, []).append(event)
    return groups


def _to_datetime(ms: int, tz: dt.tzinfo | None) -> dt.datetime:
    if tz is None:
        return dt.datetime.fromtimestamp(ms / 1000).astimezone()
    return dt.datetime.fromtimestamp(ms / 1000, tz=tz)


def _first_of_january(year: int, tz: dt.tzinfo | None) -> dt.datetime:
    if tz is None:
        return dt.datetime(year, 1, 1).astimezone()  # noqa: DTZ001 - local midnight
    return dt.datetime(year, 1, 1, tzinfo=tz)


def get_week_from_timestamp(
    ms: int | None = None, *, tz: dt.tzinfo | None = None
) -> str:
    """Return a ``YYYY-Www`` week key for an epoch-millisecond timestamp.

    The week number is::

        ceil(((ms - first_jan) / 86400000 + weekday(first_jan) + 1) / 7)

    where ``first_jan`` is local midnight on 1 January of the timestamp's year
    and ``weekday`` counts 0 for Sunday through 6 for Saturday. This is not
    ISO-8601 numbering: the first week can be week 2 and DST shifts move the
    boundary by an hour. Existing week keys depend on this exact arithmetic.

    Parameters
    ----------
    ms
        Epoch milliseconds. ``None`` and ``0`` yield ``"unknown"``.
    tz
        Time zone used instead of the process local zone.

    """
    if not ms:
        return UNKNOWN_WEEK
    moment = _to_datetime(ms, tz)
    first_jan = _first_of_january(moment.year, tz)
    elapsed_days = (ms - first_jan.timestamp() * 1000) / MS_PER_DAY
    sunday_based_weekday = first_jan.isoweekday() % _DAYS_PER_WEEK
    week = math.ceil((elapsed_days + sunday_based_weekday + 1) / _DAYS_PER_WEEK)
    return f"{moment.year}-W{week:02d}"


def summarize_by_week(
    events: cabc.Iterable[ChangelogEvent], *, tz: dt.tzinfo | None = None
) -> dict[str, int]:
    """Count events per week key of their ``captured_at`` timestamp."""
    counts: dict[str, int] = {}
    for event in events:
        key = get_week_from_timestamp(event.captured_at, tz=tz)
        counts[key] = counts.get(key, 0) + 1
    return counts


__all__ = [
    "UNKNOWN_WEEK",
    "get_week_from_timestamp",
    "group_events_by_resource_name",
    "summarize_by_week",
]
