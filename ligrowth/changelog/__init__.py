"""Member changelog fetching and grouping.

* **Fetching** - one bounded page of ``memberChangeLogs`` events per call.
* **Grouping** - stable partition by resource name and week bucket keys.
"""

from __future__ import annotations

from .fetcher import (
    fetch_changelog_page,
    fetch_changelog_window,
    fetch_last_28_days_changelog,
)
from .grouping import (
    get_week_from_timestamp,
    group_events_by_resource_name,
    summarize_by_week,
)
from .models import ChangelogEvent, EventGroups

__all__ = [
    "ChangelogEvent",
    "EventGroups",
    "fetch_changelog_page",
    "fetch_changelog_window",
    "fetch_last_28_days_changelog",
    "get_week_from_timestamp",
    "group_events_by_resource_name",
    "summarize_by_week",
]
