"""Typed member changelog events."""

from __future__ import annotations

import typing as typ

import msgspec


class ChangelogEvent(
    msgspec.Struct, kw_only=True, frozen=True, rename="camel", omit_defaults=True
):
    """One change notification from the member changelog.

    Field names are decoded from, and encoded back to, LinkedIn's camelCase.

    Attributes
    ----------
    resource_name
        Type of the affected resource; the grouping key. Many events share it.
    method
        Mutation verb reported upstream (``CREATE``, ``UPDATE``, ``DELETE``...).
    captured_at, processed_at
        Optional epoch-millisecond timestamps.
    activity, processed_activity
        Opaque payloads passed through unmodified.
    owner, actor, resource_id
        Optional URN identifiers.

    """

    resource_name: str
    method: str
    captured_at: int | None = None
    processed_at: int | None = None
    activity: typ.Any = None
    processed_activity: typ.Any = None
    owner: str | None = None
    actor: str | None = None
    resource_id: str | None = None


EventGroups: typ.TypeAlias = dict[str, list[ChangelogEvent]]

__all__ = ["ChangelogEvent", "EventGroups"]
