"""Clock — the single source of "now" for the core.

Invariants:
    - utc_now() always returns a timezone-aware UTC datetime
    - as_utc() preserves the instant: aware values are converted, naive values are read as UTC

Design Decisions:
    - Time-dependent operations take an explicit `now` and fall back to utc_now(),
      so tests pin the clock without patching
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize to aware UTC (SQLite and naive API input carry no tzinfo)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
