"""Lightweight wall-clock timestamps for log lines and file names."""

from __future__ import annotations

import time
from datetime import datetime, timezone

_NS_PER_SECOND = 1_000_000_000


class Timestamp:
    """A point in wall-clock time with nanosecond resolution.

    ``now`` is nanoseconds since the Unix epoch; it defaults to the current time.
    """

    def __init__(self, now: int | None = None) -> None:
        self.nanoseconds = time.time_ns() if now is None else int(now)

    def __int__(self) -> int:
        """Whole seconds since the epoch."""
        return self.nanoseconds // _NS_PER_SECOND

    @property
    def datetime(self) -> datetime:
        """The timestamp as a timezone-aware UTC datetime (microsecond resolution)."""
        seconds, ns = divmod(self.nanoseconds, _NS_PER_SECOND)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=ns // 1000)

    def __str__(self) -> str:
        """Local time as ``YYYY-MM-DD HH:MM:SS.nnnnnnnnn TZ``."""
        local = time.localtime(int(self))
        seconds = time.strftime("%Y-%m-%d %H:%M:%S", local)
        fraction = f"{self.nanoseconds % _NS_PER_SECOND:09d}"
        zone = time.strftime("%Z", local)
        return f"{seconds}.{fraction} {zone}"

    def __repr__(self) -> str:
        return f"Timestamp({self.nanoseconds})"


def file_safe_utc(now: datetime | None = None) -> str:
    """UTC time as ISO 8601 with milliseconds and no colons, e.g. for file names.

    A naive ``now`` is taken to be UTC already.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    text = f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}Z"
    return text.replace(":", "")