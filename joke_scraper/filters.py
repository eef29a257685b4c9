from __future__ import annotations

from typing import Optional

from .models import JokeRecord


def accept(record: JokeRecord, limit: Optional[int]) -> bool:
    """True when no limit is set or the body is at most `limit` characters."""
    return limit is None or len(record.body) <= limit


class LengthFilter:
    """Drops records whose body is longer than a fixed character limit."""

    def __init__(self, limit: Optional[int] = None) -> None:
        self._limit = limit

    def accept(self, record: JokeRecord) -> bool:
        return accept(record, self._limit)

    @property
    def limit(self) -> Optional[int]:
        return self._limit
