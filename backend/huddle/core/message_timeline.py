"""Message Timeline — ordering, pagination and edit-timestamp rules.

Invariants:
    - Timelines are newest first: created_at DESC, then id DESC on ties
    - Pages are zero-based; page_index * page_size is the offset
    - updated_at strictly increases on every edit, even if the clock has not moved

Design Decisions:
    - id as the secondary key: ids are assigned in insertion order, so equal
      timestamps still paginate the same way on every call
    - Pure helpers here; the repository applies the same ordering in SQL
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Generic, TypeVar

T = TypeVar("T")

EDIT_TICK = timedelta(microseconds=1)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_updated_at(previous: datetime, now: datetime) -> datetime:
    """Edit timestamp: now, or one tick past previous if the clock lags."""
    previous, now = as_utc(previous), as_utc(now)
    if now > previous:
        return now
    return previous + EDIT_TICK


def page_offset(page_index: int, page_size: int) -> int:
    return page_index * page_size


def total_pages(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total_items / page_size)


@dataclass(frozen=True)
class MessagePage(Generic[T]):
    """One slice of a channel timeline."""
    items: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_items, self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
