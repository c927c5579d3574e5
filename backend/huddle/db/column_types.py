"""UTC DateTime column — always binds and returns timezone-aware UTC values.

Invariants:
    - Naive datetimes are interpreted as UTC on the way in
    - Values read back are aware even on backends that drop tzinfo (SQLite)

Design Decisions:
    - TypeDecorator over per-call normalization: ordering comparisons and
      updated_at arithmetic never mix naive and aware values
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
