"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the root identity; Channel and Message hold immutable back-references
    - Membership lives only in channel_members (no reverse collection on User)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from huddle.models.user import User  # noqa: F401
from huddle.models.channel import Channel, channel_members  # noqa: F401
from huddle.models.message import Message  # noqa: F401
