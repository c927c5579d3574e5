"""Domain Types — verifies identity values, enums and limits.

Tests:
    - NewType wrappers compare equal to the wrapped int
    - Enums serialize to their string values
    - Identity is immutable, hides the credential and compares without it
"""

import dataclasses
from types import SimpleNamespace

import pytest

from huddle.core.domain_types import (
    Action, ChannelId, Identity, MessageId, MessageType, UserId,
    MESSAGE_MAX_LENGTH, USERNAME_MAX_LENGTH, utc_now,
)


def test_identity_types_wrap_int():
    assert UserId(7) == 7
    assert ChannelId(7) == 7
    assert MessageId(7) == 7


def test_message_type_values():
    assert {t.value for t in MessageType} == {"TEXT", "IMAGE", "FILE", "SYSTEM"}


def test_action_is_str_enum():
    assert Action.POST == "post"
    assert isinstance(Action.EDIT.value, str)


def test_limits():
    assert USERNAME_MAX_LENGTH == 50
    assert MESSAGE_MAX_LENGTH == 2000


# ─── Identity ────────────────────────────────────────────────────

def test_identity_is_frozen():
    identity = Identity(user_id=UserId(1), username="alice")
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.username = "mallory"


def test_identity_repr_hides_credential():
    identity = Identity(user_id=UserId(1), username="alice", credential="$2b$hash")
    assert "$2b$hash" not in repr(identity)


def test_identity_equality_ignores_credential():
    a = Identity(user_id=UserId(1), username="alice", credential="x")
    b = Identity(user_id=UserId(1), username="alice", credential="y")
    assert a == b


def test_identity_from_record():
    record = SimpleNamespace(id=3, username="bob", credential="hashed")
    identity = Identity.from_record(record)
    assert identity.user_id == 3
    assert identity.username == "bob"
    assert identity.credential == "hashed"
    assert identity.roles == frozenset()


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None
