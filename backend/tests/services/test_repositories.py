"""SQL Repositories — store-level behavior the services rely on.

Tests cover:
    - user create() returns None on a unique-constraint violation
    - set_online toggles presence and last_active
    - channel add/remove report whether the member set changed
    - a duplicate concurrent join is absorbed by the composite key
    - message update/delete report a missing row instead of succeeding
    - timestamps come back timezone-aware
"""

from datetime import timedelta

from huddle.core.domain_types import ChannelId, MessageId, MessageType, UserId


async def _user(users, clock, name: str):
    return await users.create(
        username=name, email=f"{name}@example.com", credential="x",
        display_name=name, now=clock(),
    )


# ─── users ───────────────────────────────────────────────────────

async def test_user_create_conflict_returns_none(users, clock):
    await _user(users, clock, "alice")
    duplicate = await users.create(
        username="alice", email="fresh@example.com", credential="x",
        display_name="alice", now=clock(),
    )
    assert duplicate is None
    assert await users.exists_by_username("alice")
    assert not await users.exists_by_email("fresh@example.com")


async def test_set_online_updates_presence(users, clock):
    user = await _user(users, clock, "alice")
    later = clock.advance(minutes=1)
    await users.set_online(UserId(user.id), True, later)
    stored = await users.find_by_id(UserId(user.id))
    assert stored.online is True
    assert stored.last_active == later


async def test_timestamps_are_aware(users, clock):
    user = await _user(users, clock, "alice")
    stored = await users.find_by_email("alice@example.com")
    assert stored.id == user.id
    assert stored.created_at.tzinfo is not None
    assert stored.created_at == clock()


# ─── channels ────────────────────────────────────────────────────

async def test_channel_create_conflict_returns_none(users, channels, clock):
    alice = await _user(users, clock, "alice")
    await channels.create("general", None, False, UserId(alice.id), clock())
    assert await channels.create(
        "general", None, False, UserId(alice.id), clock(),
    ) is None


async def test_add_and_remove_member_report_change(users, channels, clock):
    alice = await _user(users, clock, "alice")
    bob = await _user(users, clock, "bob")
    channel = await channels.create(
        "general", None, False, UserId(alice.id), clock(),
    )
    channel_id = ChannelId(channel.id)

    assert await channels.add_member(channel_id, UserId(bob.id))
    assert not await channels.add_member(channel_id, UserId(bob.id))
    assert await channels.remove_member(channel_id, UserId(bob.id))
    assert not await channels.remove_member(channel_id, UserId(bob.id))


async def test_concurrent_join_absorbed_by_primary_key(
    users, channels, clock, monkeypatch,
):
    alice = await _user(users, clock, "alice")
    bob = await _user(users, clock, "bob")
    alice_id, bob_id = UserId(alice.id), UserId(bob.id)
    channel = await channels.create("general", None, False, alice_id, clock())
    channel_id = ChannelId(channel.id)
    await channels.add_member(channel_id, bob_id)

    async def _not_seen_yet(channel_id, user_id):
        return False

    # the membership row lands between the check and the insert
    monkeypatch.setattr(channels, "is_member", _not_seen_yet)
    assert not await channels.add_member(channel_id, bob_id)

    stored = await channels.find_by_id(channel_id)
    assert stored.member_ids == {alice_id, bob_id}


# ─── messages ────────────────────────────────────────────────────

async def test_update_and_delete_missing_message(messages, clock):
    assert not await messages.delete_by_id(MessageId(999))
    assert not await messages.update_content(MessageId(999), "x", clock())


async def test_count_and_page(users, channels, messages, clock):
    alice = await _user(users, clock, "alice")
    channel = await channels.create(
        "general", None, False, UserId(alice.id), clock(),
    )
    for i in range(3):
        await messages.create(
            f"m{i}", UserId(alice.id), ChannelId(channel.id),
            MessageType.TEXT, clock() + timedelta(seconds=i),
        )
    assert await messages.count_by_channel(ChannelId(channel.id)) == 3
    page = await messages.page_by_channel(ChannelId(channel.id), 1, 5)
    assert [m.content for m in page] == ["m1", "m0"]
