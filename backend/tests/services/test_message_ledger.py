"""Message Ledger — membership on post, ownership on edit/delete, timelines.

Tests cover:
    - non-member post rejected; member post visible in recent()
    - membership is checked at post time only
    - edit/delete by someone else rejected with NotOwner
    - an edit whose UPDATE matches no row reports MessageNotFound
    - updated_at strictly increases even when the clock has not moved
    - recent() newest first with id tie-break; page() metadata
"""

import pytest

from huddle.core.domain_types import ChannelId, MessageId
from huddle.core.errors import (
    ChannelNotFoundError, MessageNotFoundError, NotAMemberError, NotOwnerError,
)


@pytest.fixture
async def general(registry, make_identity):
    """Channel 'general' created by alice; returns (channel_id, alice, bob)."""
    alice = await make_identity("alice")
    bob = await make_identity("bob")
    channel = await registry.create("general", None, alice)
    return ChannelId(channel.id), alice, bob


# ─── post ────────────────────────────────────────────────────────

async def test_member_post_appears_in_recent(ledger, general):
    channel_id, alice, _ = general
    message = await ledger.post("hello", alice, channel_id)
    recent = await ledger.recent(channel_id, 50)
    assert [m.id for m in recent] == [message.id]
    assert message.sender_id == alice.user_id
    assert message.message_type == "TEXT"
    assert message.created_at == message.updated_at


async def test_non_member_post_rejected(ledger, general):
    channel_id, _, bob = general
    with pytest.raises(NotAMemberError):
        await ledger.post("hi", bob, channel_id)
    assert await ledger.recent(channel_id, 50) == []


async def test_post_to_unknown_channel(ledger, general):
    _, alice, _ = general
    with pytest.raises(ChannelNotFoundError):
        await ledger.post("hi", alice, ChannelId(999))


async def test_messages_survive_sender_leaving(ledger, registry, general):
    channel_id, alice, bob = general
    await registry.join(channel_id, bob)
    message = await ledger.post("before leaving", bob, channel_id)
    await registry.leave(channel_id, bob)

    assert [m.id for m in await ledger.recent(channel_id, 50)] == [message.id]
    edited = await ledger.edit(MessageId(message.id), "still mine", bob)
    assert edited.content == "still mine"


# ─── edit / delete ───────────────────────────────────────────────

async def test_edit_by_other_user_rejected(ledger, registry, general):
    channel_id, alice, bob = general
    await registry.join(channel_id, bob)
    message = await ledger.post("hello", alice, channel_id)
    with pytest.raises(NotOwnerError):
        await ledger.edit(MessageId(message.id), "hacked", bob)
    assert (await ledger.get(MessageId(message.id))).content == "hello"


async def test_edit_updates_content_and_timestamp(ledger, general, clock):
    channel_id, alice, _ = general
    message = await ledger.post("hello", alice, channel_id)
    created_at = message.created_at
    clock.advance(seconds=30)

    edited = await ledger.edit(MessageId(message.id), "hello, world", alice)

    assert edited.content == "hello, world"
    assert edited.created_at == created_at
    assert edited.updated_at > created_at


async def test_edit_without_clock_movement_still_advances(ledger, general):
    channel_id, alice, _ = general
    message = await ledger.post("v1", alice, channel_id)
    first = await ledger.edit(MessageId(message.id), "v2", alice)
    first_updated = first.updated_at
    second = await ledger.edit(MessageId(message.id), "v3", alice)
    assert first_updated > message.created_at
    assert second.updated_at > first_updated


async def test_delete_by_other_user_rejected(ledger, general):
    channel_id, alice, bob = general
    message = await ledger.post("hello", alice, channel_id)
    with pytest.raises(NotOwnerError):
        await ledger.delete(MessageId(message.id), bob)


async def test_delete_by_sender(ledger, general):
    channel_id, alice, _ = general
    message = await ledger.post("hello", alice, channel_id)
    await ledger.delete(MessageId(message.id), alice)
    with pytest.raises(MessageNotFoundError):
        await ledger.get(MessageId(message.id))
    with pytest.raises(MessageNotFoundError):
        await ledger.delete(MessageId(message.id), alice)


async def test_edit_unknown_message(ledger, general):
    _, alice, _ = general
    with pytest.raises(MessageNotFoundError):
        await ledger.edit(MessageId(999), "x", alice)


async def test_edit_racing_delete_reports_not_found(
    ledger, messages, general, monkeypatch,
):
    channel_id, alice, _ = general
    message = await ledger.post("hello", alice, channel_id)

    async def _row_vanished(message_id, content, updated_at):
        return False

    monkeypatch.setattr(messages, "update_content", _row_vanished)
    with pytest.raises(MessageNotFoundError):
        await ledger.edit(MessageId(message.id), "too late", alice)


# ─── timelines ───────────────────────────────────────────────────

async def test_recent_is_newest_first_and_limited(ledger, general, clock):
    channel_id, alice, _ = general
    m1 = await ledger.post("one", alice, channel_id)
    clock.advance(seconds=1)
    m2 = await ledger.post("two", alice, channel_id)
    clock.advance(seconds=1)
    m3 = await ledger.post("three", alice, channel_id)

    recent = await ledger.recent(channel_id, 2)
    assert [m.id for m in recent] == [m3.id, m2.id]
    assert m1.id not in [m.id for m in recent]


async def test_equal_timestamps_break_ties_by_id(ledger, general):
    channel_id, alice, _ = general
    first = await ledger.post("a", alice, channel_id)
    second = await ledger.post("b", alice, channel_id)
    recent = await ledger.recent(channel_id, 10)
    assert [m.id for m in recent] == [second.id, first.id]


async def test_recent_on_unknown_channel_is_empty(ledger):
    assert await ledger.recent(ChannelId(999), 50) == []


async def test_page_metadata(ledger, general, clock):
    channel_id, alice, _ = general
    posted = []
    for i in range(5):
        posted.append(await ledger.post(f"m{i}", alice, channel_id))
        clock.advance(seconds=1)

    first = await ledger.page(channel_id, 0, 2)
    last = await ledger.page(channel_id, 2, 2)

    assert [m.id for m in first.items] == [posted[4].id, posted[3].id]
    assert first.total_items == 5
    assert first.total_pages == 3
    assert first.has_next
    assert [m.id for m in last.items] == [posted[0].id]
    assert not last.has_next


async def test_page_unknown_channel(ledger):
    with pytest.raises(ChannelNotFoundError):
        await ledger.page(ChannelId(999), 0, 20)
