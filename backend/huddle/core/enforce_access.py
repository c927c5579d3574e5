"""Access Enforcement — the authorization gate for channel and message actions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - POST on a channel requires actor ∈ channel.member_ids
    - EDIT / DELETE on a message require actor == message.sender_id
    - Every other action is open to any authenticated actor

Design Decisions:
    - Resources typed structurally (Protocol): ORM rows and test doubles both qualify
    - can_act returns bool; require_access raises the matching domain error so
      services keep one line per check
"""

from typing import Protocol, Union

from huddle.core.domain_types import Action, Identity
from huddle.core.errors import NotAMemberError, NotOwnerError


class ChannelResource(Protocol):
    id: int

    @property
    def member_ids(self) -> frozenset[int]: ...


class MessageResource(Protocol):
    id: int
    sender_id: int


Resource = Union[ChannelResource, MessageResource]

OPEN_ACTIONS = frozenset({
    Action.READ, Action.CREATE_CHANNEL, Action.JOIN, Action.LEAVE,
})
OWNER_ACTIONS = frozenset({Action.EDIT, Action.DELETE})


def is_member(actor: Identity, channel: ChannelResource) -> bool:
    return actor.user_id in channel.member_ids


def is_sender(actor: Identity, message: MessageResource) -> bool:
    return actor.user_id == message.sender_id


def can_act(actor: Identity, resource: Resource, action: Action) -> bool:
    """Decide whether actor may perform action on resource."""
    if action in OPEN_ACTIONS:
        return True
    if action == Action.POST:
        return is_member(actor, resource)
    if action in OWNER_ACTIONS:
        return is_sender(actor, resource)
    return False


def require_access(actor: Identity, resource: Resource, action: Action) -> None:
    """Raise NotAMemberError / NotOwnerError when can_act denies."""
    if can_act(actor, resource, action):
        return
    if action == Action.POST:
        raise NotAMemberError(resource.id)
    raise NotOwnerError(resource.id)
