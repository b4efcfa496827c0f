"""Invitation lifecycle through the store: mark_sent, register, deregister."""

import pytest

from invitations.domain.exceptions import DomainValidationError, InvitationNotFoundError
from invitations.domain.models.invitation import Invitation, InvitationState


async def _created(store) -> Invitation:
    return await store.create(Invitation(first_name="Ann", last_name="Lee", email="ann@x.com"))


async def _sent(store) -> Invitation:
    created = await _created(store)
    return await store.mark_sent(created.id)


async def test_mark_sent_moves_initial_to_sent(store, repository):
    created = await _created(store)
    sent = await store.mark_sent(created.id)

    assert sent.invitation_state == InvitationState.SENT
    assert sent.id == created.id
    assert len(repository.saves) == 2


async def test_mark_sent_keeps_answered_state(store):
    sent = await _sent(store)
    await store.register(sent.id, "yes")

    again = await store.mark_sent(sent.id)

    assert again.invitation_state == InvitationState.REGISTERED


@pytest.mark.parametrize("action", ["register", "deregister"])
async def test_register_and_deregister_require_sent(store, action):
    created = await _created(store)

    with pytest.raises(DomainValidationError) as exc_info:
        await getattr(store, action)(created.id, "hello")

    assert "must be sent before" in exc_info.value.message
    assert store.read(created.id).invitation_state == InvitationState.INITIAL


async def test_register_sets_state_comment_and_stamp(store, actor):
    sent = await _sent(store)
    actor.actor = "guest"

    registered = await store.register(sent.id, "confirmed")

    assert registered.invitation_state == InvitationState.REGISTERED
    assert registered.comment == "confirmed"
    assert registered.modified_by == "guest"
    assert registered.modified_at > sent.modified_at


async def test_register_twice_is_idempotent_with_warning(store, logger):
    sent = await _sent(store)
    await store.register(sent.id, "first")

    again = await store.register(sent.id, "second")

    assert again.invitation_state == InvitationState.REGISTERED
    assert again.comment == "second"
    logger.warning.assert_called_once()
    assert logger.warning.call_args.args[0] == "invitation_already_registered"


async def test_deregister_twice_is_idempotent_with_warning(store, logger):
    sent = await _sent(store)
    await store.deregister(sent.id, "cannot come")

    again = await store.deregister(sent.id, "still cannot")

    assert again.invitation_state == InvitationState.EXCUSED
    assert again.comment == "still cannot"
    assert logger.warning.call_args.args[0] == "invitation_already_excused"


async def test_excused_guest_can_register_again(store):
    sent = await _sent(store)
    await store.deregister(sent.id, "no")

    registered = await store.register(sent.id, "changed my mind")

    assert registered.invitation_state == InvitationState.REGISTERED


async def test_register_unknown_raises_not_found(store):
    with pytest.raises(InvitationNotFoundError):
        await store.register("missing", None)
