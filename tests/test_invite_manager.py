"""Tests for the invite lifecycle."""

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from models.invite import InviteModel
from utils.invite_manager import InviteManager


@pytest.fixture
def pair(make_user):
    return make_user("student", name="Alice"), make_user("student", name="Bob")


def test_send_creates_pending(db, pair):
    alice, bob = pair
    invite = InviteManager(db).send(
        alice.user_id, bob.user_id, "Join us?", goal="Win", role="Backend"
    )
    assert invite.status == "pending"
    assert invite.goal == "Win"
    assert invite.role == "Backend"


@pytest.mark.parametrize("message", ["hi", "", "a much longer message"])
def test_self_invite_is_invalid(db, pair, message):
    alice, _ = pair
    with pytest.raises(InvalidInputError):
        InviteManager(db).send(alice.user_id, alice.user_id, message)


@pytest.mark.parametrize("message", ["", "   ", None])
def test_empty_message_is_invalid(db, pair, message):
    alice, bob = pair
    with pytest.raises(InvalidInputError):
        InviteManager(db).send(alice.user_id, bob.user_id, message)


def test_unknown_recipient(db, pair):
    alice, _ = pair
    with pytest.raises(NotFoundError):
        InviteManager(db).send(alice.user_id, "ghost", "hello")


def test_duplicate_pending_conflicts_until_resolved(db, pair):
    alice, bob = pair
    manager = InviteManager(db)
    first = manager.send(alice.user_id, bob.user_id, "one")
    with pytest.raises(ConflictError):
        manager.send(alice.user_id, bob.user_id, "two")

    manager.respond(first.invite_id, bob.user_id, "declined")
    again = manager.send(alice.user_id, bob.user_id, "three")
    assert again.status == "pending"
    assert again.invite_id != first.invite_id


def test_reverse_direction_is_independent(db, pair):
    alice, bob = pair
    manager = InviteManager(db)
    manager.send(alice.user_id, bob.user_id, "hey")
    reverse = manager.send(bob.user_id, alice.user_id, "hey back")
    assert reverse.status == "pending"


def test_storage_rejects_second_pending_row(db, pair):
    alice, bob = pair
    InviteManager(db).send(alice.user_id, bob.user_id, "one")
    db.add(
        InviteModel(
            invite_id="dup",
            from_id=alice.user_id,
            to_id=bob.user_id,
            message="two",
            status="pending",
            created_at="2026-01-01T00:00:00+00:00",
            updated_at="2026-01-01T00:00:00+00:00",
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_respond_exactly_once(db, pair):
    alice, bob = pair
    manager = InviteManager(db)
    invite = manager.send(alice.user_id, bob.user_id, "hi")

    accepted = manager.respond(invite.invite_id, bob.user_id, "accepted")
    assert accepted.status == "accepted"

    with pytest.raises(ConflictError):
        manager.respond(invite.invite_id, bob.user_id, "declined")

    db.expire_all()
    stored = db.query(InviteModel).filter(InviteModel.invite_id == invite.invite_id).one()
    assert stored.status == "accepted"


def test_respond_by_sender_forbidden(db, pair):
    alice, bob = pair
    manager = InviteManager(db)
    invite = manager.send(alice.user_id, bob.user_id, "hi")
    with pytest.raises(ForbiddenError):
        manager.respond(invite.invite_id, alice.user_id, "accepted")


def test_respond_missing_invite(db, pair):
    _, bob = pair
    with pytest.raises(NotFoundError):
        InviteManager(db).respond("missing", bob.user_id, "accepted")


def test_respond_invalid_outcome(db, pair):
    alice, bob = pair
    manager = InviteManager(db)
    invite = manager.send(alice.user_id, bob.user_id, "hi")
    with pytest.raises(InvalidInputError):
        manager.respond(invite.invite_id, bob.user_id, "maybe")


def test_listings_attach_counterpart(db, pair, make_user):
    alice, bob = pair
    carol = make_user("admin", name="Carol")
    manager = InviteManager(db)
    manager.send(alice.user_id, bob.user_id, "first")
    manager.send(carol.user_id, bob.user_id, "second")

    received = manager.list_received(bob.user_id)
    assert [i.message for i in received] == ["second", "first"]
    assert received[0].sender.name == "Carol"
    assert received[0].sender.role == "admin"

    sent = manager.list_sent(alice.user_id)
    assert len(sent) == 1
    assert sent[0].recipient.name == "Bob"
    assert sent[0].recipient.email == bob.email


def test_same_timestamp_invites_list_in_stable_order(db, pair, make_user):
    alice, bob = pair
    carol = make_user("student", name="Carol")
    manager = InviteManager(db)
    manager.send(alice.user_id, bob.user_id, "one")
    manager.send(carol.user_id, bob.user_id, "two")
    db.query(InviteModel).update(
        {InviteModel.created_at: "2024-01-01T00:00:00+00:00"},
        synchronize_session=False,
    )
    db.commit()

    ids = [i.invite_id for i in manager.list_received(bob.user_id)]
    assert ids == sorted(ids, reverse=True)
    assert ids == [i.invite_id for i in manager.list_received(bob.user_id)]
