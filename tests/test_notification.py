"""Tests for the notification service."""

from decimal import Decimal

import pytest

from messledger.domain import errors
from messledger.domain.entities import PaymentDue
from messledger.domain.notification import PAYMENT_NOTIFICATION, payment_due_message


def test_payment_due_message():
    assert payment_due_message(Decimal("467.20")) == (
        "Payment Due: ₹467 to pay for this month's mess expenses."
    )
    assert payment_due_message(Decimal("-1134.50")) == (
        "Payment Due: ₹1135 to receive for this month's mess expenses."
    )
    assert payment_due_message(Decimal("0")) == "Payment Due: ₹0 to pay for this month's mess expenses."


def test_admin_sends_to_member_and_broadcast(services, admin, alice_actor, bob_actor, sample_members):
    services.notifications.send(admin, sample_members["alice"].user_id, "Water is off tomorrow")
    services.notifications.send(admin, "all", "Meeting on Friday")

    alice_inbox = services.notifications.list_for(alice_actor)
    bob_inbox = services.notifications.list_for(bob_actor)
    assert sorted(n.message for n in alice_inbox) == ["Meeting on Friday", "Water is off tomorrow"]
    assert [n.message for n in bob_inbox] == ["Meeting on Friday"]
    # Direct notifications are stored under the canonical key
    assert any(n.user_id == sample_members["alice"].key for n in alice_inbox)


def test_member_may_only_write_to_admin(services, admin, alice_actor, sample_members):
    sent = services.notifications.send(alice_actor, "admin", "Gas is running low")
    assert sent.user_id == "admin"
    assert [n.message for n in services.notifications.list_for(admin)] == ["Gas is running low"]

    with pytest.raises(errors.AuthorizationError):
        services.notifications.send(alice_actor, sample_members["bob"].key, "Hi")
    with pytest.raises(errors.AuthorizationError):
        services.notifications.send(alice_actor, "all", "Hi all")


def test_send_validation(services, admin, sample_members):
    with pytest.raises(errors.ValidationError):
        services.notifications.send(admin, "admin", "   ")
    with pytest.raises(errors.NotFoundError):
        services.notifications.send(admin, "ghost", "Hello")


def test_mark_all_read_skips_broadcasts(services, admin, alice_actor, sample_members):
    services.notifications.send(admin, sample_members["alice"].key, "Direct")
    services.notifications.send(admin, "all", "Broadcast")

    assert services.notifications.mark_all_read(alice_actor) == 1

    by_message = {n.message: n for n in services.notifications.list_for(alice_actor)}
    assert by_message["Direct"].is_read is True
    assert by_message["Broadcast"].is_read is False


def test_update_flags_owner_only(services, admin, alice_actor, bob_actor, sample_members):
    direct = services.notifications.send(admin, sample_members["alice"].key, "Direct")
    broadcast = services.notifications.send(admin, "all", "Broadcast")

    updated = services.notifications.update_flags(alice_actor, direct.id, is_read=True, status="seen")
    assert updated.is_read is True
    assert updated.status == "seen"
    assert updated.message == "Direct"

    with pytest.raises(errors.AuthorizationError):
        services.notifications.update_flags(bob_actor, direct.id, is_read=True)
    with pytest.raises(errors.AuthorizationError):
        services.notifications.delete(alice_actor, broadcast.id)


def test_send_payment_dues(services, admin, alice_actor, sample_members):
    dues = [
        PaymentDue(user_id=sample_members["alice"].key, member_name="Alice", amount=Decimal("-120.40")),
        PaymentDue(user_id=sample_members["bob"].user_id, member_name="", amount=Decimal("350")),
    ]

    assert services.notifications.send_payment_dues(admin, dues) == 2

    alice_note = services.notifications.list_for(alice_actor)[0]
    assert alice_note.type == PAYMENT_NOTIFICATION
    assert alice_note.payment_amount == Decimal("-120.40")
    assert alice_note.details == {"memberName": "Alice"}
    assert "to receive" in alice_note.message

    bob_notes = services.notifications.list_for_user(admin, sample_members["bob"].key)
    assert bob_notes[0].details == {"memberName": "Bob"}
    assert "₹350 to pay" in bob_notes[0].message


def test_send_payment_dues_requires_admin(services, alice_actor):
    with pytest.raises(errors.AuthorizationError):
        services.notifications.send_payment_dues(alice_actor, [])


def test_mark_paid(services, admin, alice_actor, sample_members):
    alice = sample_members["alice"]
    services.notifications.send_payment_dues(
        admin, [PaymentDue(user_id=alice.key, member_name="Alice", amount=Decimal("10"))]
    )
    other = services.notifications.send(admin, alice.key, "Not a bill")
    payment = next(n for n in services.notifications.list_for(alice_actor) if n.type == PAYMENT_NOTIFICATION)

    paid = services.notifications.mark_paid(alice_actor, payment.id)
    assert paid.is_paid is True
    assert paid.is_read is True

    with pytest.raises(errors.ValidationError):
        services.notifications.mark_paid(alice_actor, other.id)


def test_list_for_user_own_only(services, alice_actor, sample_members):
    services.notifications.list_for_user(alice_actor, sample_members["alice"].user_id)
    with pytest.raises(errors.AuthorizationError):
        services.notifications.list_for_user(alice_actor, sample_members["bob"].key)


def test_list_all_admin_only(services, admin, alice_actor, sample_members):
    services.notifications.send(admin, sample_members["bob"].key, "For Bob")
    assert len(services.notifications.list_all(admin)) == 1
    with pytest.raises(errors.AuthorizationError):
        services.notifications.list_all(alice_actor)


def test_delete_notification(services, admin, alice_actor, sample_members):
    note = services.notifications.send(admin, sample_members["alice"].key, "Direct")
    services.notifications.delete(alice_actor, note.id)

    assert services.notifications.list_for(alice_actor) == []
    with pytest.raises(errors.NotFoundError):
        services.notifications.delete(admin, note.id)
