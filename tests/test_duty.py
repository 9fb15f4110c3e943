"""Tests for the market duty workflow."""

import threading

import pytest

from messledger.domain import errors
from messledger.domain.duty import MARKET_APPROVED, MARKET_REJECTED, MARKET_REQUEST
from messledger.domain.entities import DutyRequestType, DutyStatus
from messledger.domain.services import build_services

from conftest import member_actor

DATE = "2024-05-10"


def test_request_creates_pending_and_alerts_admin(services, temp_db, admin, alice_actor, sample_members):
    duty = services.duties.request_duty(alice_actor, DATE)

    assert duty.status == DutyStatus.PENDING
    assert duty.request_type == DutyRequestType.REQUEST
    assert duty.assigned_member_id == sample_members["alice"].key

    alerts = services.notifications.list_for(admin)
    assert len(alerts) == 1
    assert alerts[0].type == MARKET_REQUEST
    assert alerts[0].message == f"New Market Request for {DATE}"
    assert alerts[0].details["date"] == DATE


def test_member_cannot_request_for_someone_else(services, alice_actor, sample_members):
    with pytest.raises(errors.AuthorizationError):
        services.duties.request_duty(alice_actor, DATE, sample_members["bob"].key)


def test_duplicate_request_conflicts(services, alice_actor):
    services.duties.request_duty(alice_actor, DATE)
    with pytest.raises(errors.ConflictError):
        services.duties.request_duty(alice_actor, DATE)


def test_approve_removes_competitors_and_alerts(services, admin, alice_actor, bob_actor, sample_members):
    first = services.duties.request_duty(alice_actor, DATE)
    services.duties.request_duty(bob_actor, DATE)
    other_day = services.duties.request_duty(bob_actor, "2024-05-11")

    approved = services.duties.approve(admin, first.id)

    assert approved.status == DutyStatus.APPROVED
    assert [d.id for d in services.duties.list_duties(date=DATE)] == [first.id]
    assert services.duties.get_duty(other_day.id).status == DutyStatus.PENDING

    admin_alerts = services.notifications.list_for(admin)
    assert [a.details["date"] for a in admin_alerts] == ["2024-05-11"]

    inbox = services.notifications.list_for(alice_actor)
    assert inbox[0].type == MARKET_APPROVED
    assert inbox[0].message == f"Your market request for {DATE} is APPROVED."


def test_approving_a_removed_request_is_not_found(services, admin, alice_actor, bob_actor):
    first = services.duties.request_duty(alice_actor, DATE)
    second = services.duties.request_duty(bob_actor, DATE)
    services.duties.approve(admin, first.id)

    with pytest.raises(errors.NotFoundError):
        services.duties.approve(admin, second.id)


def test_approve_requires_admin(services, alice_actor):
    duty = services.duties.request_duty(alice_actor, DATE)
    with pytest.raises(errors.AuthorizationError):
        services.duties.approve(alice_actor, duty.id)


def test_admin_reject_deletes_and_notifies(services, admin, alice_actor):
    duty = services.duties.request_duty(alice_actor, DATE)

    services.duties.reject(admin, duty.id)

    assert services.duties.list_duties(month="2024-05") == []
    assert services.notifications.list_for(admin) == []
    inbox = services.notifications.list_for(alice_actor)
    assert inbox[0].type == MARKET_REJECTED
    assert "REJECTED" in inbox[0].message


def test_member_withdraws_own_pending_request(services, alice_actor):
    duty = services.duties.request_duty(alice_actor, DATE)
    services.duties.reject(alice_actor, duty.id)

    assert services.duties.list_duties(date=DATE) == []
    assert all(n.type != MARKET_REJECTED for n in services.notifications.list_for(alice_actor))


def test_member_cannot_reject_others(services, alice_actor, bob_actor):
    duty = services.duties.request_duty(alice_actor, DATE)
    with pytest.raises(errors.AuthorizationError):
        services.duties.reject(bob_actor, duty.id)


def test_member_cannot_reject_approved(services, admin, alice_actor):
    duty = services.duties.request_duty(alice_actor, DATE)
    services.duties.approve(admin, duty.id)
    with pytest.raises(errors.AuthorizationError):
        services.duties.reject(alice_actor, duty.id)


def test_assign_replaces_everything_for_date(services, admin, alice_actor, sample_members):
    services.duties.request_duty(alice_actor, DATE)

    duty = services.duties.assign_duty(admin, DATE, sample_members["carol"].user_id)

    assert duty.status == DutyStatus.APPROVED
    assert duty.request_type == DutyRequestType.MANUAL_ASSIGN
    duties = services.duties.list_duties(date=DATE)
    assert len(duties) == 1
    assert duties[0].assigned_member_id == sample_members["carol"].key


def test_assign_requires_admin(services, sample_members):
    with pytest.raises(errors.AuthorizationError):
        services.duties.assign_duty(member_actor(sample_members["bob"]), DATE, sample_members["bob"].key)


def test_get_missing_duty(services):
    with pytest.raises(errors.NotFoundError):
        services.duties.get_duty(999)


@pytest.mark.parametrize("date", ["2024-05-20", "2024-05-21", "2024-05-22"])
def test_concurrent_approvals_leave_one_winner(services, temp_db, settings, admin, alice_actor, bob_actor, date):
    requests = [
        services.duties.request_duty(alice_actor, date),
        services.duties.request_duty(bob_actor, date),
    ]
    barrier = threading.Barrier(len(requests))
    outcomes = []

    def approve(duty_id):
        db = temp_db.spawn()
        try:
            duties = build_services(db, settings=settings).duties
            barrier.wait()
            duties.approve(admin, duty_id)
            outcomes.append("approved")
        except errors.NotFoundError:
            outcomes.append("not found")
        except Exception as e:
            outcomes.append(type(e).__name__)
        finally:
            db.disconnect()

    threads = [threading.Thread(target=approve, args=(duty.id,)) for duty in requests]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["approved", "not found"]
    duties = services.duties.list_duties(date=date)
    assert len(duties) == 1
    assert duties[0].status == DutyStatus.APPROVED
