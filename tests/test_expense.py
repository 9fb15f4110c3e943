"""Tests for the expense service."""

from decimal import Decimal

import pytest

from messledger.domain import errors
from messledger.domain.entities import ExpenseCategory, ExpenseStatus


def test_admin_expense_defaults(services, admin):
    expense = services.expenses.create_expense(admin, "Gas cylinder", "₹1,050", "gas", "2024-05-02")

    assert expense.amount == Decimal("1050")
    assert expense.category == ExpenseCategory.GAS
    assert expense.status == ExpenseStatus.APPROVED
    assert expense.paid_by == "admin"


def test_admin_expense_for_member_stores_canonical_key(services, admin, sample_members):
    bob = sample_members["bob"]
    expense = services.expenses.create_expense(admin, "Rice", "800", "rice", "2024-05-02", paid_by="Bob")
    assert expense.paid_by == bob.key


def test_member_expense_is_pending_and_self_paid(services, alice_actor, sample_members):
    expense = services.expenses.create_expense(
        alice_actor, "Vegetables", "120", "market", "2024-05-02", paid_by="admin", status="approved"
    )
    assert expense.status == ExpenseStatus.PENDING
    assert expense.paid_by == sample_members["alice"].key


@pytest.mark.parametrize(
    "description, amount, category, date",
    [
        ("", "10", "market", "2024-05-01"),
        ("Fish", "0", "market", "2024-05-01"),
        ("Fish", "-5", "market", "2024-05-01"),
        ("Fish", "ten", "market", "2024-05-01"),
        ("Fish", "10", "fish", "2024-05-01"),
        ("Fish", "10", "market", "someday"),
        ("Fish", "10", "market", "2024-05"),
        ("Fish", "10", "market", "12"),
    ],
)
def test_create_expense_validation(services, admin, description, amount, category, date):
    with pytest.raises(errors.ValidationError):
        services.expenses.create_expense(admin, description, amount, category, date)


def test_unknown_payer(services, admin):
    with pytest.raises(errors.NotFoundError):
        services.expenses.create_expense(admin, "Fish", "10", "market", "2024-05-01", paid_by="ghost")


def test_list_filters(services, admin, alice_actor, sample_members):
    services.expenses.create_expense(admin, "Gas", "900", "gas", "2024-05-02")
    services.expenses.create_expense(alice_actor, "Fish", "300", "market", "2024-05-03")
    services.expenses.create_expense(admin, "June gas", "900", "gas", "2024-06-02")

    assert len(services.expenses.list_expenses(month="2024-05")) == 2
    assert [e.description for e in services.expenses.list_expenses(status="pending")] == ["Fish"]
    assert [e.description for e in services.expenses.list_expenses(paid_by="u-alice")] == ["Fish"]
    assert len(services.expenses.list_expenses(paid_by="admin")) == 2


def test_update_is_partial(services, admin):
    expense = services.expenses.create_expense(admin, "Gas", "900", "gas", "2024-05-02")

    updated = services.expenses.update_expense(admin, expense.id, amount="950", description=None)

    assert updated.amount == Decimal("950")
    assert updated.description == "Gas"


def test_set_status_and_approve_all(services, admin, alice_actor, bob_actor):
    first = services.expenses.create_expense(alice_actor, "Fish", "300", "market", "2024-05-03")
    services.expenses.create_expense(alice_actor, "Egg", "90", "market", "2024-05-03")
    services.expenses.create_expense(bob_actor, "Oil", "150", "spices", "2024-05-04")

    rejected = services.expenses.set_status(admin, first.id, "rejected")
    assert rejected.status == ExpenseStatus.REJECTED

    assert services.expenses.approve_all(admin) == 2
    assert services.expenses.list_expenses(status="pending") == []
    assert services.expenses.get_expense(first.id).status == ExpenseStatus.REJECTED


def test_member_cannot_moderate(services, alice_actor):
    expense = services.expenses.create_expense(alice_actor, "Fish", "300", "market", "2024-05-03")
    with pytest.raises(errors.AuthorizationError):
        services.expenses.set_status(alice_actor, expense.id, "approved")
    with pytest.raises(errors.AuthorizationError):
        services.expenses.delete_expense(alice_actor, expense.id)


def test_delete_expense(services, admin):
    expense = services.expenses.create_expense(admin, "Gas", "900", "gas", "2024-05-02")
    services.expenses.delete_expense(admin, expense.id)

    with pytest.raises(errors.NotFoundError):
        services.expenses.get_expense(expense.id)
    with pytest.raises(errors.NotFoundError):
        services.expenses.delete_expense(admin, expense.id)
