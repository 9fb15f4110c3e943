"""Tests for the monthly bill calculator."""

from decimal import Decimal

import pytest

from messledger.domain import errors
from messledger.domain.bill import BillService

MONTH = "2024-05"


@pytest.fixture
def stocked_month(services, temp_db, admin, sample_members):
    """A month with market spend, shared bills, meals and one guest meal."""
    alice = sample_members["alice"]
    bob = sample_members["bob"]

    services.expenses.create_expense(admin, "Bazaar", "1200", "market", "2024-05-02", paid_by=alice.key)
    services.expenses.create_expense(admin, "Rice sack", "300", "rice", "2024-05-02")
    services.expenses.create_expense(admin, "Gas", "900", "gas", "2024-05-03")
    services.expenses.create_expense(admin, "Wifi", "600", "wifi", "2024-05-03")
    # Pending and rejected money never reaches the bill
    services.expenses.create_expense(admin, "Fish", "100", "market", "2024-05-04", paid_by=bob.key, status="pending")
    services.expenses.create_expense(admin, "Oops", "70", "gas", "2024-05-04", status="rejected")

    for i in range(45):
        meal_type = "lunch" if i < 28 else "dinner"
        temp_db.create_meal(f"2024-05-{i % 28 + 1:02d}", alice.key, alice.name, meal_type)
    for day in range(1, 11):
        temp_db.create_meal(f"2024-05-{day:02d}", bob.user_id, bob.name, "lunch")
    services.guest_meals.add_guest_meal(admin, "2024-05-05", alice.key, "fish", "lunch")
    return sample_members


def _line(bill, name):
    return next(line for line in bill.members if line.member_name == name)


def test_month_totals(services, admin, stocked_month):
    bill = services.bills.build_bill(admin, MONTH)

    assert bill.total_market == Decimal("1200.00")
    assert bill.rice == Decimal("300.00")
    assert bill.guest_income == Decimal("40.00")
    assert bill.total_meals == 125
    assert bill.meal_charge == Decimal("11.68")
    assert bill.shared_bills["gas"] == Decimal("900.00")
    assert bill.shared_bills["wifi"] == Decimal("600.00")
    assert bill.shared_bills["houseRent"] == 0
    assert bill.per_head == Decimal("500.00")


def test_member_lines(services, admin, stocked_month):
    bill = services.bills.build_bill(admin, MONTH)

    alice = _line(bill, "Alice")
    assert alice.meals == 45
    assert alice.effective_meals == 45
    assert alice.below_minimum is False
    assert alice.meal_cost == Decimal("525.60")
    assert alice.guest_cost == Decimal("40.00")
    assert alice.market_expense == Decimal("1200.00")
    assert alice.total == Decimal("1065.60")
    assert alice.balance == Decimal("-1134.40")

    bob = _line(bill, "Bob")
    assert bob.meals == 10
    assert bob.effective_meals == 40
    assert bob.below_minimum is True
    assert bob.market_expense == 0
    assert bob.balance == Decimal("467.20")

    carol = _line(bill, "Carol")
    assert carol.deposit == 0
    assert carol.balance == Decimal("967.20")


def test_payment_dues(services, admin, stocked_month):
    bill = services.bills.build_bill(admin, MONTH)
    dues = {due.member_name: due for due in BillService.payment_dues(bill)}

    assert dues["Alice"].amount == Decimal("-1134.40")
    assert dues["Bob"].user_id == stocked_month["bob"].key
    assert len(dues) == 3


def test_empty_month(services, admin, sample_members):
    bill = services.bills.build_bill(admin, "2030-01")

    assert bill.total_meals == 120
    assert bill.meal_charge == 0
    for line in bill.members:
        assert line.balance == -line.deposit


def test_no_members(services, admin):
    bill = services.bills.build_bill(admin, MONTH)
    assert bill.members == ()
    assert bill.per_head == 0


def test_guest_prices_from_configuration(temp_db, admin, services, sample_members):
    alice = sample_members["alice"]
    services.meals.add_meal(admin, "2024-05-01", alice.key, "guest", guest_meal_type="meat", meal_time="lunch")

    bills = BillService(temp_db, services.members, min_meals=0, guest_meal_prices={"meat": Decimal("75")})
    bill = bills.build_bill(admin, MONTH)
    assert bill.guest_income == Decimal("75.00")
    assert _line(bill, "Alice").guest_cost == Decimal("75.00")


def test_bill_requires_admin(services, alice_actor):
    with pytest.raises(errors.AuthorizationError):
        services.bills.build_bill(alice_actor, MONTH)
