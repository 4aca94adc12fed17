# tests/test_ledger.py

"""
Aggregation over already-fetched rows: dashboard figures, manager drawers,
the admin drawer and the house bank.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from services.ledger import (
    compute_admin_drawer_stats,
    compute_cash_drawer_stats,
    compute_dashboard_stats,
    compute_house_bank_stats,
)


NOW = datetime(2026, 6, 17, 15, 0)


def payment(amount, method="cash", when=NOW - timedelta(hours=1), received_by="m1"):
    return SimpleNamespace(amount=Decimal(str(amount)), method=method, date_received=when, received_by=received_by)


def drawer(kind, amount, when=NOW):
    return SimpleNamespace(type=kind, amount=Decimal(str(amount)), transaction_date=when)


def bank(kind, amount, category="other", when=NOW):
    return SimpleNamespace(
        id=f"hb-{kind}-{amount}",
        type=kind,
        amount=Decimal(str(amount)),
        category=category,
        vendor=None,
        description=None,
        receipt_url=None,
        created_by=None,
        transaction_date=when,
    )


# -------------------------------------------------
# Dashboard
# -------------------------------------------------
def test_dashboard_empty_is_zeroed():
    stats = compute_dashboard_stats([], [], [], [], now=NOW)

    assert stats.available_rooms == 0
    assert stats.active_bookings == 0
    assert stats.today_revenue == 0
    assert stats.weekly_growth == 0
    assert stats.payment_method_breakdown.cash == 0


def test_dashboard_counts_and_revenue_windows():
    rooms = [
        SimpleNamespace(status="available"),
        SimpleNamespace(status="available"),
        SimpleNamespace(status="cleaning"),
        SimpleNamespace(status="occupied"),
    ]
    bookings = [
        SimpleNamespace(payment_status="pending", total_amount=Decimal("500")),
        SimpleNamespace(payment_status="overdue", total_amount=Decimal("200")),
        SimpleNamespace(payment_status="paid", total_amount=Decimal("100")),
    ]
    tasks = [SimpleNamespace(status="pending"), SimpleNamespace(status="completed")]
    payments = [
        payment(100, "cash"),
        payment(50, "cash_app"),
        payment(30, "cash", when=NOW - timedelta(days=3)),
        payment(80, "cash", when=NOW - timedelta(days=10)),
        payment(999, "cash", when=NOW + timedelta(hours=1)),  # future, ignored
    ]

    stats = compute_dashboard_stats(rooms, bookings, tasks, payments, now=NOW)

    assert stats.available_rooms == 2
    assert stats.active_bookings == 3
    assert stats.pending_tasks == 1
    assert stats.today_revenue == pytest.approx(150)
    assert stats.weekly_revenue == pytest.approx(180)
    assert stats.monthly_revenue == pytest.approx(260)
    assert stats.payment_method_breakdown.cash == pytest.approx(100)
    assert stats.payment_method_breakdown.cash_app == pytest.approx(50)
    assert stats.today_cash_payments == 1
    assert stats.today_cash_app_payments == 1
    assert stats.pending_payments_count == 1
    assert stats.pending_payments_amount == pytest.approx(500)
    assert stats.overdue_payments_count == 1
    assert stats.overdue_payments_amount == pytest.approx(200)
    # Last week had 80, this week 180
    assert stats.weekly_growth == pytest.approx(125.0)


def test_weekly_growth_is_zero_without_last_week_revenue():
    stats = compute_dashboard_stats([], [], [], [payment(100)], now=NOW)
    assert stats.weekly_growth == 0


def test_pending_figures_use_all_bookings_when_given():
    active = [SimpleNamespace(payment_status="paid", total_amount=Decimal("10"))]
    everything = active + [SimpleNamespace(payment_status="pending", total_amount=Decimal("40"))]

    stats = compute_dashboard_stats([], active, [], [], all_bookings=everything, now=NOW)

    assert stats.active_bookings == 1
    assert stats.pending_payments_count == 1
    assert stats.pending_payments_amount == pytest.approx(40)


# -------------------------------------------------
# Manager drawers
# -------------------------------------------------
def test_cash_drawer_holding_never_negative():
    manager = SimpleNamespace(id="m1", name="P1 Manager", property_id="P1")
    turn_ins = [SimpleNamespace(manager_id="m1", amount=Decimal("500"), turn_in_date=NOW - timedelta(minutes=5))]

    [stat] = compute_cash_drawer_stats([manager], [payment(100)], turn_ins, now=NOW)

    assert stat.total_cash_collected_today == pytest.approx(100)
    assert stat.current_cash_holding == 0
    assert stat.pending_turn_in == 0
    assert stat.last_turn_in_amount == pytest.approx(500)


def test_cash_drawer_only_counts_todays_cash():
    manager = SimpleNamespace(id="m1", name="P1 Manager", property_id=None)
    payments = [
        payment(100),
        payment(40, "cash_app"),
        payment(70, when=NOW - timedelta(days=1)),
        payment(25, received_by="someone-else"),
    ]

    [stat] = compute_cash_drawer_stats([manager], payments, [], now=NOW)

    assert stat.total_cash_collected_today == pytest.approx(100)
    assert stat.current_cash_holding == pytest.approx(100)
    assert stat.property_id == "N/A"
    assert stat.last_turn_in_date is None


# -------------------------------------------------
# Admin drawer
# -------------------------------------------------
def test_admin_drawer_empty():
    stats = compute_admin_drawer_stats([], [])

    assert stats.current_cash_holding == 0
    assert stats.current_cash_app_holding == 0
    assert stats.last_cash_deposit is None


def test_admin_drawer_holdings():
    transactions = [
        drawer("cash_received", 300),
        drawer("bank_deposit_cash", 100, when=NOW - timedelta(days=2)),
        drawer("bank_deposit_cash", 50, when=NOW - timedelta(days=1)),
        drawer("bank_deposit_cashapp", 20),
        drawer("cashapp_received", 9999),  # ledger only
    ]
    cash_app_payments = [payment(80, "cash_app"), payment(40, "cash_app")]

    stats = compute_admin_drawer_stats(transactions, cash_app_payments)

    assert stats.total_cash_received == pytest.approx(300)
    assert stats.current_cash_holding == pytest.approx(150)
    assert stats.total_cash_app_received == pytest.approx(120)
    assert stats.current_cash_app_holding == pytest.approx(100)
    assert stats.last_cash_deposit.amount == pytest.approx(50)


def test_house_bank_transfer_draws_cash_first():
    transactions = [
        drawer("cash_received", 100),
        drawer("house_bank_transfer", 130),
    ]
    stats = compute_admin_drawer_stats(transactions, [payment(50, "cash_app")])

    assert stats.current_cash_holding == 0
    assert stats.current_cash_app_holding == pytest.approx(20)
    assert stats.total_transferred_to_house_bank == pytest.approx(130)
    assert stats.total_available == pytest.approx(20)


def test_admin_drawer_holdings_floor_at_zero():
    stats = compute_admin_drawer_stats([drawer("bank_deposit_cash", 100)], [])
    assert stats.current_cash_holding == 0


# -------------------------------------------------
# House bank
# -------------------------------------------------
def test_house_bank_empty():
    stats = compute_house_bank_stats([])

    assert stats.current_balance == 0
    assert stats.total_expenses == 0
    assert stats.recent_transactions == []


def test_house_bank_balance_and_categories():
    transactions = [
        bank("transfer_in", 500),
        bank("expense_supplies", 40, "supplies"),
        bank("expense_contractor", 100, "contractors"),
        bank("expense_utilities", 60, "utilities"),
    ]

    stats = compute_house_bank_stats(transactions)

    assert stats.total_transfers_in == pytest.approx(500)
    assert stats.total_expenses == pytest.approx(200)
    assert stats.current_balance == pytest.approx(300)
    assert stats.expenses_by_category.supplies == pytest.approx(40)
    assert stats.expenses_by_category.contractors == pytest.approx(100)
    assert stats.expenses_by_category.maintenance == 0
    assert len(stats.recent_transactions) == 4


def test_house_bank_balance_floors_at_zero():
    transactions = [
        bank("transfer_in", 100),
        bank("expense_maintenance", 150, "maintenance"),
    ]

    stats = compute_house_bank_stats(transactions)

    assert stats.total_transfers_in == pytest.approx(100)
    assert stats.total_expenses == pytest.approx(150)
    assert stats.current_balance == 0
    assert stats.expenses_by_category.maintenance == pytest.approx(150)


def test_house_bank_recent_capped_at_ten_newest_first():
    transactions = [bank("transfer_in", i + 1, when=NOW - timedelta(days=i)) for i in range(15)]

    stats = compute_house_bank_stats(transactions)

    assert len(stats.recent_transactions) == 10
    assert stats.recent_transactions[0].transaction_date == NOW
