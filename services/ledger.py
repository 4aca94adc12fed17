# services/ledger.py
"""
Dashboard and ledger aggregation.

Pure functions over already-fetched (and already-scoped) rows. Empty input
yields zeroed stats; balances never go below 0. Currency is summed as float.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from models.cash import HouseBankTransactionRead
from models.enums import (
    DrawerTransactionType,
    ExpenseCategory,
    HouseBankTransactionType,
    PaymentMethod,
    PaymentStatus,
    RoomStatus,
    TaskStatus,
)
from models.stats import (
    AdminDrawerStats,
    CashDrawerStat,
    DashboardStats,
    ExpensesByCategory,
    HouseBankStats,
    LastDeposit,
    PaymentMethodBreakdown,
)

RECENT_TRANSACTION_LIMIT = 10


def _amount(value) -> float:
    return float(value) if value is not None else 0.0


def _total(rows: Iterable, field: str = "amount") -> float:
    return sum((_amount(getattr(row, field)) for row in rows), 0.0)


def _in_window(moment: Optional[datetime], start: datetime, end: datetime) -> bool:
    return moment is not None and start <= moment < end


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def is_room_available(room) -> bool:
    """Rooms count as available on status alone; cleaning state is separate."""
    return room.status == RoomStatus.available.value


# ============================================================
# DASHBOARD
# ============================================================
def compute_dashboard_stats(
    rooms: Sequence,
    bookings: Sequence,
    tasks: Sequence,
    payments: Sequence,
    all_bookings: Optional[Sequence] = None,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    `bookings` are the active bookings in view; `all_bookings` (defaults to
    `bookings`) feed the pending/overdue figures.

    Windows: today = [midnight, now), week = [now-7d, now),
    last week = [now-14d, now-7d), month = [1st of month, now).
    """
    now = now or datetime.now()
    today_start = start_of_day(now)
    week_start = now - timedelta(days=7)
    last_week_start = week_start - timedelta(days=7)
    month_start = today_start.replace(day=1)

    today = [p for p in payments if _in_window(p.date_received, today_start, now)]
    this_week = [p for p in payments if _in_window(p.date_received, week_start, now)]
    last_week = [p for p in payments if _in_window(p.date_received, last_week_start, week_start)]
    this_month = [p for p in payments if _in_window(p.date_received, month_start, now)]

    today_cash = [p for p in today if p.method == PaymentMethod.cash.value]
    today_cash_app = [p for p in today if p.method == PaymentMethod.cash_app.value]

    weekly_revenue = _total(this_week)
    last_week_revenue = _total(last_week)
    weekly_growth = (
        (weekly_revenue - last_week_revenue) / last_week_revenue * 100
        if last_week_revenue > 0 else 0.0
    )

    billed = bookings if all_bookings is None else all_bookings
    pending = [b for b in billed if b.payment_status == PaymentStatus.pending.value]
    overdue = [b for b in billed if b.payment_status == PaymentStatus.overdue.value]

    return DashboardStats(
        available_rooms=sum(1 for room in rooms if is_room_available(room)),
        active_bookings=len(bookings),
        pending_tasks=sum(1 for task in tasks if task.status == TaskStatus.pending.value),
        today_revenue=_total(today),
        weekly_revenue=weekly_revenue,
        monthly_revenue=_total(this_month),
        weekly_growth=weekly_growth,
        payment_method_breakdown=PaymentMethodBreakdown(
            cash=_total(today_cash),
            cash_app=_total(today_cash_app),
        ),
        today_cash_payments=len(today_cash),
        today_cash_app_payments=len(today_cash_app),
        pending_payments_count=len(pending),
        pending_payments_amount=_total(pending, "total_amount"),
        overdue_payments_count=len(overdue),
        overdue_payments_amount=_total(overdue, "total_amount"),
    )


# ============================================================
# MANAGER CASH DRAWERS
# ============================================================
def compute_cash_drawer_stats(
    managers: Sequence,
    payments: Sequence,
    turn_ins: Sequence,
    now: Optional[datetime] = None,
) -> List[CashDrawerStat]:
    """Per manager: cash collected today minus today's turn-ins (floored at 0)."""
    now = now or datetime.now()
    today = now.date()
    stats = []

    for manager in managers:
        collected_today = _total(
            p for p in payments
            if p.received_by == manager.id
            and p.method == PaymentMethod.cash.value
            and p.date_received.date() == today
        )

        mine = sorted(
            (t for t in turn_ins if t.manager_id == manager.id),
            key=lambda t: t.turn_in_date,
            reverse=True,
        )
        turned_in_today = _total(t for t in mine if t.turn_in_date.date() == today)
        last = mine[0] if mine else None

        holding = max(0.0, collected_today - turned_in_today)
        stats.append(CashDrawerStat(
            manager_id=manager.id,
            manager_name=manager.name,
            property_id=manager.property_id or "N/A",
            current_cash_holding=holding,
            last_turn_in_date=last.turn_in_date if last else None,
            last_turn_in_amount=_amount(last.amount) if last else None,
            total_cash_collected_today=collected_today,
            pending_turn_in=holding,
        ))

    return stats


# ============================================================
# ADMIN CASH DRAWER
# ============================================================
def _last_deposit(transactions: Sequence, kind: DrawerTransactionType) -> Optional[LastDeposit]:
    deposits = [t for t in transactions if t.type == kind.value]
    if not deposits:
        return None
    latest = max(deposits, key=lambda t: t.transaction_date)
    return LastDeposit(amount=_amount(latest.amount), date=latest.transaction_date)


def compute_admin_drawer_stats(transactions: Sequence, cash_app_payments: Sequence) -> AdminDrawerStats:
    """
    Cash comes from `cash_received` entries; Cash App from the Cash App
    payments themselves. House-bank transfers draw on cash first, then on
    Cash App.
    """
    def of_type(kind: DrawerTransactionType) -> float:
        return _total(t for t in transactions if t.type == kind.value)

    cash_received = of_type(DrawerTransactionType.cash_received)
    cash_deposited = of_type(DrawerTransactionType.bank_deposit_cash)
    cash_app_received = _total(
        p for p in cash_app_payments if p.method == PaymentMethod.cash_app.value
    )
    cash_app_deposited = of_type(DrawerTransactionType.bank_deposit_cashapp)
    transferred = of_type(DrawerTransactionType.house_bank_transfer)

    cash_before_transfers = max(0.0, cash_received - cash_deposited)
    from_cash = min(transferred, cash_before_transfers)
    from_cash_app = transferred - from_cash

    return AdminDrawerStats(
        current_cash_holding=max(0.0, cash_before_transfers - from_cash),
        current_cash_app_holding=max(0.0, cash_app_received - cash_app_deposited - from_cash_app),
        total_cash_received=cash_received,
        total_cash_app_received=cash_app_received,
        total_cash_deposited=cash_deposited,
        total_cash_app_deposited=cash_app_deposited,
        total_transferred_to_house_bank=transferred,
        last_cash_deposit=_last_deposit(transactions, DrawerTransactionType.bank_deposit_cash),
        last_cash_app_deposit=_last_deposit(transactions, DrawerTransactionType.bank_deposit_cashapp),
    )


# ============================================================
# HOUSE BANK
# ============================================================
def _is_expense(transaction) -> bool:
    return transaction.type.startswith("expense_")


def compute_house_bank_stats(transactions: Sequence) -> HouseBankStats:
    transfers_in = _total(
        t for t in transactions if t.type == HouseBankTransactionType.transfer_in.value
    )
    expenses = [t for t in transactions if _is_expense(t)]
    total_expenses = _total(expenses)

    by_category = {
        category.value: _total(t for t in expenses if t.category == category.value)
        for category in ExpenseCategory
    }

    recent = sorted(transactions, key=lambda t: t.transaction_date, reverse=True)
    recent = recent[:RECENT_TRANSACTION_LIMIT]

    return HouseBankStats(
        current_balance=max(0.0, transfers_in - total_expenses),
        total_transfers_in=transfers_in,
        total_expenses=total_expenses,
        expenses_by_category=ExpensesByCategory(**by_category),
        recent_transactions=[HouseBankTransactionRead.model_validate(t) for t in recent],
    )
