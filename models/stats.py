# models/stats.py
"""
Derived, non-persisted summaries. Figures are floats: currency is summed
without fixed-point arithmetic, so totals may carry float rounding.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from models.base import CamelModel
from models.cash import HouseBankTransactionRead


# -------------------------------------------------
# Per-manager cash drawer
# -------------------------------------------------
class CashDrawerStat(CamelModel):
    manager_id: str
    manager_name: str
    property_id: str = Field(default="N/A", alias="property")
    current_cash_holding: float = 0.0
    last_turn_in_date: Optional[datetime] = None
    last_turn_in_amount: Optional[float] = None
    total_cash_collected_today: float = 0.0
    pending_turn_in: float = 0.0


# -------------------------------------------------
# Dashboard
# -------------------------------------------------
class PaymentMethodBreakdown(CamelModel):
    cash: float = 0.0
    cash_app: float = 0.0


class DashboardStats(CamelModel):
    available_rooms: int = 0
    active_bookings: int = 0
    pending_tasks: int = 0
    today_revenue: float = 0.0
    weekly_revenue: float = 0.0
    monthly_revenue: float = 0.0
    weekly_growth: float = 0.0
    payment_method_breakdown: PaymentMethodBreakdown = Field(default_factory=PaymentMethodBreakdown)
    today_cash_payments: int = 0
    today_cash_app_payments: int = 0
    pending_payments_count: int = 0
    pending_payments_amount: float = 0.0
    overdue_payments_count: int = 0
    overdue_payments_amount: float = 0.0
    # Admin only
    cash_drawer_stats: Optional[List[CashDrawerStat]] = None


# -------------------------------------------------
# Admin drawer
# -------------------------------------------------
class LastDeposit(CamelModel):
    amount: float
    date: datetime


class AdminDrawerStats(CamelModel):
    current_cash_holding: float = 0.0
    current_cash_app_holding: float = 0.0
    total_cash_received: float = 0.0
    total_cash_app_received: float = 0.0
    total_cash_deposited: float = 0.0
    total_cash_app_deposited: float = 0.0
    total_transferred_to_house_bank: float = 0.0
    last_cash_deposit: Optional[LastDeposit] = None
    last_cash_app_deposit: Optional[LastDeposit] = None

    @property
    def total_available(self) -> float:
        return self.current_cash_holding + self.current_cash_app_holding


# -------------------------------------------------
# House bank
# -------------------------------------------------
class ExpensesByCategory(CamelModel):
    supplies: float = 0.0
    contractors: float = 0.0
    maintenance: float = 0.0
    utilities: float = 0.0
    other: float = 0.0


class HouseBankStats(CamelModel):
    current_balance: float = 0.0
    total_transfers_in: float = 0.0
    total_expenses: float = 0.0
    expenses_by_category: ExpensesByCategory = Field(default_factory=ExpensesByCategory)
    recent_transactions: List[HouseBankTransactionRead] = Field(default_factory=list)
