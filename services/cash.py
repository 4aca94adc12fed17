# services/cash.py
"""
Cash movements between managers, the admin drawer and the house bank.
Every movement is validated against freshly computed holdings inside the
same unit of work that records it.
"""

from typing import List

from fastapi import HTTPException

from core.logging_config import logger
from core.permissions import is_manager
from models.cash import (
    BankDepositRequest,
    CashAppPaymentRecord,
    CashTurnInCreate,
    HouseBankExpenseRequest,
    HouseBankTransferRequest,
)
from models.enums import (
    DepositType,
    DrawerTransactionType,
    HouseBankTransactionType,
    PaymentMethod,
)
from models.stats import AdminDrawerStats, CashDrawerStat, HouseBankStats
from services.ledger import (
    compute_admin_drawer_stats,
    compute_cash_drawer_stats,
    compute_house_bank_stats,
)
from storage.base import Storage


# -------------------------------------------------
# Snapshots
# -------------------------------------------------
def admin_drawer_snapshot(storage: Storage) -> AdminDrawerStats:
    cash_app_payments = [
        p for p in storage.get_payments() if p.method == PaymentMethod.cash_app.value
    ]
    return compute_admin_drawer_stats(storage.get_admin_drawer_transactions(), cash_app_payments)


def house_bank_snapshot(storage: Storage) -> HouseBankStats:
    return compute_house_bank_stats(storage.get_house_bank_transactions())


def cash_drawer_snapshot(storage: Storage) -> List[CashDrawerStat]:
    return compute_cash_drawer_stats(
        storage.get_managers(),
        storage.get_payments(),
        storage.get_cash_turn_ins(),
    )


def _money(value: float) -> str:
    return f"${value:.2f}"


# -------------------------------------------------
# Manager turn-ins
# -------------------------------------------------
def turn_in_cash(storage: Storage, user, payload: CashTurnInCreate):
    """
    Record cash handed to the admin. The same amount lands in the admin
    drawer as a cash_received entry.
    """
    with storage.transaction():
        turn_in = storage.create_cash_turn_in({
            "manager_id": user.id,
            "manager_name": user.name,
            "property_id": user.property_id or "N/A",
            "amount": payload.amount,
            "notes": payload.notes,
            "received_by": None if is_manager(user) else user.id,
        })
        storage.create_admin_drawer_transaction({
            "type": DrawerTransactionType.cash_received.value,
            "amount": payload.amount,
            "source": f"turn_in:{turn_in.id}",
            "description": f"Cash turn-in from {user.name}",
            "created_by": user.id,
            "transaction_date": turn_in.turn_in_date,
        })
        storage.create_audit_log(
            user.id,
            "cash_turned_in",
            f"{user.name} turned in ${payload.amount} cash from {user.property_id or 'property'}",
        )

    logger.info(f"Cash turn-in {turn_in.id} recorded for {user.username}")
    return turn_in


# -------------------------------------------------
# Admin drawer
# -------------------------------------------------
def record_bank_deposit(storage: Storage, user, payload: BankDepositRequest):
    is_cash = payload.type == DepositType.bank_deposit_cash.value
    label = "Cash" if is_cash else "Cash App"

    with storage.transaction():
        stats = admin_drawer_snapshot(storage)
        holding = stats.current_cash_holding if is_cash else stats.current_cash_app_holding
        if float(payload.amount) > holding:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot deposit more than current holding ({_money(holding)})",
            )

        transaction = storage.create_admin_drawer_transaction({
            "type": payload.type,
            "amount": payload.amount,
            "description": payload.description or f"Bank deposit - {label}",
            "created_by": user.id,
        })
        storage.create_audit_log(
            user.id, "bank_deposit", f"Admin {user.name} made bank deposit: {label} ${payload.amount}"
        )
    return transaction


def record_cashapp_payment(storage: Storage, user, payload: CashAppPaymentRecord):
    """Manual ledger entry only; holdings follow the Cash App payments themselves."""
    source = f"payment:{payload.payment_id}" if payload.payment_id else "Customer Payment"
    return storage.create_admin_drawer_transaction({
        "type": DrawerTransactionType.cashapp_received.value,
        "amount": payload.amount,
        "source": source,
        "description": payload.description or "Cash App payment received from customer",
        "created_by": user.id,
    })


# -------------------------------------------------
# House bank
# -------------------------------------------------
def transfer_to_house_bank(storage: Storage, user, payload: HouseBankTransferRequest):
    """
    Move funds from the admin drawer into the house bank. The drawer side is
    stored as a positive house_bank_transfer amount.
    """
    with storage.transaction():
        available = admin_drawer_snapshot(storage).total_available
        if float(payload.amount) > available:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot transfer more than available funds ({_money(available)})",
            )

        storage.create_admin_drawer_transaction({
            "type": DrawerTransactionType.house_bank_transfer.value,
            "amount": payload.amount,
            "description": payload.description or "Transfer to house bank for operational expenses",
            "created_by": user.id,
        })
        transaction = storage.create_house_bank_transaction({
            "type": HouseBankTransactionType.transfer_in.value,
            "amount": payload.amount,
            "category": "other",
            "description": payload.description or "Transfer from cash drawer for operational budget",
            "created_by": user.id,
        })
        storage.create_audit_log(
            user.id, "house_bank_transfer", f"Admin {user.name} transferred ${payload.amount} to the house bank"
        )
    return transaction


def record_house_bank_expense(storage: Storage, user, payload: HouseBankExpenseRequest):
    with storage.transaction():
        balance = house_bank_snapshot(storage).current_balance
        if float(payload.amount) > balance:
            raise HTTPException(
                status_code=400,
                detail=f"Insufficient funds in house bank ({_money(balance)} available)",
            )

        transaction = storage.create_house_bank_transaction({
            "type": HouseBankTransactionType.for_category(payload.category).value,
            "amount": payload.amount,
            "category": payload.category,
            "vendor": payload.vendor,
            "description": payload.description or f"{payload.category.capitalize()} expense",
            "receipt_url": payload.receipt_url,
            "created_by": user.id,
        })
        vendor = f" to {payload.vendor}" if payload.vendor else ""
        storage.create_audit_log(
            user.id,
            "house_bank_expense",
            f"Admin {user.name} recorded ${payload.amount} {payload.category} expense{vendor}",
        )
    return transaction
