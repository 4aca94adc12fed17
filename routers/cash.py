# routers/cash.py

from fastapi import APIRouter, Depends
from typing import List

from core.permissions import is_admin
from dependencies.auth import get_storage, requires_role
from models.cash import (
    BankDepositRequest,
    CashAppPaymentRecord,
    CashTurnInCreate,
    CashTurnInRead,
    DrawerTransactionRead,
    HouseBankExpenseRequest,
    HouseBankTransactionRead,
    HouseBankTransferRequest,
)
from models.stats import AdminDrawerStats, CashDrawerStat, HouseBankStats
from services import cash
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api",
    tags=["Cash"],
)

admin_only = requires_role(["admin"])


# ============================================================
# MANAGER TURN-INS
# ============================================================
@router.get("/cash-turnins", response_model=List[CashTurnInRead], summary="List cash turn-ins")
def list_turn_ins(
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    """Managers see only their own turn-ins."""
    if is_admin(current_user):
        return storage.get_cash_turn_ins()
    return storage.get_cash_turn_ins_by_manager(current_user.id)


@router.post("/cash-turnins", response_model=CashTurnInRead, status_code=201, summary="Turn in cash")
def create_turn_in(
    payload: CashTurnInCreate,
    current_user: User = Depends(requires_role(["admin", "manager"])),
    storage: Storage = Depends(get_storage),
):
    return cash.turn_in_cash(storage, current_user, payload)


@router.get("/cash-drawer-stats", response_model=List[CashDrawerStat], summary="Per-manager cash drawers")
def cash_drawer_stats(
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.cash_drawer_snapshot(storage)


# ============================================================
# ADMIN CASH DRAWER
# ============================================================
@router.get("/admin/cash-drawer", response_model=List[DrawerTransactionRead], summary="Admin drawer ledger")
def admin_drawer(
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return storage.get_admin_drawer_transactions()


@router.get("/admin/cash-drawer/stats", response_model=AdminDrawerStats, summary="Admin drawer holdings")
def admin_drawer_stats(
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.admin_drawer_snapshot(storage)


@router.post("/admin/bank-deposit", response_model=DrawerTransactionRead, status_code=201, summary="Record bank deposit")
def bank_deposit(
    payload: BankDepositRequest,
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.record_bank_deposit(storage, current_user, payload)


@router.post(
    "/admin/record-cashapp-payment",
    response_model=DrawerTransactionRead,
    status_code=201,
    summary="Record a Cash App receipt in the drawer ledger",
)
def record_cashapp_payment(
    payload: CashAppPaymentRecord,
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.record_cashapp_payment(storage, current_user, payload)


# ============================================================
# HOUSE BANK
# ============================================================
@router.get("/admin/house-bank", response_model=List[HouseBankTransactionRead], summary="House bank ledger")
def house_bank(
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return storage.get_house_bank_transactions()


@router.get("/admin/house-bank/stats", response_model=HouseBankStats, summary="House bank balance")
def house_bank_stats(
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.house_bank_snapshot(storage)


@router.post(
    "/admin/house-bank/transfer",
    response_model=HouseBankTransactionRead,
    status_code=201,
    summary="Move drawer funds to the house bank",
)
def house_bank_transfer(
    payload: HouseBankTransferRequest,
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.transfer_to_house_bank(storage, current_user, payload)


@router.post(
    "/admin/house-bank/expense",
    response_model=HouseBankTransactionRead,
    status_code=201,
    summary="Record house bank expense",
)
def house_bank_expense(
    payload: HouseBankExpenseRequest,
    current_user: User = Depends(admin_only),
    storage: Storage = Depends(get_storage),
):
    return cash.record_house_bank_expense(storage, current_user, payload)
