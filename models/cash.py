# models/cash.py

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field

from models.base import CamelModel, PositiveMoney
from models.enums import (
    DepositType,
    DrawerTransactionType,
    ExpenseCategory,
    HouseBankTransactionType,
)


# -------------------------------------------------
# Manager cash turn-ins
# -------------------------------------------------
class CashTurnInCreate(CamelModel):
    amount: PositiveMoney
    notes: Optional[str] = None


class CashTurnInRead(CamelModel):
    id: str
    manager_id: str
    manager_name: str
    property_id: Optional[str] = Field(default=None, alias="property")
    amount: Decimal
    notes: Optional[str] = None
    received_by: Optional[str] = None
    turn_in_date: datetime


# -------------------------------------------------
# Admin cash drawer
# -------------------------------------------------
class DrawerTransactionRead(CamelModel):
    id: str
    type: DrawerTransactionType
    amount: Decimal
    source: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
    transaction_date: datetime


class BankDepositRequest(CamelModel):
    type: DepositType
    amount: PositiveMoney
    description: Optional[str] = None


class CashAppPaymentRecord(CamelModel):
    payment_id: Optional[str] = None
    amount: PositiveMoney
    description: Optional[str] = None


# -------------------------------------------------
# House bank
# -------------------------------------------------
class HouseBankTransactionRead(CamelModel):
    id: str
    type: HouseBankTransactionType
    amount: Decimal
    category: ExpenseCategory
    vendor: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None
    created_by: Optional[str] = None
    transaction_date: datetime


class HouseBankTransferRequest(CamelModel):
    amount: PositiveMoney
    description: Optional[str] = None


class HouseBankExpenseRequest(CamelModel):
    amount: PositiveMoney
    category: ExpenseCategory
    vendor: Optional[str] = None
    description: Optional[str] = None
    receipt_url: Optional[str] = None
