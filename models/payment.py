# models/payment.py

from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.base import CamelModel, LocalDateTime, Money, PositiveMoney
from models.enums import PaymentMethod


class PaymentCreate(CamelModel):
    """
    total_paid is what actually changed hands after discounts, deposits and
    fees. When omitted it equals amount. received_by is always the caller.
    """
    booking_id: str
    amount: PositiveMoney
    method: PaymentMethod
    transaction_id: Optional[str] = None
    date_received: Optional[LocalDateTime] = None
    notes: Optional[str] = None

    discount_amount: Optional[Money] = None
    discount_reason: Optional[str] = None
    has_security_deposit: bool = False
    security_deposit_amount: Optional[Money] = None
    security_deposit_discount: Optional[Money] = None
    has_pet_fee: bool = False
    pet_fee_amount: Optional[Money] = None
    pet_fee_discount: Optional[Money] = None
    total_paid: Optional[Money] = None


class PaymentRead(CamelModel):
    id: str
    booking_id: str
    amount: Decimal
    method: PaymentMethod
    transaction_id: Optional[str] = None
    date_received: datetime
    received_by: str
    notes: Optional[str] = None

    discount_amount: Optional[Decimal] = None
    discount_reason: Optional[str] = None
    has_security_deposit: bool = False
    security_deposit_amount: Optional[Decimal] = None
    security_deposit_discount: Optional[Decimal] = None
    has_pet_fee: bool = False
    pet_fee_amount: Optional[Decimal] = None
    pet_fee_discount: Optional[Decimal] = None
    total_paid: Optional[Decimal] = None
    created_at: Optional[datetime] = None


class PaymentDetailedRead(PaymentRead):
    received_by_name: str
