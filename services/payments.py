# services/payments.py

from datetime import datetime
from typing import Optional

from core.logging_config import logger
from models.enums import DrawerTransactionType, PaymentMethod, PaymentStatus
from models.payment import PaymentCreate
from services.bookings import get_booking_for_user
from storage.base import Storage
from storage.tables import Payment


def _fee_summary(payment: Payment) -> str:
    parts = []
    if payment.discount_amount:
        reason = f" ({payment.discount_reason})" if payment.discount_reason else ""
        parts.append(f"discount ${payment.discount_amount}{reason}")
    if payment.has_security_deposit:
        parts.append(f"deposit ${payment.security_deposit_amount or 0}")
    if payment.has_pet_fee:
        parts.append(f"pet fee ${payment.pet_fee_amount or 0}")
    return f" [{', '.join(parts)}]" if parts else ""


def record_payment(storage: Storage, user, payload: PaymentCreate, now: Optional[datetime] = None) -> Payment:
    """
    Record a payment against a booking the caller can see.

    The booking is marked paid; Cash App payments also land in the admin
    drawer as a cashapp_received entry for the amount actually paid.
    """
    now = now or datetime.now()
    data = payload.model_dump()
    if data.get("date_received") is None:
        data["date_received"] = now
    if data.get("total_paid") is None:
        data["total_paid"] = data["amount"]

    with storage.transaction():
        booking = get_booking_for_user(storage, user, data["booking_id"])

        payment = storage.create_payment({**data, "received_by": user.id})
        storage.update_booking(booking.id, {"payment_status": PaymentStatus.paid.value})

        if payment.method == PaymentMethod.cash_app.value:
            storage.create_admin_drawer_transaction({
                "type": DrawerTransactionType.cashapp_received.value,
                "amount": payment.total_paid,
                "source": f"payment:{payment.id}",
                "description": f"Cash App payment for booking {booking.id}",
                "created_by": user.id,
                "transaction_date": payment.date_received,
            })

        storage.create_audit_log(
            user.id,
            "payment_recorded",
            f"{user.name} recorded ${payment.total_paid} ({payment.method}) "
            f"for booking {booking.id}{_fee_summary(payment)}",
        )

    logger.info(f"Payment {payment.id} recorded for booking {booking.id}")
    return payment
