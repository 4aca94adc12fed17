# services/reports.py
"""
Admin report and range analytics. Pure functions over fetched rows; the
routers decide which rows a caller may see.
"""

import math
from collections import Counter
from datetime import datetime, timedelta
from typing import Optional, Sequence

from models.enums import MaintenanceStatus, PaymentStatus, Priority, RoomStatus, TaskStatus
from models.reports import (
    Analytics,
    CustomerInsights,
    DataQuality,
    OccupancyInsights,
    OperationalAlert,
    OperationalEfficiency,
    ReferralSourceCount,
    Report,
    ReportDetails,
    ReportSummary,
    RevenueInsights,
    RevenueProjection,
)
from services.ledger import start_of_day

STALE_AFTER = timedelta(days=7)

RANGE_DAYS = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}
DEFAULT_RANGE = "30d"

TOP_REFERRAL_SOURCES = 5


def _sum_amounts(payments) -> float:
    return sum((float(p.amount) for p in payments), 0.0)


# ===============================================================
# ADMIN REPORT
# ===============================================================
def build_report(
    low_stock: Sequence,
    open_maintenance: Sequence,
    payments: Sequence,
    bookings: Sequence,
    inquiries: Sequence,
    rooms: Sequence,
    properties: Sequence,
    now: Optional[datetime] = None,
) -> Report:
    now = now or datetime.now()
    stale_before = now - STALE_AFTER

    pending = [b for b in bookings if b.payment_status == PaymentStatus.pending.value]
    overdue = [b for b in bookings if b.payment_status == PaymentStatus.overdue.value]
    cleaning_issues = [r for r in rooms if r.cleaning_status != "clean" or r.linen_status != "fresh"]
    expired_codes = [r for r in rooms if r.code_expiry is not None and r.code_expiry < now]

    monthly = [
        p for p in payments
        if p.date_received.year == now.year and p.date_received.month == now.month
    ]

    critical_maintenance = sum(1 for m in open_maintenance if m.priority == Priority.critical.value)
    out_of_stock = sum(1 for item in low_stock if item.quantity == 0)

    return Report(
        summary=ReportSummary(
            critical_alerts=critical_maintenance + out_of_stock,
            low_stock_count=len(low_stock),
            open_maintenance_count=len(open_maintenance),
            pending_payments_count=len(pending),
            cleaning_issues_count=len(cleaning_issues),
            monthly_revenue=_sum_amounts(monthly),
            total_revenue=_sum_amounts(payments),
        ),
        details=ReportDetails(
            low_stock_items=list(low_stock),
            open_maintenance=list(open_maintenance),
            pending_payments=pending,
            overdue_payments=overdue,
            inquiry_summary=dict(Counter(i.status for i in inquiries)),
            cleaning_issues=cleaning_issues,
            expired_codes=expired_codes,
            properties=list(properties),
        ),
        data_quality=DataQuality(
            stale_inventory=[i for i in low_stock if i.last_updated and i.last_updated < stale_before],
            stale_maintenance=[m for m in open_maintenance if m.date_reported and m.date_reported < stale_before],
            last_updated=now,
        ),
    )


# ===============================================================
# ANALYTICS
# ===============================================================
def range_days(range_key: str) -> int:
    """Unknown ranges fall back to a year."""
    return RANGE_DAYS.get(range_key, 365)


def _revenue(payments: Sequence, days: int, now: datetime) -> RevenueInsights:
    start = now - timedelta(days=days)
    previous_start = start - timedelta(days=days)

    total = _sum_amounts(p for p in payments if p.date_received >= start)
    previous = _sum_amounts(p for p in payments if previous_start <= p.date_received < start)

    daily = []
    for offset in range(days - 1, -1, -1):
        day_start = start_of_day(now - timedelta(days=offset))
        day_end = day_start + timedelta(days=1)
        daily.append(_sum_amounts(p for p in payments if day_start <= p.date_received < day_end))

    growth = (total - previous) / previous if previous > 0 else 0.1
    confidence = min(95, max(60, 85 - abs(growth * 100)))

    return RevenueInsights(
        total=round(total, 2),
        previous_period=round(previous, 2),
        daily=daily,
        projections=RevenueProjection(
            next_month=round(total * (1 + growth) * (30 / days), 2),
            confidence=round(confidence),
        ),
    )


def _occupancy(rooms: Sequence, bookings: Sequence, days: int, now: datetime) -> OccupancyInsights:
    start = now - timedelta(days=days)
    previous_start = start - timedelta(days=days)

    occupied = sum(1 for r in rooms if r.status == RoomStatus.occupied.value)
    recent = sum(1 for b in bookings if b.start_date >= start)
    previous = sum(1 for b in bookings if previous_start <= b.start_date < start)

    return OccupancyInsights(
        current=round(occupied / len(rooms) * 100) if rooms else 0,
        occupied_rooms=occupied,
        total_rooms=len(rooms),
        trend=round((recent - previous) / previous * 100) if previous else 0,
    )


def _customers(bookings: Sequence, guests: Sequence, days: int, now: datetime) -> CustomerInsights:
    start = now - timedelta(days=days)
    recent = [b for b in bookings if b.start_date >= start]

    stays = [
        math.ceil((b.end_date - b.start_date).total_seconds() / 86400)
        for b in recent if b.end_date is not None
    ]
    per_guest = Counter(b.guest_id for b in recent)
    repeat = sum(1 for count in per_guest.values() if count > 1)
    sources = Counter(g.referral_source for g in guests if g.referral_source)

    return CustomerInsights(
        average_stay_length=round(sum(stays) / len(stays), 1) if stays else 0.0,
        repeat_customer_rate=round(repeat / len(per_guest) * 100) if per_guest else 0,
        referral_sources=[
            ReferralSourceCount(source=source, count=count)
            for source, count in sources.most_common(TOP_REFERRAL_SOURCES)
        ],
    )


def _operations(
    tasks: Sequence,
    maintenance: Sequence,
    inventory: Sequence,
    room_count: int,
    days: int,
    now: datetime,
) -> OperationalEfficiency:
    start = now - timedelta(days=days)
    pending_tasks = sum(1 for t in tasks if t.status == TaskStatus.pending.value)
    alerts = []

    if pending_tasks > room_count * 0.3:
        alerts.append(OperationalAlert(
            type="cleaning", message=f"{pending_tasks} cleaning tasks pending", severity="medium",
        ))

    critical = sum(
        1 for m in maintenance
        if m.priority == Priority.critical.value and m.status != MaintenanceStatus.completed.value
    )
    if critical:
        alerts.append(OperationalAlert(
            type="maintenance",
            message=f"{critical} critical maintenance items require attention",
            severity="high",
        ))

    low_stock = sum(1 for item in inventory if item.quantity <= item.threshold)
    if low_stock:
        alerts.append(OperationalAlert(
            type="inventory", message=f"{low_stock} items are low in stock", severity="medium",
        ))

    return OperationalEfficiency(
        completed_cleaning_tasks=sum(
            1 for t in tasks
            if t.status == TaskStatus.completed.value and t.completed_at and t.completed_at >= start
        ),
        pending_cleaning_tasks=pending_tasks,
        completed_maintenance=sum(
            1 for m in maintenance
            if m.status == MaintenanceStatus.completed.value and m.date_completed and m.date_completed >= start
        ),
        alerts=alerts,
    )


def build_analytics(
    range_key: str,
    bookings: Sequence,
    payments: Sequence,
    rooms: Sequence,
    inventory: Sequence,
    maintenance: Sequence,
    guests: Sequence,
    tasks: Sequence,
    now: Optional[datetime] = None,
) -> Analytics:
    now = now or datetime.now()
    days = range_days(range_key)

    return Analytics(
        range=range_key,
        revenue=_revenue(payments, days, now),
        occupancy=_occupancy(rooms, bookings, days, now),
        customer_insights=_customers(bookings, guests, days, now),
        operational_efficiency=_operations(tasks, maintenance, inventory, len(rooms), days, now),
    )
