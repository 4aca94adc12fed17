# models/reports.py

from datetime import datetime
from typing import Dict, List

from pydantic import Field

from models.base import CamelModel
from models.booking import BookingRead
from models.inventory import InventoryRead
from models.maintenance import MaintenanceRead
from models.property import PropertyRead
from models.room import RoomRead


# ===============================================================
# ADMIN REPORT
# ===============================================================
class ReportSummary(CamelModel):
    critical_alerts: int = 0
    low_stock_count: int = 0
    open_maintenance_count: int = 0
    pending_payments_count: int = 0
    cleaning_issues_count: int = 0
    monthly_revenue: float = 0.0
    total_revenue: float = 0.0


class ReportDetails(CamelModel):
    low_stock_items: List[InventoryRead] = Field(default_factory=list)
    open_maintenance: List[MaintenanceRead] = Field(default_factory=list)
    pending_payments: List[BookingRead] = Field(default_factory=list)
    overdue_payments: List[BookingRead] = Field(default_factory=list)
    inquiry_summary: Dict[str, int] = Field(default_factory=dict)
    cleaning_issues: List[RoomRead] = Field(default_factory=list)
    expired_codes: List[RoomRead] = Field(default_factory=list)
    properties: List[PropertyRead] = Field(default_factory=list)


class DataQuality(CamelModel):
    stale_inventory: List[InventoryRead] = Field(default_factory=list)
    stale_maintenance: List[MaintenanceRead] = Field(default_factory=list)
    last_updated: datetime


class Report(CamelModel):
    summary: ReportSummary
    details: ReportDetails
    data_quality: DataQuality


# ===============================================================
# ANALYTICS
# ===============================================================
class RevenueProjection(CamelModel):
    next_month: float = 0.0
    confidence: int = 0


class RevenueInsights(CamelModel):
    total: float = 0.0
    previous_period: float = 0.0
    daily: List[float] = Field(default_factory=list)
    projections: RevenueProjection = Field(default_factory=RevenueProjection)


class OccupancyInsights(CamelModel):
    current: int = 0
    occupied_rooms: int = 0
    total_rooms: int = 0
    trend: int = 0


class ReferralSourceCount(CamelModel):
    source: str
    count: int


class CustomerInsights(CamelModel):
    average_stay_length: float = 0.0
    repeat_customer_rate: int = 0
    referral_sources: List[ReferralSourceCount] = Field(default_factory=list)


class OperationalAlert(CamelModel):
    type: str
    message: str
    severity: str


class OperationalEfficiency(CamelModel):
    completed_cleaning_tasks: int = 0
    pending_cleaning_tasks: int = 0
    completed_maintenance: int = 0
    alerts: List[OperationalAlert] = Field(default_factory=list)


class Analytics(CamelModel):
    range: str
    revenue: RevenueInsights
    occupancy: OccupancyInsights
    customer_insights: CustomerInsights
    operational_efficiency: OperationalEfficiency
