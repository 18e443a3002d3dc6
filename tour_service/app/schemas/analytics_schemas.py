from datetime import datetime
from typing import List, Optional

from shared.core.schemas import CamelModel
from .activities_schemas import ActivityOut


class EarningsOut(CamelModel):
    current_month: int
    last_month: int
    currency: str = "MAD"


class ActivityAnalyticsOut(ActivityOut):
    booking_count: int = 0


class BookingAnalyticsOut(CamelModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int


class PriceComparisonOut(CamelModel):
    id: str
    name: str
    category: str
    currency: str = "MAD"
    our_price: Optional[int] = None
    getyourguide_price: Optional[int] = None
    savings: Optional[int] = None
    savings_percent: Optional[float] = None


# ---------------- Performance dashboard ----------------
class ActivityConversion(CamelModel):
    activity_id: str
    name: str
    bookings: int
    rate: int


class BookingConversion(CamelModel):
    rate: int
    total_bookings: int
    converted_bookings: int
    by_activity: List[ActivityConversion] = []


class HourlyRevenue(CamelModel):
    hour: str
    amount: int
    bookings: int


class DailyRevenue(CamelModel):
    date: str
    amount: int
    bookings: int


class ActivityRevenue(CamelModel):
    activity_id: str
    name: str
    revenue: int
    bookings: int


class RevenueMetrics(CamelModel):
    total: int
    hourly: List[HourlyRevenue] = []
    daily: List[DailyRevenue] = []
    by_activity: List[ActivityRevenue] = []


class PeakHour(CamelModel):
    hour: int
    bookings: int


class PerformanceMetricsOut(CamelModel):
    range: str
    generated_at: datetime
    booking_conversion: BookingConversion
    revenue: RevenueMetrics
    peak_hours: List[PeakHour] = []


class PerformanceAlert(CamelModel):
    type: str
    message: str
    value: str
    threshold: str
    timestamp: datetime


class PerformanceAlertsOut(CamelModel):
    alerts: List[PerformanceAlert] = []
    generated_at: datetime
