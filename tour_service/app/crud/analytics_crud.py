from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from ..enum.booking_enum import BookingStatus, MetricsRange, PaymentStatus
from ..schemas.analytics_schemas import (
    ActivityAnalyticsOut, ActivityConversion, ActivityRevenue, BookingAnalyticsOut,
    BookingConversion, DailyRevenue, EarningsOut, HourlyRevenue, PeakHour, PerformanceAlert,
    PerformanceAlertsOut, PerformanceMetricsOut, PriceComparisonOut, RevenueMetrics)
from ..schemas.bookings_schemas import BookingOut
from ..storage.base import Storage
from ..util.pricing import parse_price

PAID_STATUSES = {PaymentStatus.deposit_paid.value, PaymentStatus.fully_paid.value}
CONVERTED_STATUSES = {BookingStatus.confirmed.value, BookingStatus.completed.value}

RANGE_WINDOWS = {
    MetricsRange.last_hour.value: timedelta(hours=1),
    MetricsRange.last_day.value: timedelta(hours=24),
    MetricsRange.last_week.value: timedelta(days=7),
    MetricsRange.last_month.value: timedelta(days=30),
}

LOW_CONVERSION_THRESHOLD = 50


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(part * 100 / whole + 0.5)


def _month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    current = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if current.month == 1:
        last = current.replace(year=current.year - 1, month=12)
    else:
        last = current.replace(month=current.month - 1)
    return current, last


def _amount(booking: BookingOut) -> int:
    return parse_price(booking.total_amount) or 0


# ---------------- CEO dashboard ----------------

def get_earnings(storage: Storage, now: Optional[datetime] = None) -> EarningsOut:
    """Cash collected on bookings created this calendar month and the previous one."""
    current_start, last_start = _month_bounds(now or _now())
    current_total = last_total = 0

    for booking in storage.list_bookings():
        if booking.payment_status not in PAID_STATUSES:
            continue
        if booking.created_at >= current_start:
            current_total += booking.paid_amount
        elif booking.created_at >= last_start:
            last_total += booking.paid_amount

    return EarningsOut(current_month=current_total, last_month=last_total, currency="MAD")


def get_activity_analytics(storage: Storage) -> List[ActivityAnalyticsOut]:
    counts = Counter(b.activity_id for b in storage.list_bookings())
    return [
        ActivityAnalyticsOut(**activity.model_dump(), booking_count=counts.get(activity.id, 0))
        for activity in storage.list_activities()
    ]


def get_booking_analytics(storage: Storage) -> BookingAnalyticsOut:
    bookings = storage.list_bookings()
    statuses = Counter(b.status for b in bookings)
    return BookingAnalyticsOut(
        total=len(bookings),
        pending=statuses.get(BookingStatus.pending.value, 0),
        confirmed=statuses.get(BookingStatus.confirmed.value, 0),
        completed=statuses.get(BookingStatus.completed.value, 0),
        cancelled=statuses.get(BookingStatus.cancelled.value, 0),
    )


def get_price_comparison(storage: Storage) -> List[PriceComparisonOut]:
    comparison = []
    for activity in storage.list_activities():
        our_price = parse_price(activity.price)
        competitor = activity.getyourguide_price
        savings = savings_percent = None
        if our_price is not None and competitor:
            savings = competitor - our_price
            savings_percent = round(savings * 100 / competitor, 1)

        comparison.append(PriceComparisonOut(
            id=activity.id,
            name=activity.name,
            category=activity.category,
            currency=activity.currency,
            our_price=our_price,
            getyourguide_price=competitor,
            savings=savings,
            savings_percent=savings_percent,
        ))
    return comparison


# ---------------- Performance dashboard ----------------

def _in_range(bookings: List[BookingOut], range_value: str, now: datetime) -> List[BookingOut]:
    window = RANGE_WINDOWS.get(range_value)
    if window is None:
        return list(bookings)
    since = now - window
    return [b for b in bookings if b.created_at >= since]


def get_performance_metrics(storage: Storage, range_value: str = MetricsRange.last_day.value,
                            now: Optional[datetime] = None) -> PerformanceMetricsOut:
    now = now or _now()
    bookings = storage.list_bookings()
    activities = storage.list_activities()
    in_range = _in_range(bookings, range_value, now)

    converted = [b for b in bookings if b.status in CONVERTED_STATUSES]
    by_activity = []
    for activity in activities:
        activity_bookings = [b for b in bookings if b.activity_id == activity.id]
        activity_converted = [b for b in activity_bookings if b.status in CONVERTED_STATUSES]
        by_activity.append(ActivityConversion(
            activity_id=activity.id,
            name=activity.name,
            bookings=len(activity_bookings),
            rate=_percent(len(activity_converted), len(activity_bookings)),
        ))

    hourly = []
    current_hour = now.replace(minute=0, second=0, microsecond=0)
    for hours_ago in range(23, -1, -1):
        start = current_hour - timedelta(hours=hours_ago)
        end = start + timedelta(hours=1)
        hour_bookings = [b for b in in_range if start <= b.created_at < end]
        hourly.append(HourlyRevenue(
            hour=f"{start.hour:02d}:00",
            amount=sum(_amount(b) for b in hour_bookings),
            bookings=len(hour_bookings),
        ))

    daily = []
    for days_ago in range(6, -1, -1):
        day = (now - timedelta(days=days_ago)).date()
        day_bookings = [b for b in in_range if b.created_at.date() == day]
        daily.append(DailyRevenue(
            date=day.isoformat(),
            amount=sum(_amount(b) for b in day_bookings),
            bookings=len(day_bookings),
        ))

    revenue_by_activity = []
    for activity in activities:
        activity_bookings = [b for b in in_range if b.activity_id == activity.id]
        revenue = sum(_amount(b) for b in activity_bookings)
        if revenue > 0:
            revenue_by_activity.append(ActivityRevenue(
                activity_id=activity.id,
                name=activity.name,
                revenue=revenue,
                bookings=len(activity_bookings),
            ))

    hours = Counter(b.created_at.hour for b in bookings)

    return PerformanceMetricsOut(
        range=range_value,
        generated_at=now,
        booking_conversion=BookingConversion(
            rate=_percent(len(converted), len(bookings)),
            total_bookings=len(bookings),
            converted_bookings=len(converted),
            by_activity=by_activity,
        ),
        revenue=RevenueMetrics(
            total=sum(_amount(b) for b in in_range),
            hourly=hourly,
            daily=daily,
            by_activity=revenue_by_activity,
        ),
        peak_hours=[PeakHour(hour=h, bookings=hours.get(h, 0)) for h in range(24)],
    )


def get_performance_alerts(storage: Storage, now: Optional[datetime] = None) -> PerformanceAlertsOut:
    now = now or _now()
    bookings = storage.list_bookings()
    alerts = []

    recent = [b for b in bookings if b.created_at >= now - timedelta(hours=24)]
    if not recent:
        alerts.append(PerformanceAlert(
            type="warning",
            message="No bookings in the last 24 hours",
            value="0",
            threshold="1+",
            timestamp=now,
        ))

    converted = sum(1 for b in bookings if b.status in CONVERTED_STATUSES)
    exact_rate = converted * 100 / len(bookings) if bookings else 0
    if exact_rate < LOW_CONVERSION_THRESHOLD:
        alerts.append(PerformanceAlert(
            type="warning",
            message="Low booking conversion rate",
            value=f"{_percent(converted, len(bookings))}%",
            threshold=f"{LOW_CONVERSION_THRESHOLD}%",
            timestamp=now,
        ))

    return PerformanceAlertsOut(alerts=alerts, generated_at=now)
