from typing import List

from fastapi import APIRouter, Depends, Query

from shared.core.auth import require_permission
from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from shared.core.schemas import SessionUser
from shared.utils.enums import Permission
from ...crud import analytics_crud as crud
from ...enum.booking_enum import MetricsRange
from ...schemas.analytics_schemas import (
    ActivityAnalyticsOut, BookingAnalyticsOut, EarningsOut, PerformanceAlertsOut,
    PerformanceMetricsOut, PriceComparisonOut)

router = APIRouter(prefix="/api/admin", tags=["admin analytics"],
                   dependencies=[Depends(rate_limit("admin"))])

allow_analytics = require_permission(Permission.VIEW_ANALYTICS)


@router.get("/analytics/earnings", response_model=EarningsOut)
def get_earnings(
    storage=Depends(get_storage),
    _: SessionUser = Depends(require_permission(Permission.VIEW_CEO_DASHBOARD)),
):
    return crud.get_earnings(storage)


@router.get("/analytics/activities", response_model=List[ActivityAnalyticsOut])
def get_activity_analytics(
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_analytics),
):
    return crud.get_activity_analytics(storage)


@router.get("/analytics/bookings", response_model=BookingAnalyticsOut)
def get_booking_analytics(
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_analytics),
):
    return crud.get_booking_analytics(storage)


@router.get("/getyourguide/comparison", response_model=List[PriceComparisonOut])
def get_price_comparison(
    storage=Depends(get_storage),
    _: SessionUser = Depends(require_permission(Permission.VIEW_PRICE_COMPARISON)),
):
    return crud.get_price_comparison(storage)


@router.get("/performance-metrics", response_model=PerformanceMetricsOut)
def get_performance_metrics(
    range: MetricsRange = Query(default=MetricsRange.last_day),
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_analytics),
):
    return crud.get_performance_metrics(storage, range.value)


@router.get("/performance-alerts", response_model=PerformanceAlertsOut)
def get_performance_alerts(
    storage=Depends(get_storage),
    _: SessionUser = Depends(allow_analytics),
):
    return crud.get_performance_alerts(storage)
