from fastapi import APIRouter, Depends, HTTPException, Path, Query
from typing import List

from app.core.deps import get_analytics_service
from app.core.exceptions import InsufficientDataError, ValidationError
from app.schemas.analytics import (
    CategoryBreakdownEntry,
    DailyTotal,
    MonthComparisonEntry,
    MonthlyTotal,
    TrendAnalysis,
)
from app.services.analytics_service import AnalyticsService, DEFAULT_WINDOW_MONTHS
from app.utils.months import MONTH_KEY_PATTERN, previous_month as month_before

router = APIRouter()


def _month_param(description: str = "Month in YYYY-MM format"):
    return Path(..., pattern=MONTH_KEY_PATTERN, description=description)


@router.get("/category-breakdown/{month}", response_model=List[CategoryBreakdownEntry])
async def get_category_breakdown(
    month: str = _month_param(),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Spending per category for a month with each category's share of the total"""
    try:
        return service.get_category_breakdown(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/monthly-totals/{month}", response_model=List[MonthlyTotal])
async def get_monthly_totals(
    month: str = _month_param("Last month of the window, YYYY-MM"),
    count: int = Query(DEFAULT_WINDOW_MONTHS, ge=1, le=60),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Totals for the `count` months ending at `month`, months without spend included"""
    try:
        return service.get_monthly_totals(month, count)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/daily-totals/{month}", response_model=List[DailyTotal])
async def get_daily_totals(
    month: str = _month_param(),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Totals for each day of the month that has expenses"""
    try:
        return service.get_daily_totals(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/compare/{current_month}/{previous_month}", response_model=List[MonthComparisonEntry])
async def compare_months(
    current_month: str = _month_param("Current month, YYYY-MM"),
    previous_month: str = _month_param("Month to compare against, YYYY-MM"),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Per-category differences between two months"""
    try:
        return service.compare_months(current_month, previous_month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/compare/{current_month}", response_model=List[MonthComparisonEntry])
async def compare_with_previous_month(
    current_month: str = _month_param("Current month, YYYY-MM"),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Per-category differences between a month and the one before it"""
    try:
        return service.compare_months(current_month, month_before(current_month))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/trend-analysis/{month}", response_model=TrendAnalysis)
async def get_trend_analysis(
    month: str = _month_param(),
    months: int = Query(DEFAULT_WINDOW_MONTHS, le=60, description="Window size in months"),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Trend, volatility and insights over the months ending at `month`"""
    try:
        return service.get_trend_analysis(month, months)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InsufficientDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
