from pydantic import BaseModel, Field
from typing import List
import datetime as dt
from enum import Enum


class CategoryBreakdownEntry(BaseModel):
    category: str
    category_name: str
    amount: float
    percentage: float = Field(..., description="Share of the month's total, 0-100")
    color: str


class MonthlyTotal(BaseModel):
    month: str
    total: float


class DailyTotal(BaseModel):
    date: dt.date
    total: float


class MonthAmount(BaseModel):
    month: str
    amount: float


class MonthComparisonEntry(BaseModel):
    category: str
    current_month: MonthAmount
    previous_month: MonthAmount
    difference: float
    percentage_change: float


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class MonthlyChange(BaseModel):
    month: str
    total: float
    change: float
    percentage_change: float


class TrendAnalysis(BaseModel):
    month: str
    current_month_total: float
    average_spending: float
    monthly_changes: List[MonthlyChange]
    average_monthly_change: float
    volatility: float = Field(..., description="Population standard deviation of month-over-month changes")
    trend: TrendDirection
    insights: List[str]
