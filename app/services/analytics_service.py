from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List
import logging
import math

from app.core.exceptions import InsufficientDataError
from app.schemas.analytics import (
    CategoryBreakdownEntry,
    DailyTotal,
    MonthAmount,
    MonthComparisonEntry,
    MonthlyChange,
    MonthlyTotal,
    TrendAnalysis,
    TrendDirection,
)
from app.utils.months import month_end, month_key, month_start, month_window

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#808080"
DEFAULT_WINDOW_MONTHS = 6

# Insight thresholds, as fractions of the window's average spending
TREND_THRESHOLD = 0.10
AVERAGE_DEVIATION_THRESHOLD = 0.15
HIGH_VOLATILITY_THRESHOLD = 0.20
LOW_VOLATILITY_THRESHOLD = 0.05
# Percentage points of month-over-month change worth reporting
LAST_CHANGE_THRESHOLD = 20.0

TREND_MONTHS = 3


def _percentage_change(current: Decimal, previous: Decimal) -> float:
    if previous > 0:
        return float((current - previous) / previous * 100)
    if current > 0:
        # A category with no previous spend counts as a full increase
        return 100.0
    return 0.0


class AnalyticsService:
    """
    Aggregations over expense records: category breakdowns, daily and
    monthly totals, month comparisons and trend analysis.

    Every call re-reads from the record source; nothing is cached.
    """

    def __init__(self, record_source):
        self.record_source = record_source

    def _category_amounts(self, month: str) -> Dict[str, Decimal]:
        amounts: Dict[str, Decimal] = defaultdict(Decimal)
        for expense in self.record_source.fetch_by_date_range(month_start(month), month_end(month)):
            amounts[expense.category] += expense.amount
        return amounts

    def get_category_breakdown(self, month: str) -> List[CategoryBreakdownEntry]:
        """Per-category totals and share of the month's total, largest first"""
        amounts = self._category_amounts(month)
        categories = {category.id: category for category in self.record_source.list_categories()}
        total = sum(amounts.values(), Decimal("0"))

        breakdown = []
        for category_id, amount in amounts.items():
            category = categories.get(category_id)
            breakdown.append(CategoryBreakdownEntry(
                category=category_id,
                category_name=category.name if category else category_id,
                amount=float(amount),
                percentage=float(amount) / float(total) * 100 if total > 0 else 0.0,
                color=category.color if category else DEFAULT_COLOR
            ))

        # Equal amounts fall back to category id order so results are stable
        breakdown.sort(key=lambda entry: (-entry.amount, entry.category))
        return breakdown

    def get_daily_totals(self, month: str) -> List[DailyTotal]:
        """Totals for each day of the month that has at least one expense"""
        expenses = self.record_source.fetch_by_date_range(month_start(month), month_end(month))

        totals: Dict[date, Decimal] = defaultdict(Decimal)
        for expense in expenses:
            totals[expense.date] += expense.amount

        return [DailyTotal(date=day, total=float(totals[day])) for day in sorted(totals)]

    def get_monthly_totals(self, end_month: str, count: int = DEFAULT_WINDOW_MONTHS) -> List[MonthlyTotal]:
        """Totals for the ``count`` months ending at ``end_month``, months without spend included"""
        months = month_window(end_month, count)
        if not months:
            return []

        totals: Dict[str, Decimal] = {month: Decimal("0") for month in months}
        for expense in self.record_source.fetch_by_month_range(months[0], months[-1]):
            key = month_key(expense.date)
            if key in totals:
                totals[key] += expense.amount

        return [MonthlyTotal(month=month, total=float(totals[month])) for month in months]

    def compare_months(self, current_month: str, previous_month: str) -> List[MonthComparisonEntry]:
        """Per-category differences between two months, biggest swings first"""
        current = self._category_amounts(current_month)
        previous = self._category_amounts(previous_month)

        comparison = []
        for category in set(current) | set(previous):
            current_amount = current.get(category, Decimal("0"))
            previous_amount = previous.get(category, Decimal("0"))
            comparison.append(MonthComparisonEntry(
                category=category,
                current_month=MonthAmount(month=current_month, amount=float(current_amount)),
                previous_month=MonthAmount(month=previous_month, amount=float(previous_amount)),
                difference=float(current_amount - previous_amount),
                percentage_change=_percentage_change(current_amount, previous_amount)
            ))

        comparison.sort(key=lambda entry: (-abs(entry.difference), entry.category))
        return comparison

    def get_trend_analysis(self, month: str, window_months: int = DEFAULT_WINDOW_MONTHS) -> TrendAnalysis:
        """
        Spending trend over the ``window_months`` months ending at ``month``.

        Computes the window average, month-over-month changes, their mean
        and population standard deviation (volatility), a trend direction
        from the last three months and a list of readable insights.
        """
        totals = self.get_monthly_totals(month, window_months)
        if not totals:
            raise InsufficientDataError(
                f"No months available for trend analysis ending {month} (window of {window_months})"
            )

        values = [entry.total for entry in totals]
        current_total = values[-1]
        average = sum(values) / len(values)

        changes = []
        for index in range(1, len(totals)):
            previous_total = values[index - 1]
            change = values[index] - previous_total
            changes.append(MonthlyChange(
                month=totals[index].month,
                total=values[index],
                change=change,
                percentage_change=change / previous_total * 100 if previous_total > 0 else 0.0
            ))

        deltas = [entry.change for entry in changes]
        average_change = sum(deltas) / len(deltas) if deltas else 0.0
        volatility = (
            math.sqrt(sum((delta - average_change) ** 2 for delta in deltas) / len(deltas))
            if deltas else 0.0
        )

        trend = self._trend_direction(values, average)
        insights = self._build_insights(
            current_total, average, len(values), volatility, trend, changes
        )

        logger.debug(f"Trend analysis for {month} over {len(values)} months: {trend.value}")

        return TrendAnalysis(
            month=month,
            current_month_total=current_total,
            average_spending=average,
            monthly_changes=changes,
            average_monthly_change=average_change,
            volatility=volatility,
            trend=trend,
            insights=insights
        )

    @staticmethod
    def _trend_direction(values: List[float], average: float) -> TrendDirection:
        if len(values) < TREND_MONTHS:
            return TrendDirection.STABLE

        recent = values[-TREND_MONTHS:]
        first, last = recent[0], recent[-1]
        threshold = average * TREND_THRESHOLD
        if last - first > threshold:
            return TrendDirection.INCREASING
        if first - last > threshold:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE

    @staticmethod
    def _build_insights(
        current_total: float,
        average: float,
        months: int,
        volatility: float,
        trend: TrendDirection,
        changes: List[MonthlyChange]
    ) -> List[str]:
        insights = []

        if average > 0:
            deviation = (current_total - average) / average
            if abs(deviation) > AVERAGE_DEVIATION_THRESHOLD:
                direction = "above" if deviation > 0 else "below"
                insights.append(
                    f"Your spending this month is {abs(deviation) * 100:.1f}% {direction} "
                    f"your {months}-month average."
                )

            if volatility > average * HIGH_VOLATILITY_THRESHOLD:
                insights.append("Your monthly spending shows high volatility; month-to-month amounts vary a lot.")
            elif volatility < average * LOW_VOLATILITY_THRESHOLD:
                insights.append("Your spending has been very consistent from month to month.")

        if trend == TrendDirection.INCREASING:
            insights.append("Your spending has been increasing over the last three months.")
        elif trend == TrendDirection.DECREASING:
            insights.append("Your spending has been decreasing over the last three months.")

        if changes and abs(changes[-1].percentage_change) > LAST_CHANGE_THRESHOLD:
            latest = changes[-1].percentage_change
            kind = "increase" if latest > 0 else "decrease"
            insights.append(f"There was a {abs(latest):.1f}% {kind} in spending from last month.")

        return insights
