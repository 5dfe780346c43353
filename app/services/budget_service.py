from sqlalchemy.orm import Session
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional
import logging

from app.models.budget import Budget
from app.schemas.budget import (
    BudgetCreate,
    BudgetStatus,
    BudgetStatusLevel,
    CategoryBudgetStatus,
)
from app.services.record_source import SqlRecordSource
from app.core.exceptions import NotFoundError
from app.core.types import Found, Lookup
from app.utils.audit import audit
from app.utils.months import parse_month

logger = logging.getLogger(__name__)

WARNING_PERCENTAGE = 80
EXCEEDED_PERCENTAGE = 100
UNKNOWN_CATEGORY_NAME = "Unknown Category"


def _rounded_percentage(spent: Decimal, cap: Decimal) -> int:
    """Whole-number percentage of cap used, halves rounded up; 0 for a zero cap"""
    if cap <= 0:
        return 0
    return int((spent / cap * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def classify(percentage: int) -> BudgetStatusLevel:
    if percentage >= EXCEEDED_PERCENTAGE:
        return BudgetStatusLevel.EXCEEDED
    if percentage >= WARNING_PERCENTAGE:
        return BudgetStatusLevel.WARNING
    return BudgetStatusLevel.NORMAL


class BudgetService:
    def __init__(self, db: Session, record_source: Optional[SqlRecordSource] = None):
        self.db = db
        self.record_source = record_source or SqlRecordSource(db)

    def get_budget_by_month(self, month: str) -> Lookup:
        parse_month(month)
        return self.record_source.find_budget_by_month(month)

    def get_budgets_by_month_range(self, start_month: str, end_month: str) -> List[Budget]:
        parse_month(start_month)
        parse_month(end_month)
        return self.db.query(Budget).filter(
            Budget.month >= start_month,
            Budget.month <= end_month
        ).order_by(Budget.month).all()

    def create_or_update_budget(self, data: BudgetCreate) -> Budget:
        """Store the budget for data.month, replacing any existing one"""
        parse_month(data.month)
        for category_id in data.category_budgets:
            if not isinstance(self.record_source.find_category(category_id), Found):
                raise NotFoundError(f"Category with ID {category_id} not found")

        # JSON column; keep caps as plain numbers in the caller's order
        caps = {category_id: float(cap) for category_id, cap in data.category_budgets.items()}

        budget = self.db.query(Budget).filter(Budget.month == data.month).first()
        if budget:
            budget.total_budget = data.total_budget
            budget.category_budgets = caps
            event = "budget.updated"
        else:
            budget = Budget(month=data.month, total_budget=data.total_budget, category_budgets=caps)
            self.db.add(budget)
            event = "budget.created"

        self.db.commit()
        self.db.refresh(budget)
        audit(event, entity_id=budget.id, month=budget.month, total_budget=budget.total_budget)
        return budget

    def delete_budget(self, budget_id: str) -> None:
        budget = self.db.query(Budget).filter(Budget.id == budget_id).first()
        if not budget:
            raise NotFoundError(f"Budget with ID {budget_id} not found")

        self.db.delete(budget)
        self.db.commit()
        audit("budget.deleted", entity_id=budget_id)

    def get_budget_status(self, month: str) -> BudgetStatus:
        """
        Budget consumption for a month, overall and per capped category.

        A month without a stored budget reports an all-zero status.
        Categories are listed in the order the budget defines them.
        """
        lookup = self.get_budget_by_month(month)
        if not isinstance(lookup, Found):
            return BudgetStatus(
                month=month,
                total_budget=0,
                total_spent=0,
                total_remaining=0,
                percentage_used=0,
                categories=[]
            )
        budget = lookup.value

        expenses = self.record_source.fetch_by_month(month)
        total_spent = sum((expense.amount for expense in expenses), Decimal("0"))

        spent_by_category: Dict[str, Decimal] = defaultdict(Decimal)
        for expense in expenses:
            spent_by_category[expense.category] += expense.amount

        names = {category.id: category.name for category in self.record_source.list_categories()}

        categories = []
        for category_id, cap in budget.category_budgets.items():
            spent = spent_by_category.get(category_id, Decimal("0"))
            percentage = _rounded_percentage(spent, cap)
            categories.append(CategoryBudgetStatus(
                category_id=category_id,
                category_name=names.get(category_id, UNKNOWN_CATEGORY_NAME),
                budgeted=float(cap),
                spent=float(spent),
                remaining=float(max(Decimal("0"), cap - spent)),
                percentage=percentage,
                status=classify(percentage)
            ))

        return BudgetStatus(
            month=month,
            total_budget=float(budget.total_budget),
            total_spent=float(total_spent),
            total_remaining=float(max(Decimal("0"), budget.total_budget - total_spent)),
            percentage_used=_rounded_percentage(total_spent, budget.total_budget),
            categories=categories
        )
