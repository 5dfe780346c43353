from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Union
import logging

from app.models.budget import Budget
from app.models.category import Category
from app.models.expense import Expense
from app.schemas.budget import BudgetRecord
from app.schemas.category import CategoryInfo
from app.schemas.expense import ExpenseRecord
from app.core.types import ABSENT, Found, Lookup
from app.utils.months import month_end, month_start, parse_day

logger = logging.getLogger(__name__)


@dataclass
class ExpenseFilters:
    """Typed filter for the expense list; every field is optional"""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    categories: List[str] = field(default_factory=list)
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    payment_methods: List[str] = field(default_factory=list)
    search_term: Optional[str] = None


class SqlRecordSource:
    """
    Record Source backed by the SQLAlchemy session.

    Supplies expense records, category metadata and budgets. It holds no
    aggregation logic; the analytics and budget services only call the
    fetch operations below.
    """

    def __init__(self, db: Session):
        self.db = db

    def fetch_by_date_range(self, start_date: Union[date, str], end_date: Union[date, str]) -> List[ExpenseRecord]:
        """Expenses dated within [start_date, end_date], newest first. Accepts dates or YYYY-MM-DD strings."""
        if isinstance(start_date, str):
            start_date = parse_day(start_date)
        if isinstance(end_date, str):
            end_date = parse_day(end_date)
        rows = self.db.query(Expense).filter(
            Expense.date >= start_date,
            Expense.date <= end_date
        ).order_by(Expense.date.desc(), Expense.id).all()
        return [ExpenseRecord.model_validate(row) for row in rows]

    def fetch_by_month_range(self, start_month: str, end_month: str) -> List[ExpenseRecord]:
        """Expenses from the first day of start_month to the last day of end_month"""
        return self.fetch_by_date_range(month_start(start_month), month_end(end_month))

    def fetch_by_month(self, month: str) -> List[ExpenseRecord]:
        return self.fetch_by_date_range(month_start(month), month_end(month))

    def list_categories(self) -> List[CategoryInfo]:
        rows = self.db.query(Category).order_by(Category.name).all()
        return [CategoryInfo.model_validate(row) for row in rows]

    def find_category(self, category_id: str) -> Lookup[CategoryInfo]:
        row = self.db.query(Category).filter(Category.id == category_id).first()
        if row is None:
            return ABSENT
        return Found(CategoryInfo.model_validate(row))

    def find_budget_by_month(self, month: str) -> Lookup[BudgetRecord]:
        row = self.db.query(Budget).filter(Budget.month == month).first()
        if row is None:
            return ABSENT
        return Found(BudgetRecord.model_validate(row))

    def find_expenses(
        self,
        filters: ExpenseFilters,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Expense], int]:
        """Filtered, paginated expense rows plus the unpaginated total"""
        conditions = []

        if filters.start_date:
            conditions.append(Expense.date >= filters.start_date)
        if filters.end_date:
            conditions.append(Expense.date <= filters.end_date)
        if filters.categories:
            conditions.append(Expense.category.in_(filters.categories))
        if filters.min_amount is not None:
            conditions.append(Expense.amount >= filters.min_amount)
        if filters.max_amount is not None:
            conditions.append(Expense.amount <= filters.max_amount)
        if filters.payment_methods:
            conditions.append(Expense.payment_method.in_(filters.payment_methods))
        if filters.search_term:
            pattern = f"%{filters.search_term}%"
            conditions.append(or_(
                Expense.description.ilike(pattern),
                Expense.category.ilike(pattern)
            ))

        total = self.db.query(func.count(Expense.id)).filter(*conditions).scalar() or 0

        rows = self.db.query(Expense).filter(*conditions).order_by(
            Expense.date.desc(), Expense.created_at.desc()
        ).offset((page - 1) * limit).limit(limit).all()

        logger.debug(f"find_expenses matched {total} rows (page={page}, limit={limit})")
        return rows, total
