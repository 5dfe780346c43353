from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional, Tuple
import logging
import math

from app.models.expense import Expense
from app.schemas.expense import CategoryTotal, ExpenseCreate, ExpenseUpdate, Pagination
from app.services.record_source import ExpenseFilters, SqlRecordSource
from app.core.exceptions import NotFoundError
from app.core.types import Found
from app.utils.audit import audit
from app.utils.months import month_end, month_start

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, db: Session, record_source: Optional[SqlRecordSource] = None):
        self.db = db
        self.record_source = record_source or SqlRecordSource(db)

    def _ensure_category_exists(self, category_id: str) -> None:
        if not isinstance(self.record_source.find_category(category_id), Found):
            raise NotFoundError(f"Category with ID {category_id} not found")

    def get_expenses(
        self,
        filters: ExpenseFilters,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Expense], Pagination]:
        expenses, total = self.record_source.find_expenses(filters, page, limit)
        pagination = Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0
        )
        return expenses, pagination

    def get_expense(self, expense_id: str) -> Expense:
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError(f"Expense with ID {expense_id} not found")
        return expense

    def create_expense(self, expense_create: ExpenseCreate) -> Expense:
        self._ensure_category_exists(expense_create.category)

        data = expense_create.dict()
        data["payment_method"] = expense_create.payment_method.value
        expense = Expense(**data)
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)

        audit("expense.created", entity_id=expense.id, amount=expense.amount, date=expense.date)
        return expense

    def update_expense(self, expense_id: str, expense_update: ExpenseUpdate) -> Expense:
        expense = self.get_expense(expense_id)

        update_data = expense_update.dict(exclude_unset=True)
        if update_data.get("category") and update_data["category"] != expense.category:
            self._ensure_category_exists(update_data["category"])
        if update_data.get("payment_method") is not None:
            update_data["payment_method"] = expense_update.payment_method.value

        for field, value in update_data.items():
            if value is not None:
                setattr(expense, field, value)

        self.db.commit()
        self.db.refresh(expense)

        audit("expense.updated", entity_id=expense.id, fields=sorted(update_data))
        return expense

    def delete_expense(self, expense_id: str) -> None:
        expense = self.get_expense(expense_id)
        self.db.delete(expense)
        self.db.commit()
        audit("expense.deleted", entity_id=expense_id)

    def get_monthly_summary(self, month: str) -> List[CategoryTotal]:
        """Category totals for the month, largest first"""
        rows = self.db.query(
            Expense.category,
            func.sum(Expense.amount).label("total")
        ).filter(
            Expense.date >= month_start(month),
            Expense.date <= month_end(month)
        ).group_by(Expense.category).order_by(func.sum(Expense.amount).desc(), Expense.category).all()

        return [CategoryTotal(category=row.category, total=row.total) for row in rows]
