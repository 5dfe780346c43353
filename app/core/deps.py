from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.analytics_service import AnalyticsService
from app.services.budget_service import BudgetService
from app.services.expense_service import ExpenseService
from app.services.export_service import ExportService
from app.services.record_source import SqlRecordSource


def get_record_source(db: Session = Depends(get_db)) -> SqlRecordSource:
    """Record source bound to the request's session"""
    return SqlRecordSource(db)


def get_analytics_service(
    record_source: SqlRecordSource = Depends(get_record_source)
) -> AnalyticsService:
    return AnalyticsService(record_source)


def get_budget_service(
    db: Session = Depends(get_db),
    record_source: SqlRecordSource = Depends(get_record_source)
) -> BudgetService:
    return BudgetService(db, record_source)


def get_expense_service(
    db: Session = Depends(get_db),
    record_source: SqlRecordSource = Depends(get_record_source)
) -> ExpenseService:
    return ExpenseService(db, record_source)


def get_export_service(
    record_source: SqlRecordSource = Depends(get_record_source)
) -> ExportService:
    return ExportService(record_source)
