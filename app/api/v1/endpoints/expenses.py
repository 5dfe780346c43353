from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from typing import List, Optional
from datetime import date
from decimal import Decimal

from app.core.config import settings
from app.core.deps import get_expense_service
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.expense import (
    CategoryTotal,
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseUpdate,
)
from app.services.expense_service import ExpenseService
from app.services.record_source import ExpenseFilters
from app.utils.months import MONTH_KEY_PATTERN

router = APIRouter()


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@router.get("/", response_model=ExpenseListResponse)
async def get_expenses(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    categories: Optional[str] = Query(None, description="Comma separated category ids"),
    min_amount: Optional[Decimal] = Query(None, ge=0),
    max_amount: Optional[Decimal] = Query(None, ge=0),
    payment_methods: Optional[str] = Query(None, description="Comma separated payment methods"),
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: ExpenseService = Depends(get_expense_service)
):
    """List expenses, newest first, with optional filters"""
    filters = ExpenseFilters(
        start_date=start_date,
        end_date=end_date,
        categories=_split_csv(categories),
        min_amount=min_amount,
        max_amount=max_amount,
        payment_methods=_split_csv(payment_methods),
        search_term=search
    )
    expenses, pagination = service.get_expenses(filters, page, limit)
    return ExpenseListResponse(
        data=[ExpenseResponse.model_validate(expense) for expense in expenses],
        pagination=pagination
    )


@router.get("/summary/{month}", response_model=List[CategoryTotal])
async def get_monthly_summary(
    month: str = Path(..., pattern=MONTH_KEY_PATTERN),
    service: ExpenseService = Depends(get_expense_service)
):
    """Total spent per category in a month"""
    try:
        return service.get_monthly_summary(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str,
    service: ExpenseService = Depends(get_expense_service)
):
    """Get a specific expense"""
    try:
        return service.get_expense(expense_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_create: ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service)
):
    """Record a new expense"""
    try:
        return service.create_expense(expense_create)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    expense_update: ExpenseUpdate,
    service: ExpenseService = Depends(get_expense_service)
):
    """Update an expense"""
    try:
        return service.update_expense(expense_id, expense_update)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str,
    service: ExpenseService = Depends(get_expense_service)
):
    """Delete an expense"""
    try:
        service.delete_expense(expense_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
