from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from typing import List

from app.core.deps import get_budget_service
from app.core.exceptions import NotFoundError, ValidationError
from app.core.types import Found
from app.schemas.budget import Budget as BudgetSchema, BudgetCreate, BudgetStatus
from app.services.budget_service import BudgetService
from app.utils.months import MONTH_KEY_PATTERN

router = APIRouter()


@router.get("/range", response_model=List[BudgetSchema])
async def get_budgets_by_month_range(
    start_month: str = Query(..., pattern=MONTH_KEY_PATTERN),
    end_month: str = Query(..., pattern=MONTH_KEY_PATTERN),
    service: BudgetService = Depends(get_budget_service)
):
    """Get budgets for a range of months"""
    try:
        return service.get_budgets_by_month_range(start_month, end_month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{month}", response_model=BudgetSchema)
async def get_budget(
    month: str = Path(..., pattern=MONTH_KEY_PATTERN),
    service: BudgetService = Depends(get_budget_service)
):
    """Get the budget for a month; an empty budget when none is stored"""
    try:
        lookup = service.get_budget_by_month(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if isinstance(lookup, Found):
        return lookup.value
    return BudgetSchema(month=month, total_budget=0, category_budgets={})


@router.post("/", response_model=BudgetSchema, status_code=status.HTTP_201_CREATED)
async def create_or_update_budget(
    budget_create: BudgetCreate,
    service: BudgetService = Depends(get_budget_service)
):
    """Create or replace the budget for a month"""
    try:
        return service.create_or_update_budget(budget_create)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: str,
    service: BudgetService = Depends(get_budget_service)
):
    """Delete a budget"""
    try:
        service.delete_budget(budget_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{month}/status", response_model=BudgetStatus)
async def get_budget_status(
    month: str = Path(..., pattern=MONTH_KEY_PATTERN),
    service: BudgetService = Depends(get_budget_service)
):
    """Budget consumption for the month, overall and per category"""
    try:
        return service.get_budget_status(month)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
