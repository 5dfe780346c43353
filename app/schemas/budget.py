from pydantic import BaseModel, Field, condecimal, field_validator
from typing import Optional, Dict, List
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.core.exceptions import InvalidArgumentError
from app.utils.months import MONTH_KEY_PATTERN, parse_month


class BudgetBase(BaseModel):
    month: str = Field(..., pattern=MONTH_KEY_PATTERN)
    total_budget: Decimal = Field(..., ge=0, lt=10000000, decimal_places=2)
    category_budgets: Dict[str, condecimal(ge=0, lt=10000000)] = Field(default_factory=dict)  # category id -> cap

    @field_validator("month")
    @classmethod
    def month_must_exist(cls, value: str) -> str:
        try:
            parse_month(value)
        except InvalidArgumentError as e:
            raise ValueError(e.message)
        return value


class BudgetCreate(BudgetBase):
    pass


class Budget(BudgetBase):
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BudgetRecord(BaseModel):
    """Budget definition as the budget status evaluator reads it"""
    id: str
    month: str
    total_budget: Decimal
    category_budgets: Dict[str, Decimal]

    class Config:
        from_attributes = True
        frozen = True


class BudgetStatusLevel(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    EXCEEDED = "exceeded"


class CategoryBudgetStatus(BaseModel):
    category_id: str
    category_name: str
    budgeted: float
    spent: float
    remaining: float
    percentage: int
    status: BudgetStatusLevel


class BudgetStatus(BaseModel):
    month: str
    total_budget: float
    total_spent: float
    total_remaining: float
    percentage_used: int
    categories: List[CategoryBudgetStatus]
