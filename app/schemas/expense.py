from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
import datetime as dt
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT = "credit"
    DEBIT = "debit"
    TRANSFER = "transfer"


def _two_decimals(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class ExpenseBase(BaseModel):
    date: dt.date
    amount: Decimal = Field(..., gt=0, lt=1000000)
    category: str = Field(..., min_length=1, max_length=50)  # Category id
    description: str = Field(..., min_length=1, max_length=200)
    payment_method: PaymentMethod

    @field_validator("amount")
    @classmethod
    def round_amount(cls, value: Decimal) -> Decimal:
        return _two_decimals(value)


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    date: Optional[dt.date] = None
    amount: Optional[Decimal] = Field(None, gt=0, lt=1000000)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    payment_method: Optional[PaymentMethod] = None

    @field_validator("amount")
    @classmethod
    def round_amount(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return _two_decimals(value) if value is not None else value


class ExpenseResponse(ExpenseBase):
    id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class ExpenseRecord(BaseModel):
    """Read-only expense fact handed to the analytics core"""
    id: str
    date: dt.date
    amount: Decimal
    category: str
    description: str = ""
    payment_method: str = PaymentMethod.CASH.value

    class Config:
        from_attributes = True
        frozen = True


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ExpenseListResponse(BaseModel):
    data: List[ExpenseResponse]
    pagination: Pagination


class CategoryTotal(BaseModel):
    category: str
    total: Decimal
