from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., pattern=r'^#[0-9A-Fa-f]{6}$')  # Hex color validation


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=r'^#[0-9A-Fa-f]{6}$')  # Generated from the name when omitted


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=r'^#[0-9A-Fa-f]{6}$')


class CategoryResponse(CategoryBase):
    id: str
    is_default: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryInfo(BaseModel):
    """Category metadata as the analytics core sees it"""
    id: str
    name: str
    color: str

    class Config:
        from_attributes = True
        frozen = True
