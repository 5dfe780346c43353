# Import all models here so Base.metadata knows every table
from app.models.category import Category
from app.models.expense import Expense
from app.models.budget import Budget

__all__ = [
    "Category",
    "Expense",
    "Budget",
]
