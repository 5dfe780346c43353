import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.database import Base, create_db_engine, get_db
from app.core.types import ABSENT, Found
from app.main import app
from app.schemas.budget import BudgetRecord
from app.schemas.category import CategoryInfo
from app.schemas.expense import ExpenseRecord
from app.services.seeding_service import SeedingService
from app.utils.months import month_end, month_start


class InMemoryRecordSource:
    """Substitute record source holding plain lists"""

    def __init__(self, expenses=(), categories=(), budgets=()):
        self.expenses = list(expenses)
        self.categories = list(categories)
        self.budgets = {budget.month: budget for budget in budgets}

    def fetch_by_date_range(self, start_date, end_date):
        return [e for e in self.expenses if start_date <= e.date <= end_date]

    def fetch_by_month_range(self, start_month, end_month):
        return self.fetch_by_date_range(month_start(start_month), month_end(end_month))

    def fetch_by_month(self, month):
        return self.fetch_by_date_range(month_start(month), month_end(month))

    def list_categories(self):
        return list(self.categories)

    def find_category(self, category_id):
        for category in self.categories:
            if category.id == category_id:
                return Found(category)
        return ABSENT

    def find_budget_by_month(self, month):
        budget = self.budgets.get(month)
        return Found(budget) if budget else ABSENT


def make_expense(day: str, amount, category: str, description: str = "test expense") -> ExpenseRecord:
    return ExpenseRecord(
        id=str(uuid.uuid4()),
        date=date.fromisoformat(day),
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        payment_method="cash"
    )


def make_category(category_id: str, name: str, color: str = "#123456") -> CategoryInfo:
    return CategoryInfo(id=category_id, name=name, color=color)


def make_budget(month: str, total, caps: dict) -> BudgetRecord:
    return BudgetRecord(
        id=str(uuid.uuid4()),
        month=month,
        total_budget=Decimal(str(total)),
        category_budgets={key: Decimal(str(value)) for key, value in caps.items()}
    )


@pytest.fixture
def record_source_factory():
    return InMemoryRecordSource


@pytest.fixture
def expense_factory():
    return make_expense


@pytest.fixture
def category_factory():
    return make_category


@pytest.fixture
def budget_factory():
    return make_budget


@pytest.fixture
def db_session():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    SeedingService.seed_default_categories(session)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def api_app(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield app
    finally:
        app.dependency_overrides.clear()
