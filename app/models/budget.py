from sqlalchemy import Column, String, DateTime, Numeric, JSON
from sqlalchemy.sql import func
import uuid

from app.core.database import Base


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    month = Column(String(7), nullable=False, unique=True, index=True)  # YYYY-MM
    total_budget = Column(Numeric(10, 2), nullable=False, default=0)
    # category id -> cap; insertion order is the order budget status reports
    category_budgets = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
