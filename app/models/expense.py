from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Numeric
from sqlalchemy.sql import func
import uuid

from app.core.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)  # Category id
    description = Column(String(200), nullable=False)
    payment_method = Column(String(20), nullable=False)  # cash, credit, debit, transfer
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
