from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func
import uuid

from app.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False, unique=True)
    color = Column(String(7), nullable=False)  # Hex color code for UI
    is_default = Column(Boolean, nullable=False, default=False)  # Seeded categories cannot be deleted
    created_at = Column(DateTime(timezone=True), server_default=func.now())
