from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List
import hashlib
import logging

from app.models.category import Category
from app.models.expense import Expense
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.core.exceptions import NotFoundError, ConflictError
from app.core.seed_data import OTHER_CATEGORY_ID
from app.utils.audit import audit

logger = logging.getLogger(__name__)


def _color_for_name(category_name: str) -> str:
    """Stable hex color derived from the category name"""
    digest = hashlib.sha256(category_name.strip().lower().encode()).hexdigest()
    return f"#{digest[:6].upper()}"


class CategoryService:

    @staticmethod
    def get_all_categories(db: Session) -> List[Category]:
        return db.query(Category).order_by(Category.name).all()

    @staticmethod
    def get_category(db: Session, category_id: str) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    @staticmethod
    def _ensure_name_available(db: Session, name: str) -> None:
        existing = db.query(Category).filter(func.lower(Category.name) == name.strip().lower()).first()
        if existing:
            raise ConflictError(f"Category with name '{name}' already exists")

    @staticmethod
    def create_category(db: Session, category_data: CategoryCreate) -> Category:
        """Create a user category; a color is generated when none is given"""
        name = category_data.name.strip()
        CategoryService._ensure_name_available(db, name)

        category = Category(
            name=name,
            color=category_data.color or _color_for_name(name),
            is_default=False
        )
        db.add(category)
        db.commit()
        db.refresh(category)
        audit("category.created", entity_id=category.id, name=category.name)
        return category

    @staticmethod
    def update_category(db: Session, category_id: str, category_data: CategoryUpdate) -> Category:
        category = CategoryService.get_category(db, category_id)

        update_data = category_data.dict(exclude_unset=True)
        new_name = update_data.get("name")
        if new_name and new_name.strip().lower() != category.name.lower():
            CategoryService._ensure_name_available(db, new_name)
            update_data["name"] = new_name.strip()

        for field, value in update_data.items():
            if value is not None:
                setattr(category, field, value)

        db.commit()
        db.refresh(category)
        audit("category.updated", entity_id=category.id, fields=sorted(update_data))
        return category

    @staticmethod
    def delete_category(db: Session, category_id: str) -> int:
        """Delete a user category, moving its expenses to "Other".

        Returns the number of expenses that were reassigned.
        """
        category = CategoryService.get_category(db, category_id)
        if category.is_default:
            raise ConflictError("Cannot delete a default category")

        fallback = db.query(Category).filter(Category.id == OTHER_CATEGORY_ID).first()
        if fallback is None:
            fallback = db.query(Category).filter(
                Category.name == "Other",
                Category.is_default.is_(True)
            ).first()
        if fallback is None:
            raise NotFoundError("Default 'Other' category not found")

        reassigned = db.query(Expense).filter(Expense.category == category.id).update(
            {Expense.category: fallback.id}, synchronize_session=False
        )
        db.delete(category)
        db.commit()

        logger.info(f"Deleted category {category_id}; reassigned {reassigned} expenses to {fallback.name}")
        audit("category.deleted", entity_id=category_id, reassigned=reassigned)
        return reassigned
