from sqlalchemy.orm import Session
import logging

from app.models.category import Category
from app.core.seed_data import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


class SeedingService:
    """
    Idempotent data seeding utilities.
    Safe to call on startup; re-runnable without duplicates.
    """

    @staticmethod
    def seed_default_categories(db: Session) -> int:
        """Insert the default categories that are missing. Returns number inserted."""
        existing_ids = {row.id for row in db.query(Category.id).all()}
        existing_names = {row.name.lower() for row in db.query(Category.name).all()}

        inserted = 0
        for data in DEFAULT_CATEGORIES:
            if data["id"] in existing_ids or data["name"].lower() in existing_names:
                continue
            db.add(Category(
                id=data["id"],
                name=data["name"],
                color=data["color"],
                is_default=True
            ))
            inserted += 1

        if inserted:
            db.commit()
            logger.info(f"Seeded {inserted} default categories")
        return inserted
