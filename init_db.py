#!/usr/bin/env python3
"""
Initialize database with tables and the default categories
"""
from app.core.database import Base, SessionLocal, engine
from app.services.seeding_service import SeedingService

# Import all models to ensure they're registered with Base
from app import models  # noqa: F401


def init_database():
    """Create every table and seed the default categories"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")

    session = SessionLocal()
    try:
        added = SeedingService.seed_default_categories(session)
        print(f"Default categories added: {added}")
    finally:
        session.close()


if __name__ == "__main__":
    init_database()
