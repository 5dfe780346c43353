from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings


def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    # Expenses reference categories; let SQLite enforce it
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.close()


def create_db_engine(database_url: str, **kwargs):
    """Build an engine with the per-dialect options this app relies on."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)  # Allow SQLite to work with FastAPI
        db_engine = create_engine(database_url, connect_args=connect_args, **kwargs)
        event.listen(db_engine, "connect", _set_sqlite_pragma)
        return db_engine

    # Postgres or others
    return create_engine(database_url, pool_pre_ping=True, **kwargs)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
