from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from dotenv import load_dotenv
import logging
import time

from app.core.config import settings
from app.api.v1.api import api_router
from app.core.database import Base, SessionLocal, engine
from app.services.seeding_service import SeedingService
from app import models  # noqa: F401  register tables on Base.metadata

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

# Configure audit logger (JSON lines)
audit_logger = logging.getLogger("audit")
if not audit_logger.handlers:
    handler = logging.StreamHandler()
    # Keep raw JSON line without extra prefixes
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)
audit_logger.setLevel(logging.INFO)
# Do not propagate to root to avoid duplication
audit_logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Schema creation and idempotent seeding on startup ---
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEFAULT_CATEGORIES:
        db = SessionLocal()
        try:
            added = SeedingService.seed_default_categories(db)
            logger.info(f"Seeding complete: default categories +{added}")
        finally:
            db.close()
    yield


api_description = """
## Monthly Expense Tracker

Record expenses, organise them by category, set monthly budgets and explore
where the money goes.

- **Expenses** - CRUD with date, amount, category, payment method and text filters
- **Categories** - default catalogue plus user-defined categories
- **Budgets** - overall and per-category caps per month, with consumption status
- **Analytics** - category breakdown, daily and monthly totals, month comparison, trend analysis
- **Export** - monthly CSV download
"""

app = FastAPI(
    title="Expense Tracker API",
    description=api_description,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# GZip compression for large JSON responses
app.add_middleware(GZipMiddleware, minimum_size=500)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "Expense Tracker API is running"}
