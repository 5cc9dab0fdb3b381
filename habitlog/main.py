import logging

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from habitlog.db.base import get_db
from habitlog.core.config import settings
from habitlog.core.logging import setup_logging
from habitlog.routers import habits as habits_router
from habitlog.routers import records as records_router
from habitlog.routers import targets as targets_router
from habitlog.routers import stats as stats_router
from habitlog.routers import export as export_router
from habitlog.routers import diary as diary_router
from habitlog.routers import investments as investments_router
from habitlog.routers import profile as profile_router
from habitlog.core.errors import (
    HabitLogException,
    habitlog_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Habit Tracker API",
    description=(
        "**Habit, monthly-target and investment tracking**\n\n"
        "Habits with reps / time / custom units, daily completions, monthly "
        "volume targets with a built-in progressive plan, derived statistics, "
        "a daily diary and investment goals.\n\n"
        f"Every endpoint except `/health` requires the `{settings.PRINCIPAL_HEADER}` "
        "header set by the identity layer.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(HabitLogException, habitlog_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(habits_router.router)
app.include_router(records_router.router)
app.include_router(targets_router.router)
app.include_router(stats_router.router)
app.include_router(export_router.router)
app.include_router(diary_router.router)
app.include_router(investments_router.router)
app.include_router(profile_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        logger.warning("Health check: database unreachable", exc_info=True)
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
