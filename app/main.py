# app/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import sys

from app.core.database import test_connection, init_db, AsyncSessionLocal
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.core.seeding_logic import seed_organization
from app.permissions.errors import ScopeResolutionError
from app.services.settings_service import get_system_settings

# Routers
from app.api.endpoints import (
    auth as auth_router,
    students as students_router,
    analytics as analytics_router,
    system_settings as settings_router,
    academic as academic_router,
    users as users_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level="DEBUG" if settings.ENV == "dev" else "INFO",
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV == "dev",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Student Scope Backend",
    version="1.0.0",
    description="Role-scoped access to student records and analytics.",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ------------------------------------------------------------
# SCOPE RESOLUTION FAILURES (fail closed)
# ------------------------------------------------------------
@app.exception_handler(ScopeResolutionError)
async def scope_resolution_error_handler(request: Request, exc: ScopeResolutionError):
    logger.error(f"Scope resolution failed on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Failed to determine access scope"},
    )


# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(auth_router.router)
app.include_router(students_router.router)
app.include_router(analytics_router.router)
app.include_router(settings_router.router)
app.include_router(academic_router.router)
app.include_router(users_router.router)


# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    logger.info("Starting Student Scope Backend...")

    try:
        await test_connection()
        await init_db()
        logger.success("Database tables ready.")
    except Exception:
        logger.exception("Startup aborted: database unavailable.")
        raise

    async with AsyncSessionLocal() as session:
        await get_system_settings(session)

        if settings.SEED_ORGANIZATION:
            await seed_organization(session)

    logger.success("Backend startup completed.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "Student Scope Backend",
        "version": app.version,
    }
