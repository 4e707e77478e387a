# ================================
# MAIN APPLICATION (main.py)
# ================================

from datetime import datetime, timezone
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy import text

# Core imports
from societyhub.config import settings
from societyhub.core.database import engine, get_db_session
from societyhub.core.exceptions import AppException
from societyhub.core.middleware import (
    DatabaseSessionMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware
)

# API Routes
from societyhub.api import api_router, API_VERSION, API_TITLE, API_DESCRIPTION

import logging
import uvicorn

# ================================
# LOGGING CONFIGURATION
# ================================

logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ================================
# APPLICATION LIFECYCLE
# ================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""

    # Startup
    logger.info(f"Starting {settings.APP_NAME}")
    await startup_tasks()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")
    engine.dispose()
    logger.info("Application shutdown complete")

async def startup_tasks():
    """Tasks to run on application startup"""
    await initialize_database()
    await create_initial_admin()

async def initialize_database():
    """Check the database connection and run migrations"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        logger.info("Database connection established")

        if settings.RUN_MIGRATIONS:
            await run_database_migrations()

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

async def run_database_migrations():
    """Run Alembic database migrations"""
    try:
        from alembic.config import Config
        from alembic import command

        alembic_cfg = Config("alembic.ini")
        alembic_cfg.attributes["configure_logger"] = False
        command.upgrade(alembic_cfg, "head")

        logger.info("Database migrations completed")

    except Exception as e:
        logger.error(f"Database migration failed: {e}")
        raise

async def create_initial_admin():
    """Create the first admin account if configured"""

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("No initial admin configuration found, skipping creation")
        return

    try:
        from societyhub.models.user import User, UserRole
        from societyhub.core.security import get_password_hash

        with get_db_session() as db:
            email = settings.ADMIN_EMAIL.strip().lower()
            existing_admin = db.query(User).filter(User.email == email).first()

            if existing_admin:
                logger.info("Initial admin already exists")
                return

            admin = User(
                name=settings.ADMIN_NAME,
                email=email,
                password_hash=get_password_hash(settings.ADMIN_PASSWORD),
                role=UserRole.ADMIN.value,
                permissions=[],
                is_active=True
            )

            db.add(admin)

            logger.info(f"Initial admin created: {email}")

    except Exception as e:
        logger.error(f"Initial admin creation failed: {e}")
        # Don't raise - application should continue even if admin creation fails

# ================================
# FASTAPI APPLICATION
# ================================

app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description=API_DESCRIPTION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# ================================
# MIDDLEWARE CONFIGURATION
# ================================

# Security Headers
app.add_middleware(SecurityHeadersMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time", "Content-Disposition"]
)

# Request / Response logging
app.add_middleware(RequestLoggingMiddleware)

# Database session + request ID (outermost)
app.add_middleware(DatabaseSessionMiddleware)

# ================================
# EXCEPTION HANDLERS
# ================================

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handler for application-specific exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": exc.error_code,
            "request_id": getattr(request.state, "request_id", None)
        }
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handler for standard HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "request_id": getattr(request.state, "request_id", None)
        },
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error" if not settings.DEBUG else str(exc),
            "error_code": "INTERNAL_ERROR",
            "request_id": getattr(request.state, "request_id", None)
        }
    )

# ================================
# HEALTH CHECK ENDPOINTS
# ================================

def _database_reachable() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database check failed: {e}")
        return False

@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": API_VERSION
    }

@app.get("/health/detailed", tags=["Health"])
async def detailed_health_check():
    """Detailed health check with dependencies"""
    database_ok = _database_reachable()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": settings.APP_NAME,
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": "healthy" if database_ok else "unhealthy"
        }
    }

@app.get("/ready", tags=["Health"])
async def readiness_check():
    """Readiness check"""
    if not _database_reachable():
        raise HTTPException(status_code=503, detail="Service not ready")
    return {"status": "ready"}

@app.get("/", tags=["Info"])
async def root():
    """API Information"""
    return {
        "name": settings.APP_NAME,
        "version": API_VERSION,
        "endpoints": {
            "users": "/api/users",
            "complaints": "/api/complaints",
            "amenities": "/api/amenities",
            "billing": "/api/billing",
            "documents": "/api/documents",
            "analytics": "/api/analytics"
        },
        "health": "/health"
    }

# ================================
# API ROUTES
# ================================

app.include_router(api_router)

# ================================
# DEVELOPMENT SERVER
# ================================

if __name__ == "__main__":
    uvicorn.run(
        "societyhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
