"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .auth.router import router as auth_router
from .users.router import router as users_router
from .doctors.router import router as doctors_router
from .database import Base, SessionLocal, engine, get_db
from .config import get_settings
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.bootstrap import bootstrap_admin_if_needed

# Import models so their tables are registered on Base.metadata
from .auth import models as _auth_models  # noqa: F401
from .doctors import models as _doctor_models  # noqa: F401

API_VERSION = "1.0.0"

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Hospital Staff Administration API...")

    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with the built-in fallback secret")

    # Create database tables if they don't exist
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        bootstrap_admin_if_needed(db, settings)
    except SQLAlchemyError as e:
        logger.error(f"Bootstrap process failed: {str(e)}")
    finally:
        db.close()

    yield

    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="Hospital Staff Administration API",
    description="Staff authentication and doctor/user record management",
    version=API_VERSION,
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(doctors_router, prefix="/doctors", tags=["Doctors"])
app.include_router(users_router, prefix="/users", tags=["Users"])


# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to Hospital Staff Administration API", "version": API_VERSION}


# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {str(e)}")
        database = "unavailable"
    return {"status": "healthy", "database": database}
