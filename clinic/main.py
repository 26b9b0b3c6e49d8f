"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from . import __version__
from .config import settings
from .database import Base, engine, get_db
from . import models  # noqa: F401  registers every table on Base.metadata
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .appointments.router import router as appointments_router
from .patients.router import router as patients_router
from .doctors.router import router as doctors_router
from .ambulances.router import router as ambulances_router
from .medical_records.router import prescriptions_router, tests_router
from .ratings.router import router as ratings_router
from .bookings.router import router as bookings_router

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

logger.info(f"Starting {settings.app_name}...")

# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Appointment lifecycle, referential integrity and scheduling API for a clinic",
    version=__version__
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
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
prefix = settings.api_prefix
app.include_router(appointments_router, prefix=f"{prefix}/appointments", tags=["Appointments"])
app.include_router(patients_router, prefix=f"{prefix}/patients", tags=["Patients"])
app.include_router(doctors_router, prefix=f"{prefix}/doctors", tags=["Doctors"])
app.include_router(ambulances_router, prefix=f"{prefix}/ambulances", tags=["Ambulances"])
app.include_router(prescriptions_router, prefix=f"{prefix}/prescriptions", tags=["Prescriptions"])
app.include_router(tests_router, prefix=f"{prefix}/tests", tags=["Medical Tests"])
app.include_router(ratings_router, prefix=f"{prefix}/ratings", tags=["Ratings"])
app.include_router(bookings_router, prefix=f"{prefix}/bookings", tags=["Bookings"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": f"Welcome to {settings.app_name}", "version": __version__}

# Health check endpoint
@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status and whether the database answered
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the database: {e}")
        database = "unavailable"
    return {"status": "healthy" if database == "connected" else "degraded", "database": database}
