"""
Collexa - Main Application

FastAPI backend for the job, internship and course marketplace:
- MongoDB for every entity (users, postings, applications, leads, content)
- JWT authentication (HTTP-only cookie or bearer token)
- Resume uploads on local disk
- Password reset codes by email

Run: uvicorn collexa.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from collexa import __version__
from collexa.api.routes import api_router
from collexa.core.config import get_settings
from collexa.core.errors import register_error_handlers
from collexa.core.logging_config import setup_logging
from collexa.core.rate_limit import limiter
from collexa.schemas.schemas import ErrorResponse
from collexa.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Collexa API",
    description="""
    Marketplace backend connecting students with jobs, internships and courses.

    ## Features
    - **Authentication**: registration, login, admin login, password reset
    - **Postings**: jobs and internships, owned by the posting employer/company
    - **Applications**: apply with a resume, track status (admin moves status)
    - **Leads**: course enquiries and contact-us messages
    - **Content**: companies, blogs, campus and certificate courses
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Rate limiting (forgot password)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_error_handlers(app)

# CORS: the frontend sends the session cookie, so origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes; every error shares the same envelope
error_responses = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404)}
app.include_router(api_router, prefix="/api", responses=error_responses)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Collexa API", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
