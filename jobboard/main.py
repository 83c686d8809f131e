"""
Job Board - Main Application

FastAPI backend with:
- SQLAlchemy (PostgreSQL, or SQLite for local runs and tests)
- JWT authentication with student, company and admin roles
- Local disk storage for resumes and profile pictures, served from /uploads

Run: uvicorn jobboard.main:app --reload
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from jobboard import __version__
from jobboard.api.routes import api_router
from jobboard.core.config import get_settings
from jobboard.core.errors import error_body, register_exception_handlers
from jobboard.core.logging import setup_logging
from jobboard.db.session import init_db, ping_database
from jobboard.schemas.schemas import Envelope, HealthResponse
from jobboard.utils.file_upload import ensure_upload_dirs

settings = get_settings()
setup_logging()
logger = logging.getLogger("jobboard.main")

# Create FastAPI app
app = FastAPI(
    title="Job Board",
    description="""
    Job board backend for students and companies.

    ## Features
    - **Authentication**: JWT-based auth for students, companies and admins
    - **Students**: Profile, skills, experiences, resume and picture uploads
    - **Companies**: Job listings and application management
    - **Jobs**: Search, filter, paginate and apply
    - **Admin**: System statistics and moderation
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# Include API routes
app.include_router(api_router, prefix="/api")

# Serve uploaded files
ensure_upload_dirs()
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup."""
    init_db()
    logger.info("Database initialized")


@app.get("/api/health", tags=["Health"], response_model=Envelope[HealthResponse])
async def health_check():
    """Liveness check against the database."""
    if not ping_database():
        return JSONResponse(
            status_code=503,
            content=error_body("Database unavailable", data={"database": "disconnected"}),
        )
    return Envelope(message="Service is healthy", data=HealthResponse(database="connected"))
