from fastapi import FastAPI, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from pymongo.collection import Collection
from datetime import datetime, timezone
import logging

from app.config import Config
from app.database import get_movie_collection, ping_database, close_client
from app.middleware.security import SecurityHeadersMiddleware
from app.models.indexes import create_performance_indexes
from app.routes import movies, uploads
from app.services.upload_service import ensure_upload_dir
from app.utils.exceptions import MovieNotFound, StoreFailure, InvalidUpload

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events

    Startup:
    - Create the upload directory
    - Ensure collection indexes

    Shutdown:
    - Close the MongoDB client
    """
    # Startup
    logger.info("=" * 60)
    logger.info("🚀 Movie Catalog API Starting...")
    logger.info(f"   Database: {Config.MONGODB_DB}.{Config.MOVIES_COLLECTION}")
    logger.info(f"   CORS Origin: {Config.ALLOWED_ORIGIN}")
    logger.info(f"   Upload dir: {Config.UPLOAD_DIR}")
    logger.info("=" * 60)

    ensure_upload_dir(Path(Config.UPLOAD_DIR))

    if Config.ENSURE_INDEXES_ON_STARTUP:
        result = create_performance_indexes(get_movie_collection())
        if result["errors"]:
            logger.error("Failed to ensure indexes; title lookups will scan the collection")

    yield

    # Shutdown
    logger.info("=" * 60)
    logger.info("🛑 Movie Catalog API Shutting Down...")
    close_client()
    logger.info("=" * 60)


app = FastAPI(
    title="Movie Catalog API",
    description="CRUD over a movie catalog with image uploads",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ============================================
# Middleware
# ============================================

# CORS - a single allowed browser origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[Config.ALLOWED_ORIGIN],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)

# ============================================
# Exception Handlers
# ============================================

@app.exception_handler(MovieNotFound)
async def movie_not_found_handler(request: Request, exc: MovieNotFound):
    return JSONResponse(status_code=404, content={"message": exc.message})


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    """
    Store and filesystem errors. Details were logged where they were raised;
    the client only sees the operation message.
    """
    return JSONResponse(
        status_code=500,
        content={"message": exc.message, "error": "Internal server error"}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bodies that cannot be cast to a movie, e.g. an object as title"""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request body", "error": problems}
    )


@app.exception_handler(InvalidUpload)
async def invalid_upload_handler(request: Request, exc: InvalidUpload):
    return JSONResponse(status_code=400, content={"message": exc.message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all handler, never leaks exception text"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"}
    )

# ============================================
# Routes
# ============================================

@app.get("/", tags=["Health"])
async def root():
    """Basic health check"""
    return {
        "message": "Movie Catalog API",
        "version": "1.0.0",
        "status": "healthy",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
def health_check(collection: Collection = Depends(get_movie_collection)):
    """Detailed health check for monitoring"""
    database_ok = ping_database(collection.database)
    return {
        "status": "healthy" if database_ok else "degraded",
        "api_version": "1.0.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "ok" if database_ok else "unavailable",
    }


app.include_router(movies.router)
app.include_router(uploads.router)

# Registered after the upload router so POST /uploads is not shadowed.
# The directory is created on startup.
app.mount(
    Config.UPLOAD_URL_PREFIX,
    StaticFiles(directory=Config.UPLOAD_DIR, check_dir=False),
    name="uploads"
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower()
    )
