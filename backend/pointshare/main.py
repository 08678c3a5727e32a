"""Pointshare - peer-to-peer dining points API."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pointshare.api.errors import setup_error_handlers
from pointshare.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create tables
    from pointshare.database import Base, engine, ensure_sqlite_directory

    # Import all models so they're registered with Base
    from pointshare import models  # noqa: F401

    ensure_sqlite_directory(settings.database_url)
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.app_name} started")

    yield


app = FastAPI(
    title=settings.app_name,
    description="Ask for dining points and give them to others",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


# Import and include routers
from pointshare.api import auth, locations, notifications, points, requests  # noqa: E402

app.include_router(auth.router, prefix="/api")
app.include_router(requests.router, prefix="/api")
app.include_router(points.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")
app.include_router(locations.router, prefix="/api")
