"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from api.dependencies import get_settings
from api.errors import register_error_handlers
from api.middleware.request_logging import log_requests
from api.routes import auth, health, profile
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.sql.connection import ensure_schema, get_engine
from utils.logging import setup_structured_logging

SERVICE_NAME = "Taxi Booking API"

setup_structured_logging(os.getenv("LOG_LEVEL", "INFO"), service=SERVICE_NAME)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the credential store."""
    settings = get_settings()

    if settings.storage_backend == "sql":
        if ensure_schema(get_engine(settings.database_url)):
            logger.info("Users table verified/created successfully")
        else:
            logger.warning("Failed to create users table")
    elif settings.storage_backend == "mongodb":
        client = get_mongodb_client(settings.mongo_url)
        if client and MongoUserRepository(client[settings.mongodb_database]).ensure_indexes():
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("MongoDB unavailable, skipping index creation")
    else:
        logger.warning("Using in-memory user store; accounts are lost on restart")

    yield  # App runs here


app = FastAPI(
    title=SERVICE_NAME,
    description="Authentication and profile API for the taxi booking app",
    version=VERSION,
    lifespan=lifespan,
)

# If CORS_ORIGINS="*": allow_credentials must be False (browsers don't support credentials with wildcard)
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5000))
    # Access logs come from api.access instead of uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
