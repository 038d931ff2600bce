"""FastAPI application entry point. Registers middleware, error handlers and API routers."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.exceptions import install_error_handlers
import app.models  # noqa: F401 - registers model metadata
from app.routers import admin_profiles, auth, directory, profiles, update_requests
from app.utils.schema_sync import sync_missing_schema_objects

logging.basicConfig(
    level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Member Directory Moderation Service",
    description="Profile approval, update review and audit timeline for the member directory",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Register all routers
app.include_router(auth.router)
app.include_router(profiles.router)
app.include_router(directory.router)
app.include_router(admin_profiles.router)
app.include_router(update_requests.router)


@app.on_event("startup")
def ensure_schema():
    # Create missing tables, then add columns/indexes introduced since the last deploy.
    Base.metadata.create_all(bind=engine)
    sync_missing_schema_objects(engine, Base.metadata)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Member Directory Moderation Service"}
