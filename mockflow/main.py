"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from mockflow.api import api_keys, auth, mockups, projects, public, shares, versions
from mockflow.config import get_settings
from mockflow.database import check_database, get_db, init_db

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables for local databases; deployed ones are migrated with Alembic."""
    if settings.create_tables_on_startup:
        init_db()
    logger.info(f"MockFlow API starting ({settings.environment})")
    yield


app = FastAPI(
    title="MockFlow API",
    description="Saved chat, AI and social mockups with sharing and version history",
    version="0.1.0",
    lifespan=lifespan,
)

if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-API-Key"],
    )

app.include_router(auth.router)
app.include_router(api_keys.router)
app.include_router(mockups.router)
app.include_router(shares.router)
app.include_router(versions.router)
app.include_router(projects.router)
app.include_router(public.router)


@app.get("/health")
def health_check(db: Annotated[Session, Depends(get_db)]):
    """Report service and database status."""
    database_ok = check_database(db)
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "environment": settings.environment,
    }
