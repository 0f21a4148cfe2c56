"""AI Consultancy API - Main Application."""

import logging
from contextlib import asynccontextmanager

from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app import scheduler
from app.api.routes.auth import router as auth_router
from app.api.routes.notes import router as notes_router
from app.api.routes.projects import router as projects_router
from app.api.routes.search import router as search_router
from app.config import settings
from app.database import create_db_and_tables, engine
from app.services.embeddings import (
    init_embedding_client,
    is_embedding_client_ready,
    reset_embedding_client,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()

    # Fail at startup, not at the first search, if the provider is misconfigured
    init_embedding_client()

    jobstore = SQLAlchemyJobStore(url=settings.effective_jobstore_url)
    scheduler_instance = AsyncIOScheduler(jobstores={"default": jobstore})
    scheduler_instance.start()
    scheduler.set_scheduler(scheduler_instance)
    logger.info("Background job scheduler started")

    yield
    scheduler_instance.shutdown()
    scheduler.set_scheduler(None)
    reset_embedding_client()


app = FastAPI(
    title=settings.app_name,
    description="Backend for the AI consultancy site: projects, notes and semantic note search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(notes_router)
app.include_router(search_router)


@app.get("/health")
async def health_check() -> dict:
    """
    System health check.

    Returns status of the application and its dependencies. The embedding
    provider itself is not called.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_connected = True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        db_connected = False

    return {
        "status": "ok" if db_connected else "degraded",
        "db_connected": db_connected,
        "embedding_configured": is_embedding_client_ready(),
    }
