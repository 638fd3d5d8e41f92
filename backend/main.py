#!/usr/bin/env python3
"""
Main FastAPI application for WXOrca
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from backend.app.core.config import settings
from backend.app.api import agents, health
from backend.app.db.database import init_db
from backend.app.services.agent_bridge import create_executor
from backend.app.services.dispatcher import AgentDispatcher
from backend.app.services.session_store import SessionStore
from sqlalchemy.exc import SQLAlchemyError

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    """
    # Startup
    logger.info("Starting up WXOrca API...")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[-1]}")  # Log DB without password

    try:
        init_db()
        logger.info("Database tables ready")
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")

    sessions = SessionStore()
    executor = create_executor(settings)
    app.state.dispatcher = AgentDispatcher(sessions, executor)
    logger.info(f"Agent executor: {executor.name}")

    yield

    # Shutdown
    logger.info(f"Shutting down WXOrca API, dropping {len(sessions)} sessions...")
    sessions.clear()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="API for WXOrca - AI-powered guide for IBM WatsonX Orchestrate",
    version=settings.VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(agents.router, prefix="/api/agents", tags=["agents"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to WXOrca API",
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
