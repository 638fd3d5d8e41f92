"""
Health and readiness endpoints
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends

from backend.app.core.config import settings
from backend.app.core.dependencies import get_executor
from backend.app.schemas.schemas import HealthResponse, ReadinessResponse
from backend.app.services.agent_bridge import AgentExecutor

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Check if the API is running"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.VERSION,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(executor: AgentExecutor = Depends(get_executor)):
    """Check if the API is ready to serve requests"""
    agent_available = await executor.check_available()
    if not agent_available:
        logger.warning(f"Readiness degraded: {executor.name} agent executor unavailable")

    return ReadinessResponse(
        status="ready" if agent_available else "degraded",
        timestamp=datetime.now(timezone.utc),
        checks={"agent": "available" if agent_available else "unavailable"},
    )
