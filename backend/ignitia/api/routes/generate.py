import logging
from typing import Any

from fastapi import APIRouter

from ignitia.agent.startup_agent import StartupAgent
from ignitia.core.errors import UpstreamError
from ignitia.schemas import GenerateRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate")
async def generate_startup(payload: GenerateRequest) -> Any:
    """
    Turn an idea into a startup profile and landing page. Nothing is saved;
    the client reviews the result and posts it to /generations.
    """
    agent = StartupAgent()
    try:
        return await agent.run(payload.idea)
    except UpstreamError as e:
        logger.error("Generation error: %s", e)
        raise UpstreamError(
            "Failed to generate startup details",
            status_code=e.upstream_status,
            body=e.body,
            details=e.details or e.message,
        ) from e
