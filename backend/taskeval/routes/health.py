"""
Task Evaluator Backend — Health Check Route
============================================

What:  GET /health for monitoring and load balancer probes.
How:   Probes the database (SELECT 1), Gemini (list models) and the
       tesseract binary, then aggregates:

    - healthy:   everything reachable
    - degraded:  Gemini or tesseract unreachable (some endpoints will fail)
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text

from taskeval import __version__
from taskeval.database import engine
from taskeval.dependencies import get_ocr_service, get_text_generator
from taskeval.schemas.common import HealthResponse
from taskeval.services.llm_base import TextGenerator
from taskeval.services.ocr_service import OCRService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    generator: TextGenerator = Depends(get_text_generator),
    ocr: OCRService = Depends(get_ocr_service),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    gemini_status = "available" if await generator.health_check() else "unavailable"
    ocr_status = "available" if await ocr.health_check() else "unavailable"

    if overall != "unhealthy" and "unavailable" in (gemini_status, ocr_status):
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        ocr=ocr_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
