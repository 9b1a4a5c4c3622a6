"""
Task Evaluator Backend — Analyze Route Handler
===============================================

What:  POST /api/analyze: evaluate prose or source code with Gemini.
How:   Hands the body to AnalysisService and returns its AnalysisResult.

Request Flow:
    1. Client sends {"text": "...", "options": {...}} (options optional)
    2. AnalysisService detects code vs prose, builds the prompt, calls Gemini
    3. The parsed AnalysisResult is returned; absent optional fields omitted
    4. Any failure → 500 {"error": "Failed to analyze text: <cause>"}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from taskeval.dependencies import get_analysis_service
from taskeval.schemas.analysis import AnalysisResult, AnalyzeRequest
from taskeval.schemas.common import ErrorResponse
from taskeval.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analyze"])


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Analysis result", "model": AnalysisResult},
        500: {"description": "Analysis failed", "model": ErrorResponse},
    },
    summary="Analyze text or code",
    description=(
        "Scores a piece of text or source code and returns feedback, strengths and "
        "improvements. Code input additionally yields corrected/optimized code and "
        "a list of issues, depending on options.analysisType."
    ),
)
async def analyze(
    payload: Optional[AnalyzeRequest] = None,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResult:
    # A request without a body counts as missing text
    payload = payload or AnalyzeRequest()
    logger.info(
        "Received analyze request: %d chars, criteria=%s",
        len(payload.text or ""),
        payload.options.criteria if payload.options else None,
    )
    return await service.analyze(payload.text, payload.options)
