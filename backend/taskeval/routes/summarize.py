"""
Task Evaluator Backend — Summarize Route Handler
=================================================

What:  POST /api/summarize: summarize text and store the result.
How:   Validates `text`, then delegates to SummaryService, which calls Gemini
       and inserts one `Summary` row.

Responses:
    200 {"id": 1, "inputText": "...", "outputText": "...", "createdAt": "..."}
    400 {"error": "Text is required"}   (no AI call, no database write)
    500 {"error": "Something went wrong"}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskeval.database import get_db_session
from taskeval.dependencies import get_summary_service
from taskeval.exceptions import ValidationError
from taskeval.schemas.common import ErrorResponse
from taskeval.schemas.summary import SummarizeRequest, SummaryResponse
from taskeval.services.summary_service import SummaryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summarize"])


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    responses={
        200: {"description": "Stored summary", "model": SummaryResponse},
        400: {"description": "Text is required", "model": ErrorResponse},
        500: {"description": "Summarization failed", "model": ErrorResponse},
    },
    summary="Summarize text and store the result",
)
async def summarize(
    payload: Optional[SummarizeRequest] = None,
    service: SummaryService = Depends(get_summary_service),
    db: AsyncSession = Depends(get_db_session),
) -> SummaryResponse:
    if payload is None or not payload.text:
        raise ValidationError(message="Text is required", field="text")

    return await service.summarize(db=db, text=payload.text)
