"""
Task Evaluator Backend — Analyze Image Route Handler
=====================================================

What:  POST /api/analyze-image: OCR a screenshot and return its text.
How:   Reads the multipart `image` field into memory and hands the bytes
       to OCRService.

Responses:
    200 {"feedback": "Screenshot analysis complete.", "extractedText": "..."}
    400 {"error": "No image uploaded"}      (field absent or empty)
    500 {"error": "Failed to analyze image"} (decode or tesseract failure)

The extracted text is not re-analyzed; clients call /api/analyze with it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from taskeval.dependencies import get_ocr_service
from taskeval.exceptions import ValidationError
from taskeval.schemas.analysis import ImageAnalysisResponse
from taskeval.schemas.common import ErrorResponse
from taskeval.services.ocr_service import OCRService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analyze"])

SCREENSHOT_FEEDBACK = "Screenshot analysis complete."


@router.post(
    "/analyze-image",
    response_model=ImageAnalysisResponse,
    responses={
        200: {"description": "Text extracted", "model": ImageAnalysisResponse},
        400: {"description": "No image uploaded", "model": ErrorResponse},
        500: {"description": "OCR failed", "model": ErrorResponse},
    },
    summary="Extract text from a screenshot",
)
async def analyze_image(
    image: Optional[UploadFile] = File(default=None, description="Screenshot to read"),
    ocr: OCRService = Depends(get_ocr_service),
) -> ImageAnalysisResponse:
    if image is None:
        raise ValidationError(message="No image uploaded", field="image")

    try:
        content = await image.read()
    finally:
        await image.close()

    logger.info(
        "Received image: filename=%s, size=%d bytes",
        image.filename or "unknown",
        len(content),
    )

    ocr.validate_image(content)
    text = await ocr.extract_text(content)

    return ImageAnalysisResponse(feedback=SCREENSHOT_FEEDBACK, extracted_text=text)
