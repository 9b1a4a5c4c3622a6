"""
Task Evaluator Backend — OCR Service
=====================================

What:  Extracts printed text from uploaded screenshots with Tesseract.
How:   Pillow decodes the raw bytes, pytesseract runs the tesseract binary
       with a fixed language model. The blocking call runs in a worker
       thread so the event loop keeps serving other requests.
Who:   Called by POST /api/analyze-image.

The extracted text is returned as-is; it is not fed back into analysis.
"""

import io
import logging
from typing import Optional

import pytesseract
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from taskeval.exceptions import OCRServiceError, ValidationError

logger = logging.getLogger(__name__)


class OCRService:
    """
    Tesseract-backed text extraction.

    Args:
        language:       Tesseract language model (e.g. "eng").
        tesseract_cmd:  Explicit path to the tesseract binary, if not on PATH.
        max_image_size: Upload size limit in bytes.
    """

    def __init__(
        self,
        language: str = "eng",
        tesseract_cmd: Optional[str] = None,
        max_image_size: int = 10_485_760,
    ):
        self.language = language
        self.max_image_size = max_image_size
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        logger.info("OCRService initialized with language=%s", language)

    def validate_image(self, content: bytes) -> None:
        """
        Reject uploads that cannot be an image worth reading.

        Raises:
            ValidationError: Empty upload ("No image uploaded") or over the size limit.
        """
        if not content:
            raise ValidationError(message="No image uploaded", field="image")
        if len(content) > self.max_image_size:
            max_mb = self.max_image_size / (1024 * 1024)
            raise ValidationError(
                message=f"Image exceeds maximum size of {max_mb:.0f}MB",
                field="image",
                context={"max_size_mb": max_mb, "actual_size": len(content)},
            )

    async def extract_text(self, content: bytes) -> str:
        """
        Run OCR over raw image bytes.

        Raises:
            OCRServiceError: The bytes are not a decodable image or tesseract failed.
        """
        try:
            text = await run_in_threadpool(self._recognize, content)
        except Exception as e:
            logger.error("OCR failed: %s", str(e), exc_info=True)
            raise OCRServiceError(
                context={"error_type": type(e).__name__, "size": len(content)},
            ) from e

        logger.info("OCR extracted %d chars from %d bytes", len(text), len(content))
        return text

    def _recognize(self, content: bytes) -> str:
        with Image.open(io.BytesIO(content)) as image:
            return pytesseract.image_to_string(image, lang=self.language)

    async def health_check(self) -> bool:
        """True when the tesseract binary can be executed."""
        try:
            await run_in_threadpool(pytesseract.get_tesseract_version)
            return True
        except Exception as e:
            logger.warning("Tesseract health check failed: %s", str(e))
            return False
