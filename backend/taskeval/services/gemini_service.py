"""
Task Evaluator Backend — Google Gemini Service Implementation
==============================================================

What:  Concrete TextGenerator using the Google Gemini API.
How:   One `generate_content_async` call per request; latency and reply size
       are logged; SDK failures are translated into LLMServiceError.
Who:   Built once per process by taskeval.dependencies.get_text_generator and
       shared by AnalysisService and SummaryService.

Request model:
    Single round trip, no retries, no streaming, no caching. A hung upstream
    call hangs the request; timeouts are left to the SDK defaults.
"""

import asyncio
import logging
import time
import uuid

import google.generativeai as genai

from taskeval.exceptions import LLMServiceError
from taskeval.services.llm_base import TextGenerator

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "your_gemini_api_key_here"


class GeminiService(TextGenerator):
    """
    Google Gemini implementation of TextGenerator.

    Args:
        api_key:    Gemini API key. Empty or placeholder keys skip SDK
                    configuration so the app can still boot (calls will fail).
        model_name: Model identifier, e.g. "gemini-1.5-flash".
    """

    def __init__(self, api_key: str, model_name: str = "gemini-1.5-flash"):
        # The SDK keeps auth in module-level state
        if api_key and api_key != PLACEHOLDER_API_KEY:
            genai.configure(api_key=api_key)

        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)

        logger.info("GeminiService initialized with model=%s", model_name)

    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to Gemini and return the reply text.

        Flow:
            1. Call generate_content_async once
            2. Reject a missing response object
            3. Read response.text (raises ValueError when the reply was blocked)
            4. Log latency and size, return the text unmodified

        Raises:
            LLMServiceError: On any SDK error or when no response was received.
        """
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        logger.info(
            "[%s] Sending prompt to Gemini (%d chars, model=%s)",
            request_id,
            len(prompt),
            self.model_name,
        )

        try:
            response = await self.model.generate_content_async(prompt)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini API call failed after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                message=str(e) or "Gemini request failed",
                context={"request_id": request_id, "error_type": type(e).__name__},
            ) from e

        if response is None:
            logger.error("[%s] Gemini returned no response object", request_id)
            raise LLMServiceError(
                message="No response received from Gemini",
                context={"request_id": request_id},
            )

        try:
            text = response.text
        except ValueError as e:
            # Blocked prompts and empty candidate lists surface here
            logger.warning("[%s] Gemini response has no text: %s", request_id, str(e))
            raise LLMServiceError(
                message="Gemini returned a response without text",
                context={"request_id": request_id, "error": str(e)},
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "[%s] Gemini call completed in %.0fms, received %d chars",
            request_id,
            duration_ms,
            len(text or ""),
        )
        return text or ""

    async def health_check(self) -> bool:
        """
        Check if the Gemini API is reachable.

        How:     Lists available models (no token cost) in a worker thread.
        Returns: True if reachable and authenticated, False otherwise.
        """
        try:
            models = await asyncio.to_thread(lambda: list(genai.list_models()))
            target = f"models/{self.model_name}"
            if target not in [m.name for m in models]:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False
