"""
Task Evaluator Backend — Dependency Wiring
===========================================

What:  FastAPI dependencies that construct services and their collaborators.
How:   Upstream clients are built once per process (lru_cache) from settings;
       services are cheap and built per request around those clients.
       Tests replace any of these through `app.dependency_overrides`.

    get_text_generator ──┬──▶ get_analysis_service
                         └──▶ get_summary_service
    get_ocr_service
"""

from functools import lru_cache

from fastapi import Depends

from taskeval.config import settings
from taskeval.services.analysis_service import AnalysisService
from taskeval.services.gemini_service import GeminiService
from taskeval.services.llm_base import TextGenerator
from taskeval.services.ocr_service import OCRService
from taskeval.services.summary_service import SummaryService


@lru_cache
def get_text_generator() -> TextGenerator:
    return GeminiService(api_key=settings.gemini_api_key, model_name=settings.gemini_model)


@lru_cache
def get_ocr_service() -> OCRService:
    return OCRService(
        language=settings.ocr_language,
        tesseract_cmd=settings.tesseract_cmd,
        max_image_size=settings.max_image_size,
    )


def get_analysis_service(
    generator: TextGenerator = Depends(get_text_generator),
) -> AnalysisService:
    return AnalysisService(generator)


def get_summary_service(
    generator: TextGenerator = Depends(get_text_generator),
) -> SummaryService:
    return SummaryService(generator)
