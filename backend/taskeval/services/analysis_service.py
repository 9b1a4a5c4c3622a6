"""
Task Evaluator Backend — Analysis Service
==========================================

What:  Produces an AnalysisResult for a piece of prose or source code.
How:   detect input type → merge defaults → build prompt → one generator
       call → parse the reply with the matching parser.
Who:   Called by POST /api/analyze through taskeval.dependencies.

Orchestration Flow:
    ┌──────────┐   ┌───────────┐   ┌──────────┐   ┌───────────┐   ┌────────┐
    │  Input   │──▶│  Detector │──▶│  Prompt  │──▶│ Generator │──▶│ Parser │
    └──────────┘   └───────────┘   └──────────┘   └───────────┘   └────────┘

Failure handling:
    Empty input and generator failures are re-raised as AnalysisError with
    "Failed to analyze text: <cause>". A malformed reply is not a failure:
    the parser degrades it into a fallback result.
"""

import logging
from typing import Optional

from taskeval.analysis.detector import detect_input_type
from taskeval.analysis.parser import parse_code_analysis, parse_text_analysis
from taskeval.analysis.prompts import (
    build_code_analysis_prompt,
    build_text_analysis_prompt,
)
from taskeval.exceptions import AnalysisError, TaskEvalError
from taskeval.schemas.analysis import AnalysisOptions, AnalysisResult
from taskeval.services.llm_base import TextGenerator

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Stateless analysis orchestrator.

    Args:
        generator: TextGenerator used for the single completion call.
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def analyze(
        self,
        text: Optional[str],
        options: Optional[AnalysisOptions] = None,
    ) -> AnalysisResult:
        """
        Evaluate `text` and return the parsed result.

        Mode selection:
            Code mode when the detector recognises code OR criteria == "code".
            The language hint is options.language, else the detected one.
            Criteria defaults to "code" in code mode and "general" otherwise.

        Raises:
            AnalysisError: Input is missing/blank, or the generator failed.
        """
        if text is None or not text.strip():
            raise AnalysisError(
                message="Failed to analyze text: Input text cannot be empty",
                context={"reason": "empty_input"},
            )

        options = options or AnalysisOptions()
        detection = detect_input_type(text)
        is_code = detection.is_code or options.criteria == "code"
        language = options.language or detection.language
        criteria = options.criteria or ("code" if is_code else "general")

        if is_code:
            prompt = build_code_analysis_prompt(
                text,
                options.max_score,
                options.focus_areas,
                language,
                options.analysis_type,
            )
        else:
            prompt = build_text_analysis_prompt(
                text,
                criteria,
                options.max_score,
                options.focus_areas,
            )

        logger.info(
            "Analyzing %d chars as %s (criteria=%s, language=%s, type=%s)",
            len(text),
            "code" if is_code else "text",
            criteria,
            language if is_code else "-",
            options.analysis_type if is_code else "-",
        )

        try:
            reply = await self.generator.generate(prompt)
        except Exception as e:
            cause = e.message if isinstance(e, TaskEvalError) else (str(e) or "Unknown error")
            logger.error("Analysis failed: %s", cause)
            raise AnalysisError(
                message=f"Failed to analyze text: {cause}",
                context={"error_type": type(e).__name__},
            ) from e

        if is_code:
            return parse_code_analysis(reply, options.max_score)
        return parse_text_analysis(reply, options.max_score)

    # ── Convenience entry points ──────────────────────────────────────────

    async def analyze_writing(self, text: str) -> AnalysisResult:
        return await self.analyze(text, AnalysisOptions(criteria="writing"))

    async def analyze_academic_work(self, text: str) -> AnalysisResult:
        return await self.analyze(text, AnalysisOptions(criteria="academic"))

    async def analyze_business_document(self, text: str) -> AnalysisResult:
        return await self.analyze(text, AnalysisOptions(criteria="business"))

    async def analyze_creative_work(self, text: str) -> AnalysisResult:
        return await self.analyze(text, AnalysisOptions(criteria="creative"))

    async def analyze_code(self, code: str, language: Optional[str] = None) -> AnalysisResult:
        """Issue analysis only; no corrected or optimized code is requested."""
        return await self._code(code, language, "analyze")

    async def correct_code(self, code: str, language: Optional[str] = None) -> AnalysisResult:
        return await self._code(code, language, "correct")

    async def optimize_code(self, code: str, language: Optional[str] = None) -> AnalysisResult:
        return await self._code(code, language, "optimize")

    async def full_code_analysis(self, code: str, language: Optional[str] = None) -> AnalysisResult:
        return await self._code(code, language, "all")

    async def _code(self, code: str, language: Optional[str], analysis_type: str) -> AnalysisResult:
        options = AnalysisOptions(criteria="code", language=language, analysis_type=analysis_type)
        return await self.analyze(code, options)
