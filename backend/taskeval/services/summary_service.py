"""
Task Evaluator Backend — Summary Service
=========================================

What:  Summarizes text with the generator and stores the (input, summary) pair.
How:   One generator call with the fixed summary prompt, one INSERT into the
       `Summary` table. The row is flushed so the generated id and timestamp
       are available; the commit happens in get_db_session.
Who:   Called by POST /api/summarize.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from taskeval.analysis.prompts import build_summary_prompt
from taskeval.exceptions import SummaryError, TaskEvalError
from taskeval.models.summary import Summary
from taskeval.schemas.summary import SummaryResponse
from taskeval.services.llm_base import TextGenerator

logger = logging.getLogger(__name__)


class SummaryService:
    """Stateless summarize-and-persist workflow."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def summarize(self, db: AsyncSession, text: str) -> SummaryResponse:
        """
        Summarize `text` and persist the result.

        Returns:
            SummaryResponse with id, input, output and creation time.

        Raises:
            SummaryError: The generator or the database failed. The client sees
                only "Something went wrong"; the cause goes to the log.
        """
        try:
            output = await self.generator.generate(build_summary_prompt(text))

            summary = Summary(input_text=text, output_text=output)
            db.add(summary)
            await db.flush()
            logger.info("Summary %s stored (%d → %d chars)", summary.id, len(text), len(output))

            return SummaryResponse.model_validate(summary)

        except Exception as e:
            detail = e.message if isinstance(e, TaskEvalError) else str(e)
            logger.error("Summarize failed: %s", detail, exc_info=True)
            raise SummaryError(
                context={"error_type": type(e).__name__, "detail": detail},
            ) from e
