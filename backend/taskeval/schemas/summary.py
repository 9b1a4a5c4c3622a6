"""
Task Evaluator Backend — Summary Schemas
=========================================

What:  Request/response models for POST /api/summarize.
How:   SummaryResponse reads straight from the ORM row (from_attributes) and
       serializes with camelCase keys: {id, inputText, outputText, createdAt}.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SummarizeRequest(BaseModel):
    """
    Body of POST /api/summarize.

    `text` is optional here so the route can answer a missing value with the
    400 "Text is required" error rather than FastAPI's generic 422.
    """
    text: Optional[str] = Field(default=None, description="Text to summarize")


class SummaryResponse(BaseModel):
    """A stored summary record."""
    id: int = Field(description="Auto-generated record id")
    input_text: str = Field(description="Submitted text")
    output_text: str = Field(description="Generated summary")
    created_at: datetime = Field(description="When the record was stored")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
