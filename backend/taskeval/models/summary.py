"""
Task Evaluator Backend — Summary SQLAlchemy Model
==================================================

What:  ORM model for the `Summary` table.
How:   Inherits from the shared DeclarativeBase; alembic reads it for migrations.
Who:   Written by SummaryService on every POST /api/summarize call.

Table Design:
    - Table and column names keep their camelCase spelling ("inputText",
      "outputText", "createdAt") so the schema matches databases created by
      earlier deployments of this service. Python attributes are snake_case.
    - id: auto-increment integer primary key
    - createdAt: defaults to "now" both client-side and server-side
    - Rows are append-only: never updated or deleted by this system
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from taskeval.database import Base


class Summary(Base):
    """A summarized text: the submitted input and the model's summary."""

    __tablename__ = "Summary"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    input_text: Mapped[str] = mapped_column(
        "inputText",
        Text,
        nullable=False,
        comment="Text submitted for summarization",
    )

    output_text: Mapped[str] = mapped_column(
        "outputText",
        Text,
        nullable=False,
        comment="Summary produced by the generative model",
    )

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this summary was stored (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Summary(id={self.id}, created_at='{self.created_at}')>"
