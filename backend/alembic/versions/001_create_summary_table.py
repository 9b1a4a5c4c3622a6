"""Create Summary table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `Summary` table written by POST /api/summarize.
How:   Portable column types only (INTEGER identity, TEXT, TIMESTAMP WITH
       TIME ZONE), so the same migration runs on PostgreSQL and SQLite.
       Table and column names are quoted camelCase identifiers.

Rollback: downgrade() drops the table (all stored summaries are lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Summary",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "inputText",
            sa.Text(),
            nullable=False,
            comment="Text submitted for summarization",
        ),
        sa.Column(
            "outputText",
            sa.Text(),
            nullable=False,
            comment="Summary produced by the generative model",
        ),
        sa.Column(
            "createdAt",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this summary was stored (UTC)",
        ),
        sa.PrimaryKeyConstraint("id", name="Summary_pkey"),
    )


def downgrade() -> None:
    op.drop_table("Summary")
