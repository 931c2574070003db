"""create_questions_table

Revision ID: 3c5e7a9b1d20
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3c5e7a9b1d20"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("question_title", sa.Text(), nullable=False),
        sa.Column("option1", sa.Text(), nullable=False),
        sa.Column("option2", sa.Text(), nullable=False),
        sa.Column("option3", sa.Text(), nullable=False),
        sa.Column("option4", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("category", sa.String(128), nullable=False),
        sa.Column("difficulty_level", sa.String(32), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_questions"),
    )
    op.create_index("idx_questions_category", "questions", ["category"])


def downgrade() -> None:
    op.drop_index("idx_questions_category", table_name="questions")
    op.drop_table("questions")
