"""Add explanation lifecycle (status, error, generated_at) to questions.

Revision ID: 002
Revises: 001
Create Date: 2025-07-14

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("questions") as batch:
        batch.add_column(sa.Column("explanation_status", sa.String(20), nullable=False, server_default="pending"))
        batch.add_column(sa.Column("explanation_error", sa.String(512), nullable=True))
        batch.add_column(sa.Column("explanation_generated_at", sa.DateTime(timezone=True), nullable=True))
        batch.create_check_constraint(
            "questions_explanation_status_check",
            "explanation_status IN ('pending', 'generating', 'completed', 'failed')",
        )


def downgrade() -> None:
    with op.batch_alter_table("questions") as batch:
        batch.drop_constraint("questions_explanation_status_check", type_="check")
        batch.drop_column("explanation_generated_at")
        batch.drop_column("explanation_error")
        batch.drop_column("explanation_status")
