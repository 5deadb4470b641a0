"""Initial schema: textbooks, passage sets (with legacy link columns), mappings, questions, system prompts.

Revision ID: 001
Revises:
Create Date: Initial

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "textbooks",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("subject", sa.String(50), nullable=False),
        sa.Column("level", sa.String(10), nullable=False, server_default="고등"),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("level IN ('초등', '중등', '고등')", name="textbooks_level_check"),
        sa.CheckConstraint("year >= 2000", name="textbooks_year_check"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_textbooks_title_year", "textbooks", ["title", "year"], unique=False)
    op.create_index("ix_textbooks_subject_level", "textbooks", ["subject", "level"], unique=False)

    op.create_table(
        "passagesets",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("passage", sa.Text(), nullable=False),
        sa.Column("passage_comment", sa.Text(), nullable=False),
        sa.Column("qr_code", sa.String(128), nullable=False),
        sa.Column("qr_code_url", sa.String(512), nullable=False),
        sa.Column("textbook_id", sa.String(36), nullable=True),
        sa.Column("set_number", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_passagesets_qr_code", "passagesets", ["qr_code"], unique=True)
    op.create_index("ix_passagesets_textbook_id", "passagesets", ["textbook_id"], unique=False)

    op.create_table(
        "textbook_passage_mappings",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("textbook_id", sa.String(36), nullable=False),
        sa.Column("passage_set_id", sa.String(36), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("qr_code", sa.String(128), nullable=True),
        sa.Column("qr_code_url", sa.String(512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('"order" >= 1', name="mappings_order_check"),
        sa.ForeignKeyConstraint(["textbook_id"], ["textbooks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["passage_set_id"], ["passagesets.id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("textbook_id", "passage_set_id", name="uq_mappings_textbook_passage_set"),
        sa.UniqueConstraint("textbook_id", "order", name="uq_mappings_textbook_order"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_textbook_passage_mappings_textbook_id", "textbook_passage_mappings", ["textbook_id"], unique=False)
    op.create_index("ix_textbook_passage_mappings_passage_set_id", "textbook_passage_mappings", ["passage_set_id"], unique=False)
    op.create_index("ix_textbook_passage_mappings_qr_code", "textbook_passage_mappings", ["qr_code"], unique=True)

    op.create_table(
        "questions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("set_id", sa.String(36), nullable=False),
        sa.Column("question_number", sa.Integer(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("question_number >= 1", name="questions_number_check"),
        sa.ForeignKeyConstraint(["set_id"], ["passagesets.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("set_id", "question_number", name="uq_questions_set_number"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_set_id", "questions", ["set_id"], unique=False)

    op.create_table(
        "systemprompts",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("key", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_systemprompts_key", "systemprompts", ["key"], unique=True)
    op.create_index("ix_systemprompts_is_active", "systemprompts", ["is_active"], unique=False)

    op.create_table(
        "systemPromptVersions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("prompt_key", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(512), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False, server_default="admin"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("prompt_key", "version", name="uq_prompt_versions_key_version"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_prompt_versions_key_version_desc",
        "systemPromptVersions",
        ["prompt_key", sa.text("version DESC")],
        unique=False,
    )
    op.create_index(
        "ix_prompt_versions_key_created_desc",
        "systemPromptVersions",
        ["prompt_key", sa.text("created_at DESC")],
        unique=False,
    )


def downgrade() -> None:
    op.drop_table("systemPromptVersions")
    op.drop_table("systemprompts")
    op.drop_table("questions")
    op.drop_table("textbook_passage_mappings")
    op.drop_table("passagesets")
    op.drop_table("textbooks")
