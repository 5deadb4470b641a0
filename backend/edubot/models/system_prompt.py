"""
SystemPrompt: named, keyed, versioned prompt text. key is globally unique.
SystemPromptVersion: append-only snapshot of a prompt's content at one version;
unique per (prompt_key, version). Rows outlive the prompt they snapshot.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Integer, Text, Boolean, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from edubot.database import Base
from edubot.models.types import UuidType


class SystemPrompt(Base):
    __tablename__ = "systemprompts"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SystemPromptVersion(Base):
    __tablename__ = "systemPromptVersions"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    prompt_key: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False, default="admin")
    # Python-side default keeps sub-second order between versions written in one transaction
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("prompt_key", "version", name="uq_prompt_versions_key_version"),
    )


# "latest N versions of a key" and "versions by creation time" lookups
Index(
    "ix_prompt_versions_key_version_desc",
    SystemPromptVersion.prompt_key,
    SystemPromptVersion.version.desc(),
)
Index(
    "ix_prompt_versions_key_created_desc",
    SystemPromptVersion.prompt_key,
    SystemPromptVersion.created_at.desc(),
)
