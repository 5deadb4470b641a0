"""
SystemPrompt and version-history shapes.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from edubot.schemas.common import ContractModel


class SystemPromptCreate(ContractModel):
    key: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: str
    content: str = Field(..., min_length=1)


class SystemPromptUpdate(ContractModel):
    """All optional; only a content change creates a new version."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = Field(None, min_length=1)
    is_active: bool | None = None
    version_description: str | None = Field(None, max_length=512)


class SystemPromptResponse(ContractModel):
    id: UUID = Field(alias="_id")
    key: str
    name: str
    description: str
    content: str
    is_active: bool
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PromptVersionEntry(ContractModel):
    version: int
    content: str
    created_at: datetime | None = None
    description: str | None = None
    created_by: str | None = None
    is_current: bool = False


class PromptVersionHistory(ContractModel):
    current: PromptVersionEntry
    versions: list[PromptVersionEntry]


class RevertRequest(ContractModel):
    version: int = Field(..., ge=1)
