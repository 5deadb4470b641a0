"""
Textbook shapes, plus TextbookInfo: a textbook as seen from one of its passage sets.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from edubot.models.textbook import TEXTBOOK_LEVELS, DEFAULT_LEVEL, MIN_YEAR
from edubot.schemas.common import ContractModel


class TextbookPayload(ContractModel):
    title: str = Field(..., min_length=1, max_length=100)
    subject: str = Field(..., min_length=1, max_length=50)
    level: str = DEFAULT_LEVEL
    year: int
    description: str | None = Field(None, max_length=500)

    @field_validator("level")
    @classmethod
    def level_one_of(cls, v: str) -> str:
        if v not in TEXTBOOK_LEVELS:
            raise ValueError(f"level must be one of {', '.join(TEXTBOOK_LEVELS)}")
        return v

    @field_validator("year")
    @classmethod
    def year_range(cls, v: int) -> int:
        latest = datetime.now().year + 1
        if v < MIN_YEAR or v > latest:
            raise ValueError(f"year must be between {MIN_YEAR} and {latest}")
        return v


class TextbookResponse(TextbookPayload):
    id: UUID = Field(alias="_id")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TextbookInfo(ContractModel):
    id: UUID = Field(alias="_id")
    title: str
    subject: str
    level: str
    order: int | None = None
    mapping_id: UUID | None = None
