"""
TextbookPassageMapping shapes and request bodies for the mapping admin routes.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from edubot.schemas.common import ContractModel


class MappingResponse(ContractModel):
    id: UUID = Field(alias="_id")
    textbook_id: UUID
    passage_set_id: UUID
    order: int
    qr_code: str | None = None
    qr_code_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PassageSetOrderRequest(ContractModel):
    passage_set_ids: list[UUID]

    @field_validator("passage_set_ids")
    @classmethod
    def no_duplicates(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("passage_set_ids must not contain duplicates")
        return v
