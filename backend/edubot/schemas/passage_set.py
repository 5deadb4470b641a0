"""
PassageSet shapes. The mapping-derived fields are filled only when the passage set is
listed through one textbook; `textbooks` only when it is fetched on its own.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from edubot.schemas.common import ContractModel, Pagination
from edubot.schemas.textbook import TextbookInfo


class PassageSetPayload(ContractModel):
    title: str = Field(..., min_length=1, max_length=200)
    passage: str = Field(..., min_length=1, max_length=10000)
    passage_comment: str = Field(..., min_length=1, max_length=2000)


class PassageSetResponse(PassageSetPayload):
    id: UUID = Field(alias="_id")
    qr_code: str
    qr_code_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Mapping view (per textbook)
    order: int | None = None
    mapping_id: UUID | None = None
    mapping_qr_code: str | None = None
    mapping_qr_code_url: str | None = None
    # Textbooks that link this passage set
    textbooks: list[TextbookInfo] | None = None


class TextbookPassageSetList(ContractModel):
    passage_sets: list[PassageSetResponse]
    pagination: Pagination


class QrResolution(ContractModel):
    """What a scanned QR identifier points at."""

    qr_type: str  # "mapping" | "passage_set"
    passage_set: PassageSetResponse
    textbook: TextbookInfo | None = None
