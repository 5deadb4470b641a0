"""
Question shapes, including the explanation lifecycle status.
"""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from edubot.schemas.common import ContractModel

ExplanationStatus = Literal["pending", "generating", "completed", "failed"]


class QuestionPayload(ContractModel):
    question_number: int = Field(..., ge=1)
    question_text: str = Field(..., min_length=1, max_length=1000)
    options: list[str]
    correct_answer: str
    explanation: str = Field("", max_length=2000)

    @field_validator("options")
    @classmethod
    def options_count(cls, v: list[str]) -> list[str]:
        if len(v) < 2 or len(v) > 5:
            raise ValueError("Options must have between 2 and 5 choices")
        return v

    @model_validator(mode="after")
    def correct_answer_in_options(self):
        if self.correct_answer not in self.options:
            raise ValueError("Correct answer must be one of the options")
        return self


class QuestionResponse(QuestionPayload):
    id: UUID = Field(alias="_id")
    set_id: UUID
    explanation_status: ExplanationStatus = "pending"
    explanation_generated_at: datetime | None = None
    explanation_error: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
