"""
Question: one multiple-choice item; belongs to one PassageSet (set_id).
explanation_status tracks the AI-generated explanation: pending → generating → completed | failed.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from edubot.database import Base
from edubot.models.types import UuidType

EXPLANATION_STATUSES = ("pending", "generating", "completed", "failed")
# Allowed explanation_status moves; completed/failed are terminal except for a retry back to pending
EXPLANATION_TRANSITIONS = {
    "pending": ("generating",),
    "generating": ("completed", "failed"),
    "completed": ("pending",),
    "failed": ("pending",),
}


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    set_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("passagesets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_number: Mapped[int] = mapped_column(Integer, nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list] = mapped_column(JSON, nullable=False)  # ["...", "..."] (2 to 5 items)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)  # one of options
    explanation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    explanation_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    explanation_error: Mapped[str | None] = mapped_column(String(512), nullable=True)  # set when status=failed
    explanation_generated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("set_id", "question_number", name="uq_questions_set_number"),
        CheckConstraint("question_number >= 1", name="questions_number_check"),
        CheckConstraint(
            "explanation_status IN ('pending', 'generating', 'completed', 'failed')",
            name="questions_explanation_status_check",
        ),
    )

    passage_set = relationship("PassageSet", back_populates="questions")

    def move_explanation_status(self, new_status: str, *, error: str | None = None, at: datetime | None = None) -> None:
        """Advance the explanation lifecycle. Raises ValueError on an illegal move."""
        allowed = EXPLANATION_TRANSITIONS.get(self.explanation_status or "pending", ())
        if new_status not in allowed:
            raise ValueError(f"explanation_status cannot move {self.explanation_status} -> {new_status}")
        self.explanation_status = new_status
        if new_status == "failed":
            self.explanation_error = (error or "Unknown error")[:512]
            self.explanation_generated_at = at
        elif new_status == "completed":
            self.explanation_error = None
            self.explanation_generated_at = at
        elif new_status == "pending":
            self.explanation_error = None
