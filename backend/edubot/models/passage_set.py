"""
PassageSet: a reading passage with its commentary and its own QR identifier.
textbook_id / set_number are the legacy direct link to a textbook, superseded by
TextbookPassageMapping. They stay nullable so old rows can be read and repaired
(see edubot.services.maintenance.strip_legacy_fields); new code never writes them.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from edubot.database import Base
from edubot.models.types import UuidType

LEGACY_COLUMNS = ("textbook_id", "set_number")


class PassageSet(Base):
    __tablename__ = "passagesets"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    passage: Mapped[str] = mapped_column(Text, nullable=False)  # max 10000 chars, checked in schemas
    passage_comment: Mapped[str] = mapped_column(Text, nullable=False)  # max 2000 chars
    qr_code: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    qr_code_url: Mapped[str] = mapped_column(String(512), nullable=False)
    # Legacy link: no FK, the referenced textbook may be gone
    textbook_id: Mapped[uuid.UUID | None] = mapped_column(UuidType(), nullable=True, index=True)
    set_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    mappings = relationship("TextbookPassageMapping", back_populates="passage_set")
    questions = relationship(
        "Question",
        back_populates="passage_set",
        cascade="all, delete-orphan",
        order_by="Question.question_number",
    )
