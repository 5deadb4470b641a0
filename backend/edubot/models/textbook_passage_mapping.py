"""
TextbookPassageMapping: join row placing one PassageSet at one position of one Textbook.
At most one row per (textbook_id, passage_set_id); order unique within a textbook.
qr_code is nullable only so incomplete rows can exist long enough to be purged or backfilled.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from edubot.database import Base
from edubot.models.types import UuidType


class TextbookPassageMapping(Base):
    __tablename__ = "textbook_passage_mappings"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    textbook_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("textbooks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    passage_set_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("passagesets.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    order: Mapped[int] = mapped_column("order", Integer, nullable=False)
    qr_code: Mapped[str | None] = mapped_column(String(128), unique=True, nullable=True, index=True)
    qr_code_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("textbook_id", "passage_set_id", name="uq_mappings_textbook_passage_set"),
        UniqueConstraint("textbook_id", "order", name="uq_mappings_textbook_order"),
        CheckConstraint('"order" >= 1', name="mappings_order_check"),
    )

    textbook = relationship("Textbook", back_populates="mappings")
    passage_set = relationship("PassageSet", back_populates="mappings")

    @property
    def has_qr_code(self) -> bool:
        return bool((self.qr_code or "").strip())
