"""
Textbook: catalog entry that passage sets are linked into through TextbookPassageMapping.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from edubot.database import Base
from edubot.models.types import UuidType

TEXTBOOK_LEVELS = ("초등", "중등", "고등")
DEFAULT_LEVEL = "고등"
MIN_YEAR = 2000


class Textbook(Base):
    __tablename__ = "textbooks"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    subject: Mapped[str] = mapped_column(String(50), nullable=False)
    level: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_LEVEL)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("level IN ('초등', '중등', '고등')", name="textbooks_level_check"),
        CheckConstraint(f"year >= {MIN_YEAR}", name="textbooks_year_check"),
        Index("ix_textbooks_title_year", "title", "year"),
        Index("ix_textbooks_subject_level", "subject", "level"),
    )

    mappings = relationship(
        "TextbookPassageMapping",
        back_populates="textbook",
        cascade="all, delete-orphan",
        order_by="TextbookPassageMapping.order",
    )
