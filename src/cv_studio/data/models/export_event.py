from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_studio.data.db import Base

if TYPE_CHECKING:
    from cv_studio.data.models.cv_document import CVDocument


class ExportEvent(Base):
    """
    One export attempt. ``cv_id`` is empty for ad-hoc exports of unsaved CVs.
    """

    __tablename__ = "export_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cv_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cv_documents.id", ondelete="SET NULL"), nullable=True
    )
    format: Mapped[str] = mapped_column(String(16), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    cv: Mapped[CVDocument | None] = relationship("CVDocument", back_populates="export_events")
