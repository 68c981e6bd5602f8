from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_studio.data.db import Base

if TYPE_CHECKING:
    from cv_studio.data.models.export_event import ExportEvent


class CVDocument(Base):
    """
    A saved CV: the JSON snapshot plus the layout it is rendered with.
    """

    __tablename__ = "cv_documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Resume")
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    layout_id: Mapped[str] = mapped_column(String(64), nullable=False, default="classic")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    export_events: Mapped[list[ExportEvent]] = relationship(
        "ExportEvent", back_populates="cv", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<CVDocument(id={self.id}, slug={self.slug!r}, layout_id={self.layout_id!r})>"
