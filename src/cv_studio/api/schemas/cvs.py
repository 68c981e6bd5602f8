"""Pydantic schemas for stored-CV endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cv_studio.models.cv_data import CVData


class CVResponse(BaseModel):
    """Response schema for a stored CV."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    layout_id: str
    content: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class CVSaveRequest(BaseModel):
    """Request schema for creating or replacing a stored CV."""

    cv: CVData = Field(..., description="CV snapshot (camelCase or snake_case keys)")
    title: str | None = Field(None, description="Display title; defaults to the full name")
    layout_id: str = Field("classic", description="Template id the CV renders with")


class ExportEventResponse(BaseModel):
    """One recorded export attempt."""

    id: int
    cv_id: int | None = None
    format: str
    filename: str
    status: str
    message: str | None = None
    created_at: datetime
