"""Pydantic schemas for template listing, rendering and exporting."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cv_studio.models.cv_data import CVData
from cv_studio.models.style_settings import StyleSettings
from cv_studio.services.render_targets import DEFAULT_ROOT_ID


class TemplateInfo(BaseModel):
    id: str
    name: str
    family: str
    paginated: bool


class RenderRequest(BaseModel):
    """Render a CV and mount the result under ``root_id``."""

    cv: CVData
    template_id: str = Field("classic", description="Template variant id")
    style: StyleSettings | None = Field(
        None, description="Style overrides; falls back to the CV's own style settings"
    )
    is_preview: bool = Field(False, description="Render the first page only, without numbers")
    root_id: str = Field(DEFAULT_ROOT_ID, description="Id the rendered root is mounted under")


class PageInfo(BaseModel):
    index: int
    count: int
    width: float
    height: float
    is_page: bool
    element_count: int


class RenderResponse(BaseModel):
    root_id: str
    template_id: str
    page_count: int
    pages: list[PageInfo]


class ExportRequest(BaseModel):
    """Export a mounted root, optionally rendering a CV into it first.

    Without ``cv`` the root already mounted under ``root_id`` is exported.
    """

    root_id: str = DEFAULT_ROOT_ID
    cv: CVData | None = None
    template_id: str = "classic"
    style: StyleSettings | None = None
    title: str | None = Field(None, description="Preferred filename base")
    organization: str | None = None
    free_text: str | None = None
    resource_id: int | str | None = None
