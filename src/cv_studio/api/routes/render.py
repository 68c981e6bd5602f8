"""Render routes: lay a CV out with a template and mount the result."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from cv_studio.api.dependencies import get_render_targets
from cv_studio.api.schemas.render import PageInfo, RenderRequest, RenderResponse
from cv_studio.services.render_targets import RenderTarget, RenderTargetRegistry
from cv_studio.templates import get_template

if TYPE_CHECKING:
    from cv_studio.models.cv_data import CVData
    from cv_studio.models.style_settings import StyleSettings
    from cv_studio.rendering.surface import PageSurface

router = APIRouter(prefix="/render", tags=["render"])


async def render_surfaces(
    cv: CVData,
    template_id: str,
    *,
    style: StyleSettings | None = None,
    is_preview: bool = False,
) -> list[PageSurface]:
    """Render *cv* with *template_id* off the event loop.

    Raises:
        HTTPException: 400 if the template id is unknown.
    """
    try:
        template = get_template(template_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return await asyncio.to_thread(template.render, cv, style, is_preview)


async def render_and_mount(
    targets: RenderTargetRegistry,
    cv: CVData,
    template_id: str,
    root_id: str,
    *,
    style: StyleSettings | None = None,
    is_preview: bool = False,
    title: str = "",
) -> RenderTarget:
    """Render *cv* and mount the surfaces under *root_id*."""
    surfaces = await render_surfaces(cv, template_id, style=style, is_preview=is_preview)
    return targets.mount(
        surfaces,
        root_id,
        title=title or cv.personal_info.full_name,
        metadata={"template_id": template_id},
    )


@router.post("", response_model=RenderResponse)
async def render_endpoint(
    data: RenderRequest,
    targets: Annotated[RenderTargetRegistry, Depends(get_render_targets)],
) -> RenderResponse:
    """Render a CV and describe the resulting pages."""
    target = await render_and_mount(
        targets,
        data.cv,
        data.template_id,
        data.root_id,
        style=data.style,
        is_preview=data.is_preview,
    )
    pages = [
        PageInfo(
            index=surface.index,
            count=surface.count,
            width=surface.width,
            height=surface.height,
            is_page=surface.is_page,
            element_count=len(surface.ops),
        )
        for surface in target.surfaces
    ]
    return RenderResponse(
        root_id=target.root_id,
        template_id=data.template_id,
        page_count=len(pages),
        pages=pages,
    )
