"""Template listing routes."""

from __future__ import annotations

from fastapi import APIRouter

from cv_studio.api.schemas.render import TemplateInfo
from cv_studio.templates import get_template, list_templates

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateInfo])
def list_templates_endpoint() -> list[TemplateInfo]:
    """List every registered template variant, sorted by id."""
    infos = []
    for template_id in list_templates():
        template = get_template(template_id)
        infos.append(
            TemplateInfo(
                id=template.template_id,
                name=template.name,
                family=template.family,
                paginated=template.paginated,
            )
        )
    return infos
