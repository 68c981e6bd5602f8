"""Export routes: download a rendered CV as PDF, PNG or DOCX."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from cv_studio.api.dependencies import get_export_pipeline
from cv_studio.api.routes.render import render_surfaces
from cv_studio.api.schemas.render import ExportRequest
from cv_studio.services.cv_store import get_cv, load_cv_data, record_export_event
from cv_studio.services.downloads import MemoryDownloadSink
from cv_studio.services.export import ExportPipeline, ExportResult, FilenameHint

router = APIRouter(tags=["exports"])

_STATUS_BY_ERROR = {
    "unsupported_format": status.HTTP_400_BAD_REQUEST,
    "missing_render_target": status.HTTP_404_NOT_FOUND,
    "rasterization_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "remote_conversion_failure": status.HTTP_502_BAD_GATEWAY,
}


def _file_response(result: ExportResult, sink: MemoryDownloadSink) -> Response:
    """Turn an export result into a download, or raise the mapped HTTP error."""
    if not result.ok or sink.last is None:
        code = _STATUS_BY_ERROR.get(result.error or "", status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise HTTPException(status_code=code, detail=result.message or "Export failed")

    artifact = sink.last
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@router.post(
    "/export/{export_format}",
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "image/png": {},
                "application/octet-stream": {},
            }
        }
    },
)
async def export_endpoint(
    export_format: Annotated[str, Path(description="pdf, png or docx")],
    data: ExportRequest,
    pipeline: Annotated[ExportPipeline, Depends(get_export_pipeline)],
) -> Response:
    """Export a render root, rendering ``cv`` into it first when supplied."""
    hint = FilenameHint(
        title=data.title or (data.cv.personal_info.full_name if data.cv else None),
        organization=data.organization,
        free_text=data.free_text,
        resource_id=data.resource_id,
    )
    sink = MemoryDownloadSink()
    if data.cv is None:
        result = await pipeline.export(data.root_id, export_format, hint, sink=sink)
        return _file_response(result, sink)

    surfaces = await render_surfaces(data.cv, data.template_id, style=data.style)
    result = await pipeline.mount_and_export(
        surfaces,
        data.root_id,
        export_format,
        hint,
        title=data.cv.personal_info.full_name,
        metadata={"template_id": data.template_id},
        sink=sink,
    )
    return _file_response(result, sink)


@router.post("/cvs/{cv_id}/export/{export_format}")
async def export_cv_endpoint(
    cv_id: Annotated[int, Path(description="CV ID")],
    export_format: Annotated[str, Path(description="pdf, png or docx")],
    pipeline: Annotated[ExportPipeline, Depends(get_export_pipeline)],
) -> Response:
    """Render a stored CV with its layout and download it.

    Every attempt is recorded in the CV's export history.
    """
    stored = get_cv(cv_id)
    if not stored:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV {cv_id} not found",
        )
    cv = load_cv_data(stored["content"])
    if cv is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"CV {cv_id} has invalid content",
        )

    surfaces = await render_surfaces(cv, stored["layout_id"])
    sink = MemoryDownloadSink()
    result = await pipeline.mount_and_export(
        surfaces,
        f"cv-{cv_id}",
        export_format,
        FilenameHint(title=stored["title"], resource_id=cv_id),
        title=stored["title"],
        metadata={"template_id": stored["layout_id"]},
        sink=sink,
        keep_mounted=False,
    )
    record_export_event(cv_id, result)
    return _file_response(result, sink)
