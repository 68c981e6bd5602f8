"""Shared dependencies for API routes.

The render registry and export pipeline are process-wide singletons; tests
replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from cv_studio.config import get_settings
from cv_studio.rendering.rasterize import ImageLoader
from cv_studio.services.docx_client import DocxConversionClient
from cv_studio.services.downloads import MemoryDownloadSink
from cv_studio.services.export import ExportPipeline
from cv_studio.services.render_targets import RenderTargetRegistry


@lru_cache(maxsize=1)
def get_render_targets() -> RenderTargetRegistry:
    """Registry of render roots mounted by ``/render`` and the export routes."""
    return RenderTargetRegistry()


@lru_cache(maxsize=1)
def get_export_pipeline() -> ExportPipeline:
    """Export pipeline configured from the environment.

    Routes pass their own per-request sink, so the default sink here only
    catches artifacts from callers that do not.
    """
    settings = get_settings()
    return ExportPipeline(
        get_render_targets(),
        MemoryDownloadSink(),
        oversampling=settings.oversampling,
        docx_client=DocxConversionClient(settings.docx_endpoint, settings.docx_timeout),
        image_loader=ImageLoader(allow_local_paths=False),
    )
