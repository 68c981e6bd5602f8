"""Services"""

from cv_studio.services.cv_store import (
    delete_cv,
    get_cv,
    get_cv_by_slug,
    list_cvs,
    list_export_events,
    record_export_event,
    save_cv,
)
from cv_studio.services.docx_client import DocxConversionClient
from cv_studio.services.downloads import (
    DirectoryDownloadSink,
    DownloadSink,
    ExportArtifact,
    MemoryDownloadSink,
)
from cv_studio.services.errors import (
    ExportError,
    MissingRenderTargetError,
    RasterizationError,
    RemoteConversionError,
)
from cv_studio.services.export import ExportPipeline, ExportResult, FilenameHint
from cv_studio.services.render_targets import DEFAULT_ROOT_ID, RenderTargetRegistry

__all__ = [
    "DEFAULT_ROOT_ID",
    "DirectoryDownloadSink",
    "DocxConversionClient",
    "DownloadSink",
    "ExportArtifact",
    "ExportError",
    "ExportPipeline",
    "ExportResult",
    "FilenameHint",
    "MemoryDownloadSink",
    "MissingRenderTargetError",
    "RasterizationError",
    "RemoteConversionError",
    "RenderTargetRegistry",
    "delete_cv",
    "get_cv",
    "get_cv_by_slug",
    "list_cvs",
    "list_export_events",
    "record_export_event",
    "save_cv",
]
