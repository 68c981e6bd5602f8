"""Export failure taxonomy.

Every export failure derives from :class:`ExportError`. The pipeline catches
them at its top level and turns them into an unsuccessful
:class:`~cv_studio.services.export.ExportResult`; ``code`` is the stable
identifier carried on that result.
"""

from __future__ import annotations

__all__ = [
    "ExportError",
    "MissingRenderTargetError",
    "RasterizationError",
    "RemoteConversionError",
]


class ExportError(Exception):
    """Base exception for export failures."""

    code = "export_failure"


class MissingRenderTargetError(ExportError):
    """Raised when no render root is mounted under the requested id."""

    code = "missing_render_target"

    def __init__(self, root_id: str) -> None:
        super().__init__(f"Render target {root_id!r} was not found")
        self.root_id = root_id


class RasterizationError(ExportError):
    """Raised when a page bitmap cannot be produced or encoded."""

    code = "rasterization_failure"


class RemoteConversionError(ExportError):
    """Raised when the DOCX conversion endpoint fails.

    ``server_message`` holds the endpoint's own ``error`` text when it sent one.
    """

    code = "remote_conversion_failure"

    def __init__(self, message: str, server_message: str | None = None) -> None:
        super().__init__(message)
        self.server_message = server_message
