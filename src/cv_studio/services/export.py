"""Export pipeline: turn a mounted render root into a PDF, PNG or DOCX download.

Page boundaries are discovered from the mounted surfaces. Each page is
rasterized in a worker thread at the oversampling factor, one page at a time:
a page's bitmap is consumed (added to the PDF or pasted onto the PNG canvas)
before the next one is drawn. Exports on the same root are serialized.

Failures never propagate out of :meth:`ExportPipeline.export` or
:meth:`ExportPipeline.mount_and_export`; they come back as an unsuccessful
:class:`ExportResult` and nothing is delivered.
"""

from __future__ import annotations

import asyncio
import contextlib
import io
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, get_args

from fpdf import FPDF
from fpdf.errors import FPDFException
from PIL import Image

from cv_studio.config import DEFAULT_OVERSAMPLING
from cv_studio.rendering.markup import render_markup
from cv_studio.rendering.rasterize import ImageLoader, rasterize_surface
from cv_studio.rendering.surface import A4_WIDTH_MM
from cv_studio.services.downloads import MEDIA_TYPES, DownloadSink, ExportArtifact
from cv_studio.services.errors import (
    ExportError,
    RasterizationError,
    RemoteConversionError,
)
from cv_studio.services.render_targets import DEFAULT_ROOT_ID, RenderTarget, RenderTargetRegistry
from cv_studio.utils.filenames import DEFAULT_BASE_NAME, derive_filename

if TYPE_CHECKING:
    from cv_studio.rendering.surface import PageSurface
    from cv_studio.services.docx_client import DocxConversionClient

logger = logging.getLogger(__name__)

__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "ExportPipeline",
    "ExportResult",
    "FilenameHint",
    "StitchPlan",
    "plan_stitch",
]

ExportFormat = Literal["pdf", "png", "docx"]
EXPORT_FORMATS: tuple[str, ...] = get_args(ExportFormat)

Rasterizer = Callable[["PageSurface", float, "ImageLoader | None"], Image.Image]


@dataclass(frozen=True)
class FilenameHint:
    """Inputs for :func:`~cv_studio.utils.filenames.derive_filename`."""

    title: str | None = None
    organization: str | None = None
    free_text: str | None = None
    resource_id: int | str | None = None
    fallback: str = DEFAULT_BASE_NAME


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export call, for the caller to surface however it likes."""

    ok: bool
    format: str
    filename: str = ""
    location: str = ""
    message: str = ""
    error: str | None = None
    artifact: ExportArtifact | None = None


@dataclass(frozen=True)
class StitchPlan:
    width: int
    height: int
    offsets: tuple[int, ...]


def plan_stitch(sizes: list[tuple[float, float]], scale: float) -> StitchPlan:
    """Canvas size and vertical page offsets for stitching pages into one image.

    The canvas is ``max(width) * scale`` wide and ``sum(height) * scale``
    tall; page *i* starts at ``scale * sum(heights before i)``.
    """
    offsets: list[int] = []
    cumulative = 0.0
    for _, height in sizes:
        offsets.append(round(cumulative * scale))
        cumulative += height
    width = max((w for w, _ in sizes), default=0.0)
    return StitchPlan(
        width=max(1, round(width * scale)),
        height=max(1, round(cumulative * scale)),
        offsets=tuple(offsets),
    )


_LABELS = {"pdf": "PDF", "png": "PNG", "docx": "DOCX"}


def _failure_message(fmt: str, exc: ExportError) -> str:
    label = _LABELS.get(fmt, fmt.upper())
    if isinstance(exc, RemoteConversionError):
        return exc.server_message or f"Failed to export {label}. Please try again."
    if isinstance(exc, RasterizationError):
        return f"Failed to export {label}: could not capture the page."
    return f"Failed to export {label}: {exc}"


@dataclass
class _RootLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class ExportPipeline:
    """Export mounted render roots through a download sink.

    Each root id gets a lock while exports on it are running or waiting;
    the lock is dropped once the last of them finishes.
    """

    def __init__(
        self,
        targets: RenderTargetRegistry,
        sink: DownloadSink,
        *,
        oversampling: int = DEFAULT_OVERSAMPLING,
        docx_client: DocxConversionClient | None = None,
        image_loader: ImageLoader | None = None,
        rasterizer: Rasterizer = rasterize_surface,
    ) -> None:
        self.targets = targets
        self.sink = sink
        self.oversampling = max(1, oversampling)
        self.docx_client = docx_client
        self.image_loader = image_loader if image_loader is not None else ImageLoader()
        self._rasterizer = rasterizer
        self._locks: dict[str, _RootLock] = {}

    @property
    def active_roots(self) -> list[str]:
        """Root ids with an export running or waiting."""
        return sorted(self._locks)

    @contextlib.asynccontextmanager
    async def _root_lock(self, root_id: str) -> AsyncIterator[None]:
        entry = self._locks.get(root_id)
        if entry is None:
            entry = self._locks[root_id] = _RootLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[root_id]

    async def export(
        self,
        root_id: str = DEFAULT_ROOT_ID,
        fmt: str = "pdf",
        filename_hint: FilenameHint | None = None,
        *,
        sink: DownloadSink | None = None,
    ) -> ExportResult:
        """Export the root mounted at *root_id* as *fmt* and deliver it.

        *sink* overrides the pipeline's sink for this call only.
        """
        return await self._run(root_id, fmt, filename_hint, sink)

    async def mount_and_export(
        self,
        surfaces: list[PageSurface],
        root_id: str = DEFAULT_ROOT_ID,
        fmt: str = "pdf",
        filename_hint: FilenameHint | None = None,
        *,
        title: str = "",
        metadata: dict[str, str] | None = None,
        sink: DownloadSink | None = None,
        keep_mounted: bool = True,
    ) -> ExportResult:
        """Mount freshly rendered *surfaces* under *root_id* and export them.

        Mounting happens under the root's lock, so a concurrent call on the
        same root cannot replace the surfaces before they are exported. With
        ``keep_mounted=False`` the root is unmounted again before the lock is
        released.
        """

        def mount() -> None:
            self.targets.mount(surfaces, root_id, title=title, metadata=metadata)

        return await self._run(
            root_id, fmt, filename_hint, sink, mount=mount, keep_mounted=keep_mounted
        )

    async def _run(
        self,
        root_id: str,
        fmt: str,
        filename_hint: FilenameHint | None,
        sink: DownloadSink | None,
        *,
        mount: Callable[[], None] | None = None,
        keep_mounted: bool = True,
    ) -> ExportResult:
        hint = filename_hint or FilenameHint()
        fmt = fmt.lower()
        if fmt not in EXPORT_FORMATS:
            return ExportResult(
                ok=False,
                format=fmt,
                message=f"Unsupported export format {fmt!r}",
                error="unsupported_format",
            )
        filename = derive_filename(
            fmt,
            title=hint.title,
            organization=hint.organization,
            free_text=hint.free_text,
            resource_id=hint.resource_id,
            fallback=hint.fallback,
        )

        async with self._root_lock(root_id):
            try:
                if mount is not None:
                    mount()
                target = self.targets.get(root_id)
                content = await self._build(target, fmt, filename)
                artifact = ExportArtifact(filename, content, MEDIA_TYPES[fmt])
                location = self._deliver(sink or self.sink, artifact)
            except ExportError as exc:
                logger.warning("Export of %s as %s failed: %s", root_id, fmt, exc)
                return ExportResult(
                    ok=False,
                    format=fmt,
                    filename=filename,
                    message=_failure_message(fmt, exc),
                    error=exc.code,
                )
            except Exception:
                logger.exception("Unexpected error exporting %s as %s", root_id, fmt)
                return ExportResult(
                    ok=False,
                    format=fmt,
                    filename=filename,
                    message=f"Failed to export {_LABELS[fmt]}. Please try again.",
                    error=ExportError.code,
                )
            finally:
                if mount is not None and not keep_mounted:
                    self.targets.unmount(root_id)

        logger.info("Exported %s as %s (%d bytes)", root_id, filename, artifact.size)
        return ExportResult(
            ok=True,
            format=fmt,
            filename=filename,
            location=location,
            message=f"{_LABELS[fmt]} exported successfully.",
            artifact=artifact,
        )

    @staticmethod
    def _deliver(sink: DownloadSink, artifact: ExportArtifact) -> str:
        try:
            return sink.deliver(artifact)
        except OSError as exc:
            raise ExportError(f"could not save {artifact.filename}: {exc}") from exc

    async def _build(self, target: RenderTarget, fmt: str, filename: str) -> bytes:
        if fmt == "pdf":
            return await self.build_pdf(target)
        if fmt == "png":
            return await self.build_png(target)
        return await self.build_docx(target, filename)

    async def _rasterize(self, surface: PageSurface) -> Image.Image:
        try:
            return await asyncio.to_thread(
                self._rasterizer, surface, float(self.oversampling), self.image_loader
            )
        except Exception as exc:
            raise RasterizationError(
                f"could not rasterize page {surface.index + 1}: {exc}"
            ) from exc

    async def build_pdf(self, target: RenderTarget) -> bytes:
        """One full-bleed image per discovered page, in source order.

        Pages go onto A4 sheets with the image height scaled from the bitmap's
        aspect ratio. A root without page markers becomes a single page sized
        to its own aspect ratio.
        """
        pages = target.pages()
        marked = bool(pages)
        if not marked:
            pages = [target.whole()]

        pdf = FPDF(unit="mm", format="A4")
        pdf.set_auto_page_break(False)
        pdf.set_margin(0)
        for surface in pages:
            bitmap = await self._rasterize(surface)
            image_height = A4_WIDTH_MM * bitmap.height / bitmap.width
            try:
                if marked:
                    pdf.add_page()
                else:
                    pdf.add_page(format=(A4_WIDTH_MM, image_height))
                pdf.image(bitmap, x=0, y=0, w=A4_WIDTH_MM, h=image_height)
            except (FPDFException, ValueError) as exc:
                raise RasterizationError(f"could not add page to PDF: {exc}") from exc
            finally:
                bitmap.close()
        try:
            return bytes(pdf.output())
        except FPDFException as exc:
            raise RasterizationError(f"could not write PDF: {exc}") from exc

    async def build_png(self, target: RenderTarget) -> bytes:
        """All discovered pages stitched top to bottom onto one canvas."""
        pages = target.pages() or [target.whole()]
        plan = plan_stitch([(p.width, p.height) for p in pages], self.oversampling)
        canvas = Image.new("RGB", (plan.width, plan.height), "#ffffff")
        try:
            for surface, offset in zip(pages, plan.offsets, strict=True):
                bitmap = await self._rasterize(surface)
                canvas.paste(bitmap, (0, offset))
                bitmap.close()
            buffer = io.BytesIO()
            canvas.save(buffer, format="PNG")
        except OSError as exc:
            raise RasterizationError(f"could not encode PNG: {exc}") from exc
        finally:
            canvas.close()
        return buffer.getvalue()

    async def build_docx(self, target: RenderTarget, filename: str) -> bytes:
        """Serialize the root's markup and convert it remotely."""
        if self.docx_client is None:
            raise RemoteConversionError("No DOCX conversion endpoint is configured")
        html = render_markup(
            list(target.surfaces), root_id=target.root_id, title=target.title or "Resume"
        )
        return await self.docx_client.convert(html, filename)
