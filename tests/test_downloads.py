"""Tests for download sinks and mounted render targets."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from cv_studio.rendering.surface import PageSurface, RectOp
from cv_studio.services.downloads import (
    DirectoryDownloadSink,
    ExportArtifact,
    MemoryDownloadSink,
)
from cv_studio.services.errors import MissingRenderTargetError
from cv_studio.services.render_targets import RenderTargetRegistry


class TestDirectoryDownloadSink:
    def test_writes_file_under_derived_name(self, tmp_path: Path) -> None:
        sink = DirectoryDownloadSink(tmp_path / "exports")
        location = sink.deliver(ExportArtifact("jane-doe.pdf", b"%PDF-1.4", "application/pdf"))

        target = tmp_path / "exports" / "jane-doe.pdf"
        assert location == str(target)
        assert target.read_bytes() == b"%PDF-1.4"
        assert [p.name for p in target.parent.iterdir()] == ["jane-doe.pdf"]

    def test_failed_write_leaves_nothing_behind(self, tmp_path: Path) -> None:
        sink = DirectoryDownloadSink(tmp_path)
        with (
            patch("cv_studio.services.downloads.os.replace", side_effect=OSError("boom")),
            pytest.raises(OSError),
        ):
            sink.deliver(ExportArtifact("cv.png", b"data", "image/png"))
        assert list(tmp_path.iterdir()) == []

    def test_directory_components_in_filename_ignored(self, tmp_path: Path) -> None:
        sink = DirectoryDownloadSink(tmp_path)
        sink.deliver(ExportArtifact("../escape.pdf", b"x", "application/pdf"))
        assert (tmp_path / "escape.pdf").exists()


class TestMemoryDownloadSink:
    def test_keeps_artifacts(self) -> None:
        sink = MemoryDownloadSink()
        assert sink.last is None
        location = sink.deliver(ExportArtifact("a.pdf", b"1", "application/pdf"))
        sink.deliver(ExportArtifact("b.pdf", b"22", "application/pdf"))
        assert location == "memory://a.pdf"
        assert sink.last.filename == "b.pdf"
        assert sink.last.size == 2


class TestRenderTargetRegistry:
    def test_missing_root_raises(self) -> None:
        with pytest.raises(MissingRenderTargetError) as excinfo:
            RenderTargetRegistry().get("cv-preview-content")
        assert excinfo.value.code == "missing_render_target"

    def test_empty_root_counts_as_missing(self) -> None:
        registry = RenderTargetRegistry()
        registry.mount([], "empty")
        with pytest.raises(MissingRenderTargetError):
            registry.get("empty")

    def test_pages_filters_marked_surfaces(self) -> None:
        registry = RenderTargetRegistry()
        surfaces = [
            PageSurface(794, 1123, index=0),
            PageSurface(794, 200, is_page=False),
            PageSurface(794, 1123, index=1),
        ]
        target = registry.mount(surfaces, "root")
        assert [s.index for s in target.pages()] == [0, 1]
        assert "root" in registry

    def test_whole_stacks_surfaces(self) -> None:
        registry = RenderTargetRegistry()
        surfaces = [
            PageSurface(794, 100, ops=[RectOp(0, 0, 10, 10, fill="#000000")]),
            PageSurface(794, 50, ops=[RectOp(0, 0, 10, 10, fill="#ff0000")]),
        ]
        whole = registry.mount(surfaces, "root").whole()
        assert whole.is_page is False
        assert whole.height == 150
        reds = [op for op in whole.ops if isinstance(op, RectOp) and op.fill == "#ff0000"]
        assert reds[0].y == 100

    def test_unmount(self) -> None:
        registry = RenderTargetRegistry()
        registry.mount([PageSurface(794, 1123)], "root")
        registry.unmount("root")
        assert "root" not in registry
