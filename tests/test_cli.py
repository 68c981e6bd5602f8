"""Tests for the command-line exporter."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from cv_studio.cli import run_cli
from cv_studio.models.cv_data import CVData
from cv_studio.services.errors import RemoteConversionError
from cv_studio.services.export import ExportResult


@pytest.fixture
def cv_file(tmp_path: Path, sample_cv: CVData) -> Path:
    path = tmp_path / "cv.json"
    path.write_text(
        json.dumps(sample_cv.model_dump(mode="json", by_alias=True, exclude_none=True)),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def low_resolution(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CV_STUDIO_OVERSAMPLING", "1")


class TestTemplatesCommand:
    def test_lists_every_template(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["templates"]) == 0
        output = capsys.readouterr().out
        assert len(output.strip().splitlines()) == 15
        assert "classic-3" in output
        assert "continuous" in output


class TestExportCommand:
    def test_png_written_to_out_dir(self, cv_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"

        code = run_cli(["export", str(cv_file), "--format", "png", "--out", str(out)])

        assert code == 0
        assert (out / "jane-doe.png").exists()

    def test_title_and_id_shape_filename(self, cv_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        code = run_cli(
            [
                "export",
                str(cv_file),
                "--template",
                "modern",
                "--out",
                str(out),
                "--title",
                "Backend CV",
                "--id",
                "7",
            ]
        )
        assert code == 0
        assert (out / "backend-cv-7.pdf").read_bytes().startswith(b"%PDF")

    def test_style_file_applied(self, cv_file: Path, tmp_path: Path) -> None:
        style_file = tmp_path / "style.json"
        style_file.write_text(json.dumps({"borderMode": "none", "accentColor": "#0f766e"}))

        with patch("cv_studio.cli.ExportPipeline.export") as export:
            export.return_value = ExportResult(
                ok=True, format="pdf", filename="jane-doe.pdf", location="x", message="ok"
            )
            code = run_cli(["export", str(cv_file), "--style", str(style_file)])

        assert code == 0
        export.assert_called_once()

    def test_unknown_template(self, cv_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["export", str(cv_file), "--template", "fancy"]) == 1
        assert "Unknown template" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path: Path) -> None:
        assert run_cli(["export", str(tmp_path / "missing.json")]) == 1

    def test_failed_export_exit_code(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(
            "cv_studio.cli.DocxConversionClient.convert",
            side_effect=RemoteConversionError("Converter offline"),
        ):
            code = run_cli(["export", str(cv_file), "--format", "docx"])

        assert code == 1
        assert "❌" in capsys.readouterr().err
