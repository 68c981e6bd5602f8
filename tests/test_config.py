"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from cv_studio.config import DEFAULT_OVERSAMPLING, get_export_root, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "CV_STUDIO_DOCX_ENDPOINT",
            "CV_STUDIO_DOCX_TIMEOUT",
            "CV_STUDIO_OVERSAMPLING",
            "CV_STUDIO_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.oversampling == DEFAULT_OVERSAMPLING == 4
        assert settings.docx_timeout == 30.0
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("CV_STUDIO_DOCX_ENDPOINT", "https://convert.example.com/api/")
        monkeypatch.setenv("CV_STUDIO_DOCX_TIMEOUT", "5")
        monkeypatch.setenv("CV_STUDIO_OVERSAMPLING", "2")
        monkeypatch.setenv("CV_STUDIO_EXPORT_DIR", str(tmp_path))
        monkeypatch.setenv("CV_STUDIO_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.docx_endpoint == "https://convert.example.com/api"
        assert settings.docx_timeout == 5.0
        assert settings.oversampling == 2
        assert settings.export_dir == tmp_path.resolve()
        assert settings.log_level == "DEBUG"

    def test_bad_numbers_fall_back(self, monkeypatch) -> None:
        monkeypatch.setenv("CV_STUDIO_OVERSAMPLING", "lots")
        settings = get_settings()
        assert settings.oversampling == 4

    def test_export_root_default(self, monkeypatch) -> None:
        monkeypatch.delenv("CV_STUDIO_EXPORT_DIR", raising=False)
        assert get_export_root().name == "exports"
