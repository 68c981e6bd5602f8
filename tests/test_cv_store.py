"""Test suite for the stored-CV service."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import cv_studio.data.db as db_module
from cv_studio.data.models import Base, ExportEvent
from cv_studio.models.cv_data import CVData
from cv_studio.services.cv_store import (
    delete_cv,
    get_cv,
    get_cv_by_slug,
    list_cvs,
    list_export_events,
    load_cv_data,
    record_export_event,
    save_cv,
)
from cv_studio.services.export import ExportResult
from cv_studio.templates import get_template


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch, tmp_path):
    """Create a temporary test database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_module, "_engine", engine)
    monkeypatch.setattr(
        db_module, "_SessionLocal", sessionmaker(bind=engine, expire_on_commit=False)
    )
    yield
    engine.dispose()


class TestSaveCv:
    def test_create_defaults_title_to_full_name(self, sample_cv: CVData) -> None:
        result = save_cv(sample_cv)
        assert result is not None
        assert result["title"] == "Jane Doe"
        assert result["slug"] == "jane-doe"
        assert result["layout_id"] == "classic"
        assert result["content"]["personalInfo"]["fullName"] == "Jane Doe"

    def test_slugs_are_unique(self, sample_cv: CVData) -> None:
        first = save_cv(sample_cv)
        second = save_cv(sample_cv)
        assert first["slug"] == "jane-doe"
        assert second["slug"] == "jane-doe-2"

    def test_unknown_layout_rejected(self, sample_cv: CVData) -> None:
        assert save_cv(sample_cv, layout_id="nope") is None
        assert list_cvs() == []

    def test_update_replaces_content_and_slug(self, sample_cv: CVData) -> None:
        created = save_cv(sample_cv)
        cv = sample_cv.model_copy(update={"hidden_sections": ["skills"]})

        updated = save_cv(cv, title="Jane Doe Data", layout_id="modern", cv_id=created["id"])

        assert updated["id"] == created["id"]
        assert updated["slug"] == "jane-doe-data"
        assert updated["layout_id"] == "modern"
        assert updated["content"]["hiddenSections"] == ["skills"]

    def test_update_missing_cv(self, sample_cv: CVData) -> None:
        assert save_cv(sample_cv, cv_id=999) is None

    def test_content_round_trips(self, sample_cv: CVData) -> None:
        stored = save_cv(sample_cv)
        assert load_cv_data(stored["content"]).model_dump() == sample_cv.model_dump()

    def test_only_explicit_style_fields_stored(self, sample_cv: CVData) -> None:
        cv = CVData.model_validate(
            {
                **sample_cv.model_dump(mode="json", by_alias=True, exclude_none=True),
                "styleSettings": {"accentColor": "#ff0000"},
            }
        )

        stored = save_cv(cv, layout_id="modern")

        assert stored["content"]["styleSettings"] == {"accentColor": "#ff0000"}

    @pytest.mark.parametrize("layout_id", ["classic", "modern", "minimal-2", "creative"])
    def test_stored_cv_renders_with_layout_defaults(
        self, sample_cv: CVData, layout_id: str
    ) -> None:
        cv = CVData.model_validate(
            {
                **sample_cv.model_dump(mode="json", by_alias=True, exclude_none=True),
                "styleSettings": {"accentColor": "#ff0000"},
            }
        )
        template = get_template(layout_id)

        stored = save_cv(cv, layout_id=layout_id)
        loaded = load_cv_data(stored["content"])

        assert template.render(loaded) == template.render(cv)


class TestReadAndDelete:
    def test_get_and_slug_lookup(self, sample_cv: CVData) -> None:
        created = save_cv(sample_cv, title="Public CV")
        assert get_cv(created["id"])["title"] == "Public CV"
        assert get_cv_by_slug("public-cv")["id"] == created["id"]
        assert get_cv_by_slug("missing") is None
        assert get_cv(12345) is None

    def test_list(self, sample_cv: CVData) -> None:
        save_cv(sample_cv, title="One")
        save_cv(sample_cv, title="Two")
        titles = {cv["title"] for cv in list_cvs()}
        assert titles == {"One", "Two"}

    def test_delete_keeps_export_history(self, sample_cv: CVData) -> None:
        created = save_cv(sample_cv)
        record_export_event(created["id"], ExportResult(ok=True, format="pdf", filename="a.pdf"))

        assert delete_cv(created["id"]) is True
        assert get_cv(created["id"]) is None
        assert delete_cv(created["id"]) is False

        with db_module.get_session() as session:
            events = session.query(ExportEvent).all()
            assert len(events) == 1
            assert events[0].cv_id is None


class TestExportEvents:
    def test_success_and_failure_recorded(self, sample_cv: CVData) -> None:
        created = save_cv(sample_cv)
        record_export_event(
            created["id"], ExportResult(ok=True, format="pdf", filename="jane-doe.pdf")
        )
        failure = ExportResult(
            ok=False,
            format="docx",
            filename="jane-doe.docx",
            message="Markup too large",
            error="remote_conversion_failure",
        )
        record_export_event(created["id"], failure)

        events = list_export_events(created["id"])
        statuses = {e["format"]: e["status"] for e in events}
        assert statuses == {"pdf": "success", "docx": "remote_conversion_failure"}

    def test_unknown_cv_recorded_without_link(self) -> None:
        event = record_export_event(77, ExportResult(ok=True, format="png", filename="x.png"))
        assert event is not None
        assert event["cv_id"] is None
