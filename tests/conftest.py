from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

import cv_studio.data.db as app_db
from cv_studio.data.db import init_db
from cv_studio.models.cv_data import CVData


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Use a temporary SQLite DB for API tests."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("CV_STUDIO_EXPORT_DIR", (tmp_path / "exports").as_posix())
    app_db._engine = None
    app_db._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    if app_db._engine is not None:
        app_db._engine.dispose()
        app_db._engine = None
        app_db._SessionLocal = None


@pytest.fixture
def sample_cv() -> CVData:
    """A small but complete CV in the editor's camelCase JSON shape."""
    return CVData.model_validate(
        {
            "id": "cv-1",
            "personalInfo": {
                "fullName": "Jane Doe",
                "jobTitle": "Backend Engineer",
                "email": "jane@example.com",
                "phone": "+1 555 0100",
                "city": "Kelowna",
                "country": "Canada",
                "linkedin": "https://www.linkedin.com/in/janedoe",
                "github": "github.com/janedoe",
                "summary": "Engineer focused on reliable data services.",
            },
            "experience": [
                {
                    "id": "exp-1",
                    "jobTitle": "Platform Engineer",
                    "companyName": "Acme Corp",
                    "location": "Vancouver",
                    "startDate": "2021-03",
                    "current": True,
                    "responsibilities": ["Ran the deploy pipeline", "Cut build times in half"],
                },
                {
                    "id": "exp-2",
                    "jobTitle": "Data Engineer",
                    "companyName": "Globex",
                    "startDate": "6/2018",
                    "endDate": "2021-02",
                    "responsibilities": ["Built ingestion jobs"],
                },
                {
                    "id": "exp-3",
                    "jobTitle": "QA Analyst",
                    "companyName": "Initech",
                    "startDate": "2016",
                    "endDate": "2018",
                },
            ],
            "education": [
                {
                    "id": "edu-1",
                    "degree": "BSc Computer Science",
                    "institutionName": "UBC Okanagan",
                    "graduationDate": "2016-05",
                }
            ],
            "skills": {"technical": ["Python", "SQL"], "soft": ["Mentoring"]},
            "languages": [
                {"id": "lang-1", "name": "English", "proficiency": "native"},
                {"id": "lang-2", "name": "French", "proficiency": "Basic"},
            ],
            "certifications": [],
            "additional": {"interests": ["Climbing"]},
        }
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically add api_db fixture to tests in API test files."""
    for item in items:
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            item.add_marker(pytest.mark.usefixtures("api_db"))
