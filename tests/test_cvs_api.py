"""Tests for stored-CV, template and render API endpoints."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from cv_studio.api.dependencies import get_render_targets
from cv_studio.api.main import app
from cv_studio.models.cv_data import CVData


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def cv_json(sample_cv: CVData) -> dict[str, Any]:
    return sample_cv.model_dump(mode="json", by_alias=True, exclude_none=True)


class TestHealthAndTemplates:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_list_templates(self, client: TestClient) -> None:
        response = client.get("/api/templates")
        assert response.status_code == 200
        templates = {t["id"]: t for t in response.json()}
        assert len(templates) == 15
        assert templates["classic"]["family"] == "classic"
        assert templates["classic-3"]["paginated"] is False


class TestRender:
    def test_render_mounts_root(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        response = client.post(
            "/api/render",
            json={"cv": cv_json, "template_id": "modern", "root_id": "render-test"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["root_id"] == "render-test"
        assert body["page_count"] == len(body["pages"]) >= 1
        assert body["pages"][0]["width"] == 794
        assert body["pages"][0]["is_page"] is True
        assert "render-test" in get_render_targets()

    def test_preview_returns_one_page(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        response = client.post(
            "/api/render", json={"cv": cv_json, "is_preview": True, "root_id": "preview"}
        )
        assert response.status_code == 200
        assert response.json()["page_count"] == 1

    def test_unknown_template(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        response = client.post("/api/render", json={"cv": cv_json, "template_id": "fancy"})
        assert response.status_code == 400
        assert "Unknown template" in response.json()["detail"]

    def test_duplicate_entry_ids_rejected(
        self, client: TestClient, cv_json: dict[str, Any]
    ) -> None:
        cv_json["experience"][1]["id"] = cv_json["experience"][0]["id"]
        response = client.post("/api/render", json={"cv": cv_json})
        assert response.status_code == 422


class TestCvCrud:
    def test_create_get_update_delete(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        created = client.post("/api/cvs", json={"cv": cv_json, "layout_id": "minimal"})
        assert created.status_code == 201
        cv = created.json()
        assert cv["slug"] == "jane-doe"
        assert cv["layout_id"] == "minimal"

        fetched = client.get(f"/api/cvs/{cv['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["content"]["personalInfo"]["fullName"] == "Jane Doe"

        updated = client.put(
            f"/api/cvs/{cv['id']}",
            json={"cv": cv_json, "title": "Jane Doe 2026", "layout_id": "creative"},
        )
        assert updated.status_code == 200
        assert updated.json()["slug"] == "jane-doe-2026"

        listed = client.get("/api/cvs")
        assert [c["id"] for c in listed.json()] == [cv["id"]]

        deleted = client.delete(f"/api/cvs/{cv['id']}")
        assert deleted.status_code == 204
        assert client.get(f"/api/cvs/{cv['id']}").status_code == 404

    def test_unknown_layout_rejected(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        response = client.post("/api/cvs", json={"cv": cv_json, "layout_id": "fancy"})
        assert response.status_code == 400

    def test_missing_cv(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        assert client.get("/api/cvs/999").status_code == 404
        assert client.delete("/api/cvs/999").status_code == 404
        assert client.put("/api/cvs/999", json={"cv": cv_json}).status_code == 404
        assert client.get("/api/cvs/999/exports").status_code == 404

    def test_public_slug_lookup(self, client: TestClient, cv_json: dict[str, Any]) -> None:
        client.post("/api/cvs", json={"cv": cv_json, "title": "Jane Public"})

        response = client.get("/api/public/cvs/jane-public")

        assert response.status_code == 200
        assert response.json()["title"] == "Jane Public"
        assert client.get("/api/public/cvs/nobody").status_code == 404
