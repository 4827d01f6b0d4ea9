"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ngcontext.service import create_app
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def client(project: ProjectBuilder) -> TestClient:
    project.write(
        {
            "src/app/widget/widget.component.ts": """
                @Component({ selector: 'app-widget' })
                export class WidgetComponent {}
            """,
            "src/app/unused/unused.component.ts": "export class UnusedComponent {}\n",
            "src/app/page.html": "<app-widget></app-widget>\n",
            "src/app/data.service.ts": "@Injectable()\nexport class DataService {}\n",
        }
    )
    tools = project.tools()
    return TestClient(create_app(lambda: tools))


def test_health_endpoint(client: TestClient, project: ProjectBuilder) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "root": str(project.root.resolve())}


def test_search_endpoint(client: TestClient) -> None:
    response = client.post("/search", json={"query": "app-widget", "file_types": [".html"]})

    assert response.status_code == 200
    data = response.json()
    assert data["file_types"] == [".html"]
    assert data["matched_files"] == 1
    assert data["hits"][0]["file"] == "src/app/page.html"
    assert data["hits"][0]["line"] == 1


def test_read_file_endpoint(client: TestClient) -> None:
    response = client.post("/read-file", json={"file_path": "src/app/page.html"})

    assert response.status_code == 200
    assert response.json()["content"] == "<app-widget></app-widget>\n"


@pytest.mark.parametrize(
    ("file_path", "status", "kind"),
    [
        ("../../etc/passwd", 403, "out_of_scope"),
        ("notes.exe", 415, "disallowed_type"),
        ("src/app/missing.ts", 404, "not_accessible"),
    ],
)
def test_read_file_errors_map_to_status(
    client: TestClient, file_path: str, status: int, kind: str
) -> None:
    response = client.post("/read-file", json={"file_path": file_path})

    assert response.status_code == status
    assert response.json()["kind"] == kind


def test_search_missing_directory_is_not_found(client: TestClient) -> None:
    response = client.post("/search", json={"query": "x", "directory": "nope"})

    assert response.status_code == 404
    assert response.json()["kind"] == "directory_unavailable"


def test_component_usage_endpoint(client: TestClient) -> None:
    everything = client.post("/component-usage", json={"show_unused": True}).json()
    used_only = client.post("/component-usage", json={}).json()

    assert [c["name"] for c in everything["components"]] == ["WidgetComponent", "UnusedComponent"]
    assert everything["components"][0]["total_usages"] == 1
    assert everything["components"][0]["used_in"][0]["kind"] == "template"
    assert everything["skipped"] == []
    assert [c["name"] for c in used_only["components"]] == ["WidgetComponent"]


def test_file_structure_endpoint(client: TestClient) -> None:
    response = client.post(
        "/file-structure",
        json={"file_path": "src/app/page.html", "kind": "template"},
    )

    assert response.status_code == 200
    assert response.json()["component_refs"] == ["app-widget"]


def test_inventory_endpoint(client: TestClient) -> None:
    response = client.post("/inventory", json={"focus": "services"})

    assert response.status_code == 200
    data = response.json()
    assert data["components"] is None
    assert [s["name"] for s in data["services"]] == ["data"]


def test_inventory_rejects_unknown_focus(client: TestClient) -> None:
    response = client.post("/inventory", json={"focus": "pipes"})

    assert response.status_code == 422
