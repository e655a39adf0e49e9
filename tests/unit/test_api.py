"""Unit tests for the HTTP surface and its result envelope."""

import pytest
from fastapi.testclient import TestClient

from document_catalog.config.settings import Settings
from document_catalog.main import create_app

ALICE = {"X-User-Email": "alice.smith@example.com"}
BOB = {"X-User-Email": "bob@example.com", "X-User-Name": "Bob B."}
DOC_URL = "https://docs.google.com/document/d/abc"


@pytest.fixture
def client(database_url):
    app = create_app(Settings(database_url=database_url, max_search_results=50))
    with TestClient(app) as test_client:
        yield test_client


def _add(client, name="Q1 Report", url=DOC_URL, category="Finance", tags=""):
    return client.post(
        "/api/v1/documents",
        json={"name": name, "url": url, "category": category, "tags": tags},
        headers=ALICE,
    )


@pytest.mark.unit
class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database_connected"] is True
        assert body["service"] == "document-catalog"

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"


@pytest.mark.unit
class TestDocumentEndpoints:

    def test_add_and_list(self, client):
        client.post("/api/v1/categories", json={"name": "Finance"}, headers=ALICE)
        response = _add(client)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["document_id"].startswith("DOC_")
        assert body["document"]["file_type"] == "Google Doc"

        listing = client.get("/api/v1/documents", headers=ALICE).json()
        assert listing["success"] is True
        assert [d["name"] for d in listing["documents"]] == ["Q1 Report"]

        categories = client.get("/api/v1/categories", headers=ALICE).json()["categories"]
        assert categories[0]["document_count"] == 1

    def test_duplicate_url(self, client):
        _add(client)
        response = _add(client, name="Copy")
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "A document with this URL already exists"
        assert body["error_code"] == "duplicate_url"

    def test_missing_fields(self, client):
        response = client.post("/api/v1/documents", json={"name": "No url"}, headers=ALICE)
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "validation_error"
        assert "url" in body["error"]

    def test_malformed_body_uses_envelope(self, client):
        response = client.patch("/api/v1/documents/DOC_1", json={"status": "Deleted"}, headers=ALICE)
        assert response.status_code == 422
        assert response.json()["success"] is False
        assert response.json()["error_code"] == "validation_error"

    def test_unauthenticated(self, client):
        response = client.post(
            "/api/v1/documents", json={"name": "x", "url": DOC_URL, "category": "Finance"}
        )
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "User not authenticated",
            "error_code": "unauthenticated",
        }

    def test_filters_and_sort(self, client):
        _add(client, name="b doc", url="https://example.com/b")
        _add(client, name="A doc", url="https://example.com/a", category="HR")
        response = client.get(
            "/api/v1/documents",
            params={"categories": ["Finance", "HR"], "sort_by": "name_asc"},
            headers=ALICE,
        )
        assert [d["name"] for d in response.json()["documents"]] == ["A doc", "b doc"]

        only_hr = client.get("/api/v1/documents", params={"categories": "HR"}, headers=ALICE).json()
        assert [d["name"] for d in only_hr["documents"]] == ["A doc"]

    def test_update_archive_restore_delete(self, client):
        doc_id = _add(client).json()["document_id"]

        updated = client.patch(f"/api/v1/documents/{doc_id}", json={"category": "HR"}, headers=ALICE)
        assert updated.json()["document"]["category"] == "HR"

        archived = client.post(f"/api/v1/documents/{doc_id}/archive", headers=ALICE)
        assert archived.json()["document"]["status"] == "Archived"
        restored = client.post(f"/api/v1/documents/{doc_id}/restore", headers=ALICE)
        assert restored.json()["document"]["status"] == "Active"

        deleted = client.delete(f"/api/v1/documents/{doc_id}", headers=ALICE)
        assert deleted.json()["success"] is True
        missing = client.get(f"/api/v1/documents/{doc_id}", headers=ALICE)
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "not_found"

    def test_bulk_archive(self, client):
        doc_id = _add(client).json()["document_id"]
        response = client.post(
            "/api/v1/documents/bulk/archive",
            json={"document_ids": [doc_id, "DOC_NOPE"]},
            headers=ALICE,
        )
        body = response.json()
        assert body["success"] is True
        assert body["summary"] == "1 of 2 documents archived."

    def test_record_view(self, client):
        doc_id = _add(client).json()["document_id"]
        assert client.post(f"/api/v1/documents/{doc_id}/views", headers=BOB).json()["success"] is True
        analytics = client.get("/api/v1/analytics", headers=BOB).json()["analytics"]
        assert analytics["total_views"] == 1


@pytest.mark.unit
class TestCatalogFavoritesSessions:

    def test_duplicate_category(self, client):
        assert client.post("/api/v1/categories", json={"name": "HR"}, headers=ALICE).status_code == 201
        response = client.post("/api/v1/categories", json={"name": "HR"}, headers=BOB)
        assert response.status_code == 409
        assert response.json()["error"] == "Category already exists"

    def test_tags(self, client):
        client.post("/api/v1/tags", json={"name": "q1"}, headers=ALICE)
        _add(client, tags="q1")
        tags = client.get("/api/v1/tags", headers=ALICE).json()["tags"]
        assert tags[0]["usage_count"] == 1

    def test_toggle_favorite(self, client):
        doc_id = _add(client).json()["document_id"]
        first = client.post(f"/api/v1/favorites/{doc_id}/toggle", headers=BOB).json()
        assert first == {"success": True, "favorited": True}
        assert client.get("/api/v1/favorites", headers=BOB).json()["favorite_ids"] == [doc_id]
        second = client.post(f"/api/v1/favorites/{doc_id}/toggle", headers=BOB).json()
        assert second["favorited"] is False

    def test_presence(self, client):
        client.post("/api/v1/sessions/login", headers=ALICE)
        client.post("/api/v1/sessions/heartbeat", headers=BOB)
        online = client.get("/api/v1/sessions/online", headers=ALICE).json()["users"]
        assert {u["user_email"] for u in online} == {"alice.smith@example.com", "bob@example.com"}

        client.post("/api/v1/sessions/logout", headers=BOB)
        assert client.post("/api/v1/sessions/logout", headers=BOB).json()["success"] is True
        online = client.get("/api/v1/sessions/online", headers=ALICE).json()["users"]
        assert [u["user_name"] for u in online] == ["Alice Smith"]

    def test_activity_feed(self, client):
        _add(client)
        activities = client.get("/api/v1/activity", params={"limit": 5}, headers=ALICE).json()["activities"]
        assert activities[0]["action"] == "Created Document"

    def test_bootstrap(self, client):
        _add(client)
        body = client.get("/api/v1/bootstrap", headers=ALICE).json()
        assert body["success"] is True
        assert body["user"]["name"] == "Alice Smith"
        assert len(body["documents"]) == 1
        assert body["config"]["app_name"] == "Document Center"

    def test_bootstrap_requires_identity(self, client):
        response = client.get("/api/v1/bootstrap")
        assert response.status_code == 401
        assert response.json()["success"] is False
