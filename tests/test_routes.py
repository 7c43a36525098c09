# =============================================================================
# tests/test_routes.py - API Endpoint Tests
# =============================================================================
# Exercises the HTTP surface through FastAPI's TestClient with real HS256
# tokens, an in-memory record store and a mocked Gemini SDK.
#
# Checks in particular that:
# - a missing token is a 401 on every endpoint
# - "not found" and "someone else's" render the same 404 body
# =============================================================================

import base64

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_gemini_client, get_record_store
from app.main import app
from tests.conftest import EDITED_BYTES, PRODUCT_BYTES, image_response, make_token, text_response

PRODUCT_B64 = base64.b64encode(PRODUCT_BYTES).decode()

ALICE = {"Authorization": f"Bearer {make_token('user-alice', email='alice@example.com')}"}
BOB = {"Authorization": f"Bearer {make_token('user-bob', email='bob@example.com')}"}


@pytest.fixture
def client(store, gemini):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_project(client, name="Shoes", headers=ALICE) -> dict:
    response = client.post("/api/v1/projects", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Auth
# =============================================================================

class TestAuthEndpoints:
    """Test /auth endpoints and the 401 path."""

    def test_me(self, client):
        response = client.get("/api/v1/auth/me", headers=ALICE)

        assert response.status_code == 200
        assert response.json() == {"id": "user-alice", "email": "alice@example.com"}

    def test_me_without_token(self, client):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/projects", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/v1/projects"),
        ("get", "/api/v1/projects/some-id"),
        ("delete", "/api/v1/projects/some-id"),
        ("get", "/api/v1/images"),
        ("get", "/api/v1/images/some-id"),
    ])
    def test_anonymous_requests_rejected(self, client, method, path):
        assert getattr(client, method)(path).status_code == 401


# =============================================================================
# Projects and images
# =============================================================================

class TestProjectEndpoints:
    """Test project CRUD over HTTP."""

    def test_create_and_list(self, client):
        first = create_project(client, "A")
        second = create_project(client, "B")

        response = client.get("/api/v1/projects", headers=ALICE)

        assert [p["id"] for p in response.json()] == [second["id"], first["id"]]

    def test_blank_name(self, client):
        response = client.post("/api/v1/projects", json={"name": "   "}, headers=ALICE)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_rename(self, client):
        project = create_project(client)

        response = client.patch(f"/api/v1/projects/{project['id']}", json={"name": "Boots"}, headers=ALICE)

        assert response.status_code == 200
        assert response.json()["name"] == "Boots"

    def test_foreign_and_missing_look_the_same(self, client):
        """A caller cannot tell someone else's project from a missing one."""
        project = create_project(client)

        foreign = client.get(f"/api/v1/projects/{project['id']}", headers=BOB)
        missing = client.get("/api/v1/projects/does-not-exist", headers=BOB)

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()
        assert foreign.json()["code"] == "NOT_FOUND"

    def test_delete_cascades(self, client):
        project = create_project(client)
        saved = client.post(
            f"/api/v1/projects/{project['id']}/images",
            json={"original_image_url": "data:o", "edited_image_url": "data:e", "prompt": "grey"},
            headers=ALICE,
        ).json()

        response = client.delete(f"/api/v1/projects/{project['id']}", headers=ALICE)

        assert response.json() == {"success": True, "project_id": project["id"]}
        assert client.get(f"/api/v1/images/{saved['id']}", headers=ALICE).status_code == 404
        assert client.get(f"/api/v1/projects/{project['id']}", headers=ALICE).status_code == 404
        assert client.get(f"/api/v1/projects/{project['id']}/images", headers=ALICE).status_code == 404

    def test_save_image_into_foreign_project(self, client):
        project = create_project(client)

        response = client.post(
            f"/api/v1/projects/{project['id']}/images",
            json={"original_image_url": "data:o", "edited_image_url": "data:e"},
            headers=BOB,
        )

        assert response.status_code == 404
        assert client.get(f"/api/v1/projects/{project['id']}/images", headers=ALICE).json() == []

    def test_image_listing_and_delete(self, client):
        project = create_project(client)
        saved = client.post(
            f"/api/v1/projects/{project['id']}/images",
            json={"original_image_url": "data:o", "edited_image_url": "data:e"},
            headers=ALICE,
        ).json()

        assert [i["id"] for i in client.get("/api/v1/images", headers=ALICE).json()] == [saved["id"]]
        assert client.get("/api/v1/images", headers=BOB).json() == []
        assert client.delete(f"/api/v1/images/{saved['id']}", headers=BOB).status_code == 404

        response = client.delete(f"/api/v1/images/{saved['id']}", headers=ALICE)

        assert response.json() == {"success": True, "image_id": saved["id"]}

    def test_save_variation(self, client):
        project = create_project(client)

        response = client.post(
            f"/api/v1/projects/{project['id']}/variations",
            json={
                "original_image_url": "data:o",
                "variation": {"style": "beach", "image_data": "data:image/png;base64,AAAA"},
            },
            headers=ALICE,
        )

        assert response.status_code == 201
        assert response.json()["prompt"] == "beach"


# =============================================================================
# Edits
# =============================================================================

class TestEditEndpoints:
    """Test the Gemini-backed endpoints."""

    def test_edit_background(self, client):
        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "prompt": "grey"},
            headers=ALICE,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["image_data"] == "data:image/png;base64," + base64.b64encode(EDITED_BYTES).decode()
        assert body["image_id"] is None

    def test_edit_and_save(self, client):
        project = create_project(client)

        response = client.post(
            "/api/v1/edits/background",
            json={
                "image_base64": f"data:image/jpeg;base64,{PRODUCT_B64}",
                "mime_type": "image/jpeg",
                "prompt": "  marble  ",
                "project_id": project["id"],
            },
            headers=ALICE,
        )

        image_id = response.json()["image_id"]
        saved = client.get(f"/api/v1/images/{image_id}", headers=ALICE).json()
        assert saved["prompt"] == "marble"
        assert saved["original_image_url"] == f"data:image/jpeg;base64,{PRODUCT_B64}"

    def test_edit_into_foreign_project_skips_model(self, client, sdk):
        project = create_project(client)

        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "prompt": "grey", "project_id": project["id"]},
            headers=BOB,
        )

        assert response.status_code == 404
        sdk.aio.models.generate_content.assert_not_called()

    def test_no_image_returned(self, client, sdk):
        sdk.aio.models.generate_content.return_value = image_response(None)

        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "prompt": "grey"},
            headers=ALICE,
        )

        assert response.status_code == 502
        assert response.json()["code"] == "NO_IMAGE_RETURNED"

    def test_missing_api_key(self, client, unconfigured_gemini):
        app.dependency_overrides[get_gemini_client] = lambda: unconfigured_gemini

        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "prompt": "grey"},
            headers=ALICE,
        )

        assert response.status_code == 503
        assert response.json()["code"] == "UPSTREAM_CONFIG_ERROR"

    def test_invalid_base64(self, client):
        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": "%%%", "mime_type": "image/png", "prompt": "grey"},
            headers=ALICE,
        )

        assert response.status_code == 400

    def test_unsupported_mime_type(self, client):
        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/gif", "prompt": "grey"},
            headers=ALICE,
        )

        assert response.status_code == 422

    def test_anonymous_edit(self, client, sdk):
        response = client.post(
            "/api/v1/edits/background",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "prompt": "grey"},
        )

        assert response.status_code == 401
        sdk.aio.models.generate_content.assert_not_called()

    def test_suggestions(self, client, sdk):
        sdk.aio.models.generate_content.return_value = text_response("studio, beach")

        response = client.post(
            "/api/v1/edits/suggestions",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png"},
            headers=ALICE,
        )

        assert response.json() == {"success": True, "suggestions": ["studio", "beach"]}

    def test_variations(self, client):
        response = client.post(
            "/api/v1/edits/variations",
            json={"image_base64": PRODUCT_B64, "mime_type": "image/png", "background_styles": ["studio", "beach"]},
            headers=ALICE,
        )

        assert response.status_code == 200
        body = response.json()
        assert [v["style"] for v in body["variations"]] == ["studio", "beach"]
        assert body["failures"] == []


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Test health endpoints."""

    def test_health(self, client):
        assert client.get("/api/v1/health").json()["status"] == "healthy"

    def test_ready(self, client):
        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"] == {"record_store": "healthy", "gemini": "configured"}

    def test_degraded_without_gemini_key(self, client, unconfigured_gemini):
        app.dependency_overrides[get_gemini_client] = lambda: unconfigured_gemini

        assert client.get("/api/v1/health/ready").json()["status"] == "degraded"
