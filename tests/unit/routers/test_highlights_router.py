"""Tests for the highlights router."""
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from scripture_api.main import app
from scripture_api.auth import get_current_user_dependency


client = TestClient(app)

USER = {"id": 7, "name": "Ruth", "email": "ruth@example.com", "role": "user", "is_active": True}


@pytest.fixture(autouse=True)
def login():
    app.dependency_overrides[get_current_user_dependency] = lambda: USER
    yield
    app.dependency_overrides.clear()


class TestHighlightsRouter:

    def test_requires_authentication(self):
        app.dependency_overrides.clear()

        response = client.get("/api/highlights")

        assert response.status_code == 401

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_list_highlights(self, mock_repo):
        mock_repo.list_for_user.return_value = [{
            "id": 1, "user_id": 7, "verse_id": 100, "color_hex": "#ffff00",
            "book": "John", "chapter": 3, "verse_number": 16, "text": "For God so loved",
            "version_code": "KJV",
        }]

        response = client.get("/api/highlights")

        assert response.status_code == 200
        assert response.json()[0]["verse_number"] == 16
        mock_repo.list_for_user.assert_called_once_with(7)

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_list_failure(self, mock_repo):
        mock_repo.list_for_user.side_effect = Exception("db down")

        response = client.get("/api/highlights")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch highlights"

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_create_highlight(self, mock_repo):
        mock_repo.verse_exists.return_value = True
        mock_repo.create.return_value = {"id": 12, "note": "remember"}

        response = client.post("/api/highlights", json={"verse_id": 100, "note": "remember"})

        assert response.status_code == 200
        assert response.json() == {"id": 12, "note": "remember", "message": "Highlight created successfully"}
        kwargs = mock_repo.create.call_args[1]
        assert kwargs["user_id"] == 7
        assert kwargs["color_hex"] == "#ffff00"

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_create_for_unknown_verse(self, mock_repo):
        mock_repo.verse_exists.return_value = False

        response = client.post("/api/highlights", json={"verse_id": 999})

        assert response.status_code == 400
        assert response.json()["detail"] == "Verse not found"
        mock_repo.create.assert_not_called()

    def test_create_rejects_negative_offset(self):
        response = client.post("/api/highlights", json={"verse_id": 1, "start_offset": -1})

        assert response.status_code == 422

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_update_only_sent_fields(self, mock_repo):
        mock_repo.update.return_value = True

        response = client.put("/api/highlights/12", json={"color_hex": "#00ff00"})

        assert response.status_code == 200
        mock_repo.update.assert_called_once_with(12, 7, {"color_hex": "#00ff00"})

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_update_rejects_null_color(self, mock_repo):
        response = client.put("/api/highlights/12", json={"color_hex": None})

        assert response.status_code == 422
        mock_repo.update.assert_not_called()

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_update_allows_clearing_note(self, mock_repo):
        mock_repo.update.return_value = True

        response = client.put("/api/highlights/12", json={"note": None})

        assert response.status_code == 200
        mock_repo.update.assert_called_once_with(12, 7, {"note": None})

    def test_update_without_fields(self):
        response = client.put("/api/highlights/12", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "No fields to update"

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_update_not_owned(self, mock_repo):
        mock_repo.update.return_value = False

        response = client.put("/api/highlights/12", json={"note": "x"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Highlight not found or not owned by user"

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_delete_highlight(self, mock_repo):
        mock_repo.delete.return_value = True

        response = client.delete("/api/highlights/12")

        assert response.status_code == 200
        assert response.json()["message"] == "Highlight deleted successfully"

    @patch("scripture_api.routers.highlights.HighlightsRepository")
    def test_delete_not_owned(self, mock_repo):
        mock_repo.delete.return_value = False

        response = client.delete("/api/highlights/12")

        assert response.status_code == 404
