"""
Tests for the /libros HTTP routes.

These tests cover:
1. The role matrix (401 without credentials, 403 for the wrong role)
2. Mapping of catalog results and errors to HTTP responses
3. The public status and info endpoints
"""

import logging

import pytest

from library_catalog.api.auth import create_access_token
from library_catalog.api.routes import (
    AVAILABILITY_UPDATED_MESSAGE,
    INVALID_BODY_MESSAGE,
    STATUS_MESSAGE,
)

PROTECTED_READS = ["/libros/1", "/libros/1/disponible", "/libros/buscar?criterio=Cien"]


class TestPublicRoutes:
    def test_status_needs_no_credentials(self, client):
        response = client.get("/libros/public/status")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == STATUS_MESSAGE

    def test_info(self, client, test_config):
        response = client.get("/libros/public/info")

        assert response.status_code == 200
        info = response.json()
        assert info["service"] == "Catálogo Service"
        assert info["version"] == test_config.server_version
        assert info["status"] == "ACTIVE"
        assert len(info["endpoints"]) == 6
        assert any(role.startswith("ROLE_LIBRARIAN") for role in info["roles"])


class TestAuthentication:
    @pytest.mark.parametrize("path", PROTECTED_READS)
    def test_missing_credentials(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.parametrize(
        "header",
        ["Bearer not-a-jwt", "Basic YW5hOnNlY3JldA==", "Bearer"],
    )
    def test_invalid_credentials(self, client, header):
        response = client.get("/libros/1", headers={"Authorization": header})

        assert response.status_code == 401

    def test_token_with_wrong_secret(self, client, test_config):
        original = test_config.jwt_secret_key
        test_config.jwt_secret_key = "another-secret-that-is-long-enough-too"
        token = create_access_token("mallory", ["LIBRARIAN"])
        test_config.jwt_secret_key = original

        response = client.get("/libros/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_without_known_roles(self, client):
        token = create_access_token("nobody", [])

        response = client.get("/libros/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    @pytest.mark.parametrize("path", PROTECTED_READS)
    def test_both_roles_can_read(self, client, librarian_headers, user_headers, path):
        assert client.get(path, headers=librarian_headers).status_code == 200
        assert client.get(path, headers=user_headers).status_code == 200

    def test_user_cannot_update_availability(self, client, user_headers):
        response = client.put("/libros/1/disponibilidad", json=False, headers=user_headers)

        assert response.status_code == 403
        # Nothing changed
        assert client.get("/libros/1/disponible", headers=user_headers).json() is True

    def test_update_requires_credentials(self, client):
        assert client.put("/libros/1/disponibilidad", json=False).status_code == 401


class TestGetBook:
    def test_returns_book_json(self, client, user_headers):
        response = client.get("/libros/1", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "1"
        assert body["title"] == "Cien años de soledad"
        assert body["isbn"] == "978-0307474728"
        assert body["category"] == "Realismo mágico"
        assert body["available"] is True
        assert [a["name"] for a in body["authors"]] == ["Gabriel García Márquez"]

    def test_unknown_book_is_404(self, client, user_headers):
        response = client.get("/libros/999", headers=user_headers)

        assert response.status_code == 404
        assert "999" in response.json()["detail"]

    def test_unknown_book_is_not_logged_as_error(self, client, user_headers, caplog):
        with caplog.at_level(logging.ERROR):
            response = client.get("/libros/999", headers=user_headers)

        assert response.status_code == 404
        assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []


class TestAvailability:
    def test_available_book(self, client, user_headers):
        assert client.get("/libros/1/disponible", headers=user_headers).json() is True

    def test_unavailable_book(self, client, user_headers):
        assert client.get("/libros/4/disponible", headers=user_headers).json() is False

    def test_unknown_book_reads_false(self, client, user_headers):
        response = client.get("/libros/999/disponible", headers=user_headers)

        assert response.status_code == 200
        assert response.json() is False

    @pytest.mark.parametrize("value", [False, True])
    def test_librarian_sets_availability(self, client, librarian_headers, value):
        response = client.put("/libros/1/disponibilidad", json=value, headers=librarian_headers)

        assert response.status_code == 200
        assert response.text == AVAILABILITY_UPDATED_MESSAGE
        assert client.get("/libros/1/disponible", headers=librarian_headers).json() is value

    def test_set_is_idempotent(self, client, librarian_headers):
        for _ in range(2):
            response = client.put(
                "/libros/4/disponibilidad", json=False, headers=librarian_headers
            )
            assert response.status_code == 200

        assert client.get("/libros/4/disponible", headers=librarian_headers).json() is False

    def test_set_unknown_book_is_404(self, client, librarian_headers):
        response = client.put("/libros/999/disponibilidad", json=True, headers=librarian_headers)

        assert response.status_code == 404

    def test_set_unknown_book_is_not_logged_as_error(self, client, librarian_headers, caplog):
        with caplog.at_level(logging.ERROR):
            response = client.put(
                "/libros/999/disponibilidad", json=True, headers=librarian_headers
            )

        assert response.status_code == 404
        assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []

    def test_update_is_logged_with_caller(self, client, librarian_headers, caplog):
        with caplog.at_level(logging.INFO, logger="library_catalog.api.routes"):
            client.put("/libros/1/disponibilidad", json=False, headers=librarian_headers)

        assert "Availability of book 1 set to False by ana" in caplog.messages

    @pytest.mark.parametrize("body", [b"", b"not json", b'"true"', b"1", b'{"disponible": true}'])
    def test_non_boolean_body_is_400(self, client, librarian_headers, body):
        response = client.put(
            "/libros/1/disponibilidad",
            content=body,
            headers={**librarian_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == INVALID_BODY_MESSAGE


class TestSearch:
    def test_search_by_title(self, client, user_headers):
        response = client.get("/libros/buscar", params={"criterio": "Cien"}, headers=user_headers)

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == ["1"]

    def test_search_by_author(self, client, user_headers):
        response = client.get(
            "/libros/buscar", params={"criterio": "garcía márquez"}, headers=user_headers
        )

        assert [b["title"] for b in response.json()] == [
            "Antología",
            "Cien años de soledad",
            "Crónica de una muerte anunciada",
            "El amor en los tiempos del cólera",
        ]

    def test_no_match_is_empty_list(self, client, user_headers):
        response = client.get("/libros/buscar", params={"criterio": "zzz"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_empty_criterio_is_empty_list(self, client, user_headers):
        response = client.get("/libros/buscar", params={"criterio": ""}, headers=user_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_missing_criterio_is_400(self, client, user_headers):
        response = client.get("/libros/buscar", headers=user_headers)

        assert response.status_code == 400

    def test_buscar_is_not_treated_as_book_id(self, client, user_headers):
        # /libros/buscar must never be routed to the book lookup
        response = client.get("/libros/buscar", params={"criterio": "x"}, headers=user_headers)

        assert isinstance(response.json(), list)
