"""
Tests for the role API endpoints.

Runs the real stack against an in-memory database. Business failures
answer 200 with their own error code; infrastructure failures answer 500.
"""

from unittest.mock import MagicMock

from kiosk_api.domain.role.errors import ROLE_NAME_EMPTY, ROLE_NOT_FOUND
from kiosk_api.domain.role.ports import RoleRepository
from kiosk_api.interfaces.role.dependencies import get_role_repository
from kiosk_api.shared.errors.types import DatabaseError, DatabaseErrorKind


class TestListRoles:
    """Tests for GET /role/all."""

    def test_lists_roles_ordered_by_id(self, client, seeded_roles) -> None:
        response = client.get("/role/all")
        body = response.json()
        assert response.status_code == 200
        assert body["errorCode"] == "0"
        assert body["message"] == "Success"
        assert [(r["id"], r["role_code"], r["role_name"]) for r in body["data"]] == seeded_roles

    def test_record_fields(self, client, seeded_roles) -> None:
        record = client.get("/role/all").json()["data"][0]
        assert set(record) == {"id", "role_code", "role_name", "created_at", "updated_at"}
        assert record["created_at"] is not None

    def test_empty_table(self, client) -> None:
        body = client.get("/role/all").json()
        assert body == {"errorCode": "0", "message": "Success", "data": []}


class TestUpdateRole:
    """Tests for POST /role/update/{roleId}."""

    def test_rename_round_trip(self, client, seeded_roles) -> None:
        response = client.post("/role/update/2", json={"roleName": "supervisor"})
        body = response.json()
        assert response.status_code == 200
        assert body["errorCode"] == "0"
        assert body["data"]["id"] == 2
        assert body["data"]["role_name"] == "supervisor"

        names = {r["id"]: r["role_name"] for r in client.get("/role/all").json()["data"]}
        assert names == {1: "admin", 2: "supervisor", 3: "guest"}

    def test_unknown_role(self, client, seeded_roles) -> None:
        response = client.post("/role/update/99", json={"roleName": "ghost"})
        assert response.status_code == 200
        assert response.json() == {
            "errorCode": ROLE_NOT_FOUND,
            "message": "Role 99 not found.",
            "data": None,
        }

    def test_blank_name(self, client, seeded_roles) -> None:
        response = client.post("/role/update/1", json={"roleName": "   "})
        body = response.json()
        assert response.status_code == 200
        assert body["errorCode"] == ROLE_NAME_EMPTY
        assert body["data"] is None

    def test_missing_name_is_blank(self, client, seeded_roles) -> None:
        response = client.post("/role/update/1", json={})
        assert response.json()["errorCode"] == ROLE_NAME_EMPTY

    def test_unknown_role_reported_before_blank_name(self, client, seeded_roles) -> None:
        response = client.post("/role/update/99", json={"roleName": ""})
        assert response.json()["errorCode"] == ROLE_NOT_FOUND

    def test_non_numeric_id_rejected(self, client, seeded_roles) -> None:
        response = client.post("/role/update/abc", json={"roleName": "x"})
        assert response.status_code == 422

    def test_database_failure(self, app, client) -> None:
        repo = MagicMock(spec=RoleRepository)
        repo.get_by_id.side_effect = DatabaseError(
            DatabaseErrorKind.CONNECTIVITY, "connection refused by 10.0.0.9"
        )
        app.dependency_overrides[get_role_repository] = lambda: repo

        response = client.post("/role/update/1", json={"roleName": "x"})

        app.dependency_overrides.clear()
        body = response.json()
        assert response.status_code == 500
        assert set(body) == {"message"}
        assert body["message"].endswith("Connection Database Fail.")
        assert "10.0.0.9" not in body["message"]

    def test_name_stored_as_sent(self, client, seeded_roles) -> None:
        response = client.post("/role/update/3", json={"roleName": " visitor "})
        assert response.json()["data"]["role_name"] == " visitor "

        names = {r["id"]: r["role_name"] for r in client.get("/role/all").json()["data"]}
        assert names[3] == " visitor "
