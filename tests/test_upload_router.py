"""
tests/test_upload_router.py

HTTP contract of POST /api/upload, using the fakes wired in conftest.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api import dependencies
from app.api.dependencies import get_identity_provider
from app.config import AuthSettings
from tests.conftest import CITIZEN_TOKEN, VERIFIER_TOKEN

WELL_FORMED = "name,registration_number,status\nAcme Ltd,SL-001,verified\n"


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _files(payload: str | bytes, filename: str = "businesses.csv") -> dict[str, tuple]:
    return {"file": (filename, payload, "text/csv")}


class TestRequestLevelErrors:
    def test_missing_file_is_rejected_before_auth(self, client, fake_session, identity_provider) -> None:
        response = client.post("/api/upload", headers=_auth(VERIFIER_TOKEN))

        assert response.status_code == 400
        assert response.json() == {"error": "No file provided"}
        assert fake_session.insert_calls == 0
        assert identity_provider.lookups == []

    def test_missing_file_without_credentials_is_still_400(self, client) -> None:
        response = client.post("/api/upload")
        assert response.status_code == 400
        assert response.json() == {"error": "No file provided"}

    def test_other_form_fields_do_not_count_as_a_file(self, client) -> None:
        response = client.post("/api/upload", data={"note": "hi"}, headers=_auth(VERIFIER_TOKEN))
        assert response.status_code == 400

    def test_missing_token_is_unauthorized(self, client, fake_session) -> None:
        response = client.post("/api/upload", files=_files(WELL_FORMED))

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert fake_session.insert_calls == 0

    def test_unknown_token_is_unauthorized(self, client, fake_session) -> None:
        response = client.post("/api/upload", files=_files(WELL_FORMED), headers=_auth("expired"))

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert fake_session.insert_calls == 0

    def test_non_bearer_authorization_is_unauthorized(self, client) -> None:
        response = client.post(
            "/api/upload",
            files=_files(WELL_FORMED),
            headers={"Authorization": f"Basic {VERIFIER_TOKEN}"},
        )
        assert response.status_code == 401

    def test_non_verifier_is_forbidden(self, client, fake_session) -> None:
        response = client.post("/api/upload", files=_files(WELL_FORMED), headers=_auth(CITIZEN_TOKEN))

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden - Verifier role required"}
        assert fake_session.insert_calls == 0
        assert fake_session.committed == []

    def test_undecodable_file_is_a_server_error(self, client) -> None:
        response = client.post(
            "/api/upload",
            files=_files(b"name,reg\n\xff\xfe\xfaAcme,SL-1\n"),
            headers=_auth(VERIFIER_TOKEN),
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Upload must be UTF-8 encoded text."}

    def test_unreadable_bytes_midway_keep_earlier_rows(self, client, fake_session) -> None:
        rows = [f"Business {n},SL-2020-{n:06d}\n" for n in range(4000)]
        payload = ("h\n" + "".join(rows)).encode("utf-8") + b"\xff\xfe\nTail Ltd,SL-2020-999999\n"

        response = client.post("/api/upload", files=_files(payload), headers=_auth(VERIFIER_TOKEN))

        assert response.status_code == 500
        assert response.json() == {"error": "Upload must be UTF-8 encoded text."}

        committed = [business.registration_number for business in fake_session.committed]
        assert 0 < len(committed) < len(rows)
        assert committed == [f"SL-2020-{n:06d}" for n in range(len(committed))]
        assert "SL-2020-999999" not in committed
        assert fake_session.staged == []


class TestUploadReport:
    def test_single_row_example(self, client, fake_session) -> None:
        response = client.post(
            "/api/upload",
            files=_files("name,reg,status\nAcme Ltd,SL-001,verified\n"),
            headers=_auth(VERIFIER_TOKEN),
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": 1,
            "failed": 0,
            "errors": [],
            "message": "Upload complete: 1 successful, 0 failed",
        }
        assert fake_session.registration_numbers() == {"SL-001"}

    def test_every_row_failing_is_still_200(self, client) -> None:
        payload = "h\n,SL-1\nAcme,\nBeta,SL-2,bogus\n"
        response = client.post("/api/upload", files=_files(payload), headers=_auth(VERIFIER_TOKEN))

        body = response.json()
        assert response.status_code == 200
        assert body["success"] == 0
        assert body["failed"] == 3
        assert [error["row"] for error in body["errors"]] == [2, 3, 4]
        assert body["message"] == "Upload complete: 0 successful, 3 failed"

    def test_duplicate_registration_number_in_store(self, client, fake_session) -> None:
        client.post("/api/upload", files=_files("h\nAcme,SL-001\n"), headers=_auth(VERIFIER_TOKEN))

        response = client.post(
            "/api/upload",
            files=_files("h\nAcme Duplicate,SL-001\n"),
            headers=_auth(VERIFIER_TOKEN),
        )

        body = response.json()
        assert (body["success"], body["failed"]) == (0, 1)
        assert body["errors"][0]["row"] == 2
        assert len(fake_session.committed) == 1

    def test_any_file_name_is_accepted(self, client) -> None:
        response = client.post(
            "/api/upload",
            files=_files("h\nAcme,SL-9\n", filename="export.txt"),
            headers=_auth(VERIFIER_TOKEN),
        )
        assert response.status_code == 200
        assert response.json()["success"] == 1


class TestIdentityProviderConfiguration:
    @pytest.fixture()
    def unconfigured_client(self, test_app, monkeypatch):
        test_app.dependency_overrides.pop(get_identity_provider)
        monkeypatch.setattr(dependencies, "get_auth_settings", lambda: AuthSettings())
        dependencies._build_identity_provider.cache_clear()
        yield TestClient(test_app)
        dependencies._build_identity_provider.cache_clear()

    def test_missing_auth_settings_reject_with_401(self, unconfigured_client, fake_session) -> None:
        response = unconfigured_client.post(
            "/api/upload",
            files=_files(WELL_FORMED),
            headers=_auth(VERIFIER_TOKEN),
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert fake_session.insert_calls == 0
