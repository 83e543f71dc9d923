"""
Integration tests for the session HTTP API.

Covers the roster, group randomization, reset, and countdown endpoints,
with the timer driven by a fake scheduler.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from src.domain.services.enrollment import ENROLLMENTS_KEY
from src.infrastructure.repositories.storage import InMemoryKeyValueStorage

from tests.utils import FakeScheduler, enrollment_payload


def _enroll(client: TestClient, **overrides) -> dict:
    response = client.post("/enrollments", json=enrollment_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestEnrollmentRoutes:
    def test_create_enrollment(self, test_client: TestClient) -> None:
        body = _enroll(test_client, attachment_name="resume.pdf")

        assert body["id"]
        assert body["name"] == "Ada Lovelace"
        assert body["gender"] == "female"
        assert body["attachment_name"] == "resume.pdf"
        assert body["group"] is None

    def test_invalid_enrollment_returns_422(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/enrollments",
            json=enrollment_payload(age=0, gender="robot"),
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert "age" in detail["message"]
        assert "gender" in detail["message"]
        assert test_client.get("/enrollments").json()["count"] == 0

    def test_missing_fields_return_422(self, test_client: TestClient) -> None:
        response = test_client.post("/enrollments", json={"name": "Only Name"})

        assert response.status_code == 422

    def test_list_preserves_order(self, test_client: TestClient) -> None:
        created = [_enroll(test_client, name=f"P{i}")["id"] for i in range(3)]

        response = test_client.get("/enrollments")

        assert response.status_code == 200
        payload = response.json()
        assert payload["count"] == 3
        assert [item["id"] for item in payload["enrollments"]] == created

    def test_get_single_enrollment(self, test_client: TestClient) -> None:
        created = _enroll(test_client)

        response = test_client.get(f"/enrollments/{created['id']}")

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_get_unknown_enrollment_returns_404(self, test_client: TestClient) -> None:
        assert test_client.get("/enrollments/nope").status_code == 404

    def test_reset_clears_roster_and_groups(self, test_client: TestClient) -> None:
        for i in range(4):
            _enroll(test_client, name=f"P{i}")
        test_client.post("/groups/randomize")

        response = test_client.delete("/enrollments")

        assert response.status_code == 204
        assert test_client.get("/enrollments").json() == {"enrollments": [], "count": 0}
        groups = test_client.get("/groups").json()
        assert groups["group_a"] == []
        assert groups["group_b"] == []


class TestGroupRoutes:
    def test_randomize_five_enrollments(self, test_client: TestClient) -> None:
        ids = {_enroll(test_client, name=f"P{i}")["id"] for i in range(5)}

        response = test_client.post("/groups/randomize")

        assert response.status_code == 200
        body = response.json()
        assert body["empty"] is False
        assert len(body["group_a"]) == 3
        assert len(body["group_b"]) == 2
        assert {item["group"] for item in body["group_a"]} == {"A"}
        assert {item["group"] for item in body["group_b"]} == {"B"}
        assert {item["id"] for item in body["group_a"] + body["group_b"]} == ids
        assert body["message"] == "3 users in Group A, 2 users in Group B"

        current = test_client.get("/groups").json()
        assert [i["id"] for i in current["group_a"]] == [i["id"] for i in body["group_a"]]

    def test_randomize_empty_roster(self, test_client: TestClient) -> None:
        response = test_client.post("/groups/randomize")

        assert response.status_code == 200
        body = response.json()
        assert body["empty"] is True
        assert body["group_a"] == []
        assert body["group_b"] == []

    def test_groups_not_written_to_roster(self, test_client: TestClient) -> None:
        _enroll(test_client)
        test_client.post("/groups/randomize")

        roster = test_client.get("/enrollments").json()["enrollments"]

        assert roster[0]["group"] is None


class TestTimerRoutes:
    def test_initial_timer_is_idle(self, test_client: TestClient) -> None:
        body = test_client.get("/timer").json()

        assert body["phase"] == "idle"
        assert body["remaining_seconds"] == 0
        assert body["display"] == "00:00"

    def test_configure_and_start(self, test_client: TestClient, scheduler: FakeScheduler) -> None:
        configured = test_client.post("/timer/configure", json={"minutes": 1, "seconds": 30})
        assert configured.status_code == 200
        assert configured.json()["remaining_seconds"] == 90
        assert configured.json()["running"] is False
        assert configured.json()["display"] == "01:30"

        started = test_client.post("/timer/start")
        assert started.status_code == 200
        assert started.json()["running"] is True

        scheduler.advance(90)

        body = test_client.get("/timer").json()
        assert body["phase"] == "completed"
        assert body["remaining_seconds"] == 0
        assert body["running"] is False

    def test_zero_duration_rejected(self, test_client: TestClient) -> None:
        response = test_client.post("/timer/configure", json={"minutes": 0, "seconds": 0})

        assert response.status_code == 422
        assert test_client.get("/timer").json()["phase"] == "idle"

    def test_start_without_configuration_conflicts(self, test_client: TestClient) -> None:
        response = test_client.post("/timer/start")

        assert response.status_code == 409
        body = test_client.get("/timer").json()
        assert body["running"] is False
        assert body["remaining_seconds"] == 0


class TestEnrollmentPayloadHandling:
    def test_camel_case_attachment_name_is_kept(self, test_client: TestClient) -> None:
        payload = enrollment_payload()
        payload["attachmentName"] = "consent.pdf"

        response = test_client.post("/enrollments", json=payload)

        assert response.status_code == 201
        assert response.json()["attachment_name"] == "consent.pdf"

    def test_legacy_pdf_file_key_is_kept(self, test_client: TestClient) -> None:
        payload = enrollment_payload()
        payload["pdfFile"] = "legacy.pdf"

        response = test_client.post("/enrollments", json=payload)

        assert response.json()["attachment_name"] == "legacy.pdf"

    def test_long_name_is_accepted(self, test_client: TestClient) -> None:
        response = test_client.post("/enrollments", json=enrollment_payload(name="x" * 300))

        assert response.status_code == 201
        assert test_client.get("/enrollments").json()["count"] == 1

    def test_enroll_over_corrupt_storage_conflicts(
        self, test_client: TestClient, storage: InMemoryKeyValueStorage
    ) -> None:
        storage.entries[ENROLLMENTS_KEY] = "garbage"

        response = test_client.post("/enrollments", json=enrollment_payload())

        assert response.status_code == 409
        assert storage.entries[ENROLLMENTS_KEY] == "garbage"
