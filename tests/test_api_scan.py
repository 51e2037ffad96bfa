# tests/test_api_scan.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from scan_attendance.config import Settings
from scan_attendance.main import create_app
from tests.fakes import FailingDatabase, db_error


def test_record_scan_created(client):
    r = client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T09:00:00Z"})
    assert r.status_code == 201
    j = r.json()
    assert j["success"] is True
    assert j["message"] == "Scan recorded successfully"
    assert j["data"]["employeeId"] == "EMP001"
    assert j["data"]["scanDateTime"] == "2024-01-15T09:00:00Z"
    assert j["data"]["scanType"] == "UNKNOWN"
    recorded = datetime.fromisoformat(j["data"]["recordedAt"].replace("Z", "+00:00"))
    assert recorded.tzinfo is not None


def test_short_employee_id_rejected(client):
    r = client.post("/api/scan", json={"employeeId": "AB", "scanDateTime": "2024-01-15T09:00:00Z"})
    assert r.status_code == 400
    j = r.json()
    assert j["success"] is False
    assert "between 3 and 50 characters" in j["message"]
    assert j["errorCode"] == "EFORMAT"
    assert client.get("/api/scans").json()["count"] == 0


def test_missing_fields_rejected(client):
    r = client.post("/api/scan", json={"employeeId": "EMP001"})
    assert r.status_code == 400
    assert r.json()["message"] == "Employee ID and scan time are required"
    assert r.json()["errorCode"] == "EMISSING"


def test_missing_body_is_missing_field(client):
    r = client.post("/api/scan")
    assert r.status_code == 400
    assert r.json()["errorCode"] == "EMISSING"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"content": b"{not json", "headers": {"content-type": "application/json"}},
        {"json": {"employeeId": 12345, "scanDateTime": "2024-01-15T09:00:00Z"}},
    ],
)
def test_malformed_body_is_invalid_format_not_422(client, kwargs):
    r = client.post("/api/scan", **kwargs)
    assert r.status_code == 400
    j = r.json()
    assert j["success"] is False
    assert j["errorCode"] == "EFORMAT"


def test_unparseable_timestamp_rejected(client):
    r = client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "not-a-date"})
    assert r.status_code == 400
    assert r.json()["errorCode"] == "EFORMAT"


def test_list_scans_newest_first(client):
    for ts in ("2024-01-15T08:00:00Z", "2024-01-15T10:00:00Z", "2024-01-15T09:00:00Z"):
        assert client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": ts}).status_code == 201

    j = client.get("/api/scans").json()
    assert j["success"] is True
    assert j["count"] == 3
    assert [s["scanDateTime"] for s in j["scans"]] == [
        "2024-01-15T10:00:00.000Z",
        "2024-01-15T09:00:00.000Z",
        "2024-01-15T08:00:00.000Z",
    ]
    assert all(s["deviceInfo"] == "Mobile Scanner" for s in j["scans"])


def test_list_scans_caps_at_limit(db):
    client = TestClient(create_app(db=db))
    for minute in range(55):
        client.post("/api/scan", json={"employeeId": "EMP001",
                                       "scanDateTime": f"2024-01-15T09:{minute:02d}:00Z"})
    j = client.get("/api/scans").json()
    assert j["count"] == 50
    assert j["scans"][0]["scanDateTime"] == "2024-01-15T09:54:00.000Z"


def test_list_by_employee(client):
    client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T08:00:00Z"})
    client.post("/api/scan", json={"employeeId": "EMP002", "scanDateTime": "2024-01-15T08:30:00Z"})
    client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T17:00:00Z",
                                   "scanType": "EXIT"})

    j = client.get("/api/scans/EMP001").json()
    assert j["employeeId"] == "EMP001"
    assert j["count"] == 2
    assert [s["scanType"] for s in j["scans"]] == ["EXIT", "UNKNOWN"]
    assert client.get("/api/scans/NOBODY").json()["count"] == 0


def test_same_candidate_twice_gives_two_records(client):
    body = {"employeeId": "EMP001", "scanDateTime": "2024-01-15T09:00:00Z"}
    client.post("/api/scan", json=body)
    client.post("/api/scan", json=body)
    assert client.get("/api/scans/EMP001").json()["count"] == 2


@pytest.mark.parametrize(
    "code, status, error_code",
    [(1045, 401, "ELOGIN"), (2003, 503, "ESOCKET"), (547, 400, "EREFERENCE"),
     (208, 500, "ESCHEMA"), (42, 500, "EUNKNOWN")],
)
def test_storage_fault_status_mapping(settings, code, status, error_code):
    client = TestClient(create_app(db=FailingDatabase(settings, db_error(code, "native detail"))))
    r = client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T09:00:00Z"})
    assert r.status_code == status
    j = r.json()
    assert j["success"] is False
    assert j["errorCode"] == error_code
    assert "native detail" in j["error"]


def test_unreachable_host_returns_503():
    # nothing listens on port 1; the driver reports a socket-class failure
    settings = Settings(DB_URL="mysql+pymysql://user:pw@127.0.0.1:1/attendance")
    client = TestClient(create_app(settings=settings))
    r = client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T09:00:00Z"})
    assert r.status_code == 503
    assert r.json()["errorCode"] == "ESOCKET"


def test_list_failure_is_storage_unavailable(settings):
    client = TestClient(create_app(db=FailingDatabase(settings, db_error(2003))))
    for path in ("/api/scans", "/api/scans/EMP001"):
        r = client.get(path)
        assert r.status_code == 503
        assert r.json()["success"] is False
        assert r.json()["errorCode"] == "EUNAVAILABLE"


def test_health_connected(client):
    j = client.get("/api/health").json()
    assert j["status"] == "ok"
    assert j["database"] == "connected"
    assert j["uptime"] >= 0


def test_health_disconnected(settings):
    client = TestClient(create_app(db=FailingDatabase(settings, db_error(2003, "Can't connect"))))
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["database"] == "disconnected"
    assert "Can't connect" in r.json()["message"]


def test_service_info(client):
    j = client.get("/").json()
    assert j["endpoints"]["scan"] == "POST /api/scan"


def test_out_of_range_timestamp_rejected(client):
    r = client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "0001-01-01T00:00:00+01:00"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["errorCode"] == "EFORMAT"


@pytest.mark.parametrize("employee_id, encoded", [("EMP/001", "EMP%2F001"), ("EMP?001", "EMP%3F001"),
                                                  ("EMP#001", "EMP%23001")])
def test_list_by_employee_with_reserved_characters(client, employee_id, encoded):
    r = client.post("/api/scan", json={"employeeId": employee_id, "scanDateTime": "2024-01-15T09:00:00Z"})
    assert r.status_code == 201
    client.post("/api/scan", json={"employeeId": "EMP001", "scanDateTime": "2024-01-15T09:00:00Z"})

    r = client.get(f"/api/scans/{encoded}")
    assert r.status_code == 200
    j = r.json()
    assert j["employeeId"] == employee_id
    assert j["count"] == 1
    assert j["scans"][0]["employeeId"] == employee_id
