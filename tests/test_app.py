from __future__ import annotations

import sqlite3
import threading
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import load_workbook

from app import create_app

BRANCH_A = "บึงทับช้าง"
BRANCH_B = "บัวใหญ่"


@pytest.fixture()
def app(tmp_path: Path):
    return create_app({
        "TESTING": True,
        "DATABASE": str(tmp_path / "test.sqlite"),
    })


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


def _add(client, **fields):
    payload = {"name": "Somchai", "position": "แพทย์แผนไทย", "branch": BRANCH_A, "type": "full-time"}
    payload.update(fields)
    return client.post("/api/employees", json=payload)


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.data == b"OK"


def test_schedule_page_renders(client):
    _add(client)
    response = client.get("/schedule?month=2025-06")
    assert response.status_code == 200
    assert "Somchai" in response.get_data(as_text=True)


def test_employee_crud(client):
    created = _add(client)
    assert created.status_code == 201
    assert created.get_json()["employee"]["id"] == "emp1"

    helper = _add(client, name="Malee", type="part-time", branch="")
    assert helper.get_json()["employee"]["branch"] == "พาร์ทไทม์"

    listed = client.get(f"/api/employees?branch={BRANCH_B}").get_json()["employees"]
    assert [emp["id"] for emp in listed] == ["pte1"]

    updated = client.put("/api/employees/emp1", json={
        "name": "Somchai K.", "position": "แพทย์แผนไทย", "branch": BRANCH_B, "type": "full-time",
    })
    assert updated.status_code == 200
    assert updated.get_json()["employee"]["branch"] == BRANCH_B


def test_missing_fields_return_prompt(client):
    response = _add(client, name="")
    assert response.status_code == 422
    assert response.get_json()["prompt"]["title"] == "ข้อมูลไม่ครบถ้วน"


def test_delete_requires_confirmation(client):
    _add(client)
    client.post("/api/schedule/cell", json={"employee_id": "emp1", "date": "2025-06-02", "value": "morning"})

    first = client.delete("/api/employees/emp1")
    assert first.status_code == 409
    assert first.get_json()["prompt"]["show_cancel"] is True
    assert len(client.get("/api/employees").get_json()["employees"]) == 1

    confirmed = client.delete("/api/employees/emp1?confirm=true")
    assert confirmed.get_json() == {"deleted": True}
    assert client.get("/api/employees").get_json()["employees"] == []
    assert client.delete("/api/employees/emp1").status_code == 404


def test_part_time_conflict_returns_prompt(client):
    _add(client, name="Malee", type="part-time", branch="")
    ok = client.post("/api/schedule/cell", json={
        "employee_id": "pte1", "date": "2025-06-02", "value": "morning", "branch": BRANCH_A,
    })
    assert ok.status_code == 200
    assert ok.get_json()["effective"] == "morning"
    assert ok.get_json()["headcount"] == 1

    conflict = client.post("/api/schedule/cell", json={
        "employee_id": "pte1", "date": "2025-06-02", "value": "afternoon", "branch": BRANCH_B,
    })
    assert conflict.status_code == 409
    body = conflict.get_json()
    assert body["ok"] is False
    assert body["effective"] == ""
    assert BRANCH_A in body["prompt"]["message"]


def test_cell_on_clinic_day_off_is_rejected(client):
    _add(client)
    response = client.post("/api/schedule/cell", json={"employee_id": "emp1", "date": "2025-06-01", "value": "morning"})
    assert response.status_code == 409
    assert response.get_json()["effective"] == "clinic-closed"


def test_cell_errors(client):
    _add(client)
    assert client.post("/api/schedule/cell", json={"employee_id": "emp1"}).status_code == 400
    assert client.post("/api/schedule/cell", json={
        "employee_id": "emp1", "date": "2025-06-02", "value": "nap",
    }).status_code == 400
    assert client.post("/api/schedule/cell", json={
        "employee_id": "emp9", "date": "2025-06-02", "value": "morning",
    }).status_code == 404


def test_schedule_grid_and_settings(client):
    _add(client)
    settings = client.post("/api/settings", json={"clinic_day_off": "none", "branch": BRANCH_A})
    assert settings.status_code == 200
    assert settings.get_json()["clinic_day_off"] == "none"
    assert client.post("/api/settings", json={"clinic_day_off": "someday"}).status_code == 400

    client.post("/api/schedule/cell", json={"employee_id": "emp1", "date": "2025-06-01", "value": "sick"})
    grid = client.get(f"/api/schedule?month=2025-06&branch={BRANCH_A}").get_json()
    assert grid["month"] == "2025-06"
    assert grid["cells"]["emp1"]["1"] == "sick"
    assert client.get("/api/schedule?month=June").status_code == 400

    moved = client.post("/api/schedule/month", json={"delta": 1}).get_json()
    assert moved["month"] == "2025-07"


def test_exports(client):
    _add(client)
    client.get("/api/schedule?month=2025-06")
    client.post("/api/schedule/cell", json={"employee_id": "emp1", "date": "2025-06-02", "value": "morning"})

    xlsx = client.get("/api/export/xlsx")
    assert xlsx.status_code == 200
    assert "spreadsheetml" in xlsx.headers["Content-Type"]
    ws = load_workbook(BytesIO(xlsx.data)).active
    assert ws.cell(row=3, column=3).value == "เช้า"

    csv_response = client.get(f"/api/export/csv?branch={BRANCH_A}")
    assert csv_response.status_code == 200
    assert csv_response.data.startswith(b"\xef\xbb\xbf")
    assert client.get("/api/export/csv?branch=nowhere").status_code == 400


def test_state_survives_restart(tmp_path: Path):
    config = {"TESTING": True, "DATABASE": str(tmp_path / "shared.sqlite")}
    with create_app(config).test_client() as first:
        _add(first)
    with create_app(config).test_client() as second:
        employees = second.get("/api/employees").get_json()["employees"]
    assert [emp["id"] for emp in employees] == ["emp1"]


def test_init_db_command(app, tmp_path: Path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["init-db", "--force"])
    assert "Database initialized." in result.output
    assert (tmp_path / "test.sqlite").exists()


def test_app_starts_empty_on_corrupt_document(tmp_path: Path):
    db_path = tmp_path / "broken.sqlite"
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "CREATE TABLE documents (id INTEGER PRIMARY KEY AUTOINCREMENT, collection TEXT NOT NULL, "
            "doc_id TEXT NOT NULL, payload_json TEXT NOT NULL, saved_at TEXT NOT NULL DEFAULT (datetime('now')), "
            "UNIQUE(collection, doc_id))"
        )
        conn.execute(
            "INSERT INTO documents(collection, doc_id, payload_json) VALUES ('schedules', 'current', '{not json')"
        )

    app = create_app({"TESTING": True, "DATABASE": str(db_path)})
    with app.test_client() as client:
        assert client.get("/api/employees").get_json() == {"employees": []}
        page = client.get("/schedule")
    assert page.status_code == 200
    assert "โหลดข้อมูลไม่สำเร็จ" in page.get_data(as_text=True)


def test_concurrent_invalid_adds_each_get_their_prompt(app):
    responses = []
    start = threading.Barrier(4)

    def post_invalid():
        with app.test_client() as client:
            start.wait()
            for _ in range(10):
                responses.append(client.post("/api/employees", json={"name": "", "position": "x", "type": "full-time"}))

    threads = [threading.Thread(target=post_invalid) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(responses) == 40
    assert {response.status_code for response in responses} == {422}
    assert all(response.get_json()["prompt"]["title"] == "ข้อมูลไม่ครบถ้วน" for response in responses)
