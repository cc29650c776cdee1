from datetime import datetime
from io import BytesIO

import openpyxl
import pytest
from fastapi.testclient import TestClient

import config
import main
from main import app

client = TestClient(app)

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def create_schedule_workbook():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Time Period: 08/03/2025 - 08/05/2025"])
    ws.append(["Employee", "Position", datetime(2025, 8, 3), datetime(2025, 8, 4), datetime(2025, 8, 5)])
    ws.append(["Smith, Alice", "Cashier", "9:00 AM - 5:00 PM", None, "9:00 AM - 5:00 PM"])
    ws.append(["Jones, Bob", "Stocker", "9:00 AM - 5:00 PM", "13:00-21:00", None])
    out = BytesIO()
    wb.save(out)
    return out.getvalue()


def upload(contents, filename="schedule.xlsx", content_type=XLSX_TYPE, **params):
    return client.post("/import/schedule/", files={"file": (filename, contents, content_type)}, params=params)


def test_health():
    resp = client.get("/health/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_import_schedule_returns_all_shifts():
    resp = upload(create_schedule_workbook())
    assert resp.status_code == 200

    data = resp.json()
    assert data["count"] == 4
    assert data["rows"] == 4
    assert data["header_row"] == 1
    assert data["split_header"] is False
    assert data["employee_names"] == ["Alice Smith", "Bob Jones"]
    assert [c["day"] for c in data["day_columns"]] == ["Sunday", "Monday", "Tuesday"]

    first = data["shifts"][0]
    assert first["employeeName"] == "Alice Smith"
    assert first["date"] == "2025-08-03"
    assert first["startTime"] == "9:00 AM"
    assert first["endTime"] == "5:00 PM"
    assert first["notes"] == "Position: Cashier"
    assert first["coworkers"] == '[{"name":"Bob Jones","startTime":"9:00 AM","endTime":"5:00 PM"}]'


def test_import_schedule_filters_by_employee():
    resp = upload(create_schedule_workbook(), employee_name="Bob Jones")
    assert resp.status_code == 200

    data = resp.json()
    assert data["count"] == 2
    assert {s["employeeName"] for s in data["shifts"]} == {"Bob Jones"}
    assert data["shifts"][1]["startTime"] == "1:00 PM"


def test_import_schedule_unknown_employee():
    resp = upload(create_schedule_workbook(), employee_name="Carol White")
    assert resp.status_code == 400

    detail = resp.json()["detail"]
    assert detail["totalShiftsFound"] == 4
    assert detail["allEmployeeNames"] == ["Alice Smith", "Bob Jones"]
    assert "Carol White" in detail["message"]


def test_import_csv_with_reference_year():
    contents = b",Sun 8/3,Mon 8/4,Tue 8/5\nDoe Jane,9AM,,\n"
    resp = upload(contents, filename="schedule.csv", content_type="text/csv", reference_year=2024)
    assert resp.status_code == 200

    shifts = resp.json()["shifts"]
    assert len(shifts) == 1
    assert shifts[0]["date"] == "2024-08-03"
    assert shifts[0]["endTime"] == "5:00 PM"


def test_import_nothing_recognizable():
    resp = upload(b"just,some,text\nwith,no,schedule\n", filename="notes.csv", content_type="text/csv")
    assert resp.status_code == 200
    assert resp.json()["count"] == 0
    assert resp.json()["header_row"] is None


def test_import_rejects_unsupported_file():
    resp = upload(b"hello", filename="schedule.pdf", content_type="application/pdf")
    assert resp.status_code == 400
    assert "Unsupported file type" in resp.json()["detail"]


def test_import_rejects_empty_file():
    resp = upload(b"")
    assert resp.status_code == 400


def test_import_rejects_large_file(monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_BYTES", 10)
    resp = upload(create_schedule_workbook())
    assert resp.status_code == 413


@pytest.mark.parametrize("year", ["1800", "abc"])
def test_import_validates_reference_year(year):
    resp = upload(create_schedule_workbook(), reference_year=year)
    assert resp.status_code == 422


def test_run_server_uses_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setattr(config, "HOST", "0.0.0.0")
    monkeypatch.setattr(config, "PORT", 9001)

    main.run_server()

    assert calls == [((app,), {"host": "0.0.0.0", "port": 9001})]
