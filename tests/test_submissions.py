import csv
from datetime import date, datetime
from io import BytesIO, StringIO
from urllib.parse import unquote

from openpyxl import load_workbook
from sqlalchemy import select

from app.common.db import session_scope
from app.common.exporter import write_rows_to_csv
from app.submissions.models import Submission
from app.submissions.service import is_in_range, next_status


def _add_submission(name, submitted_at, status="pending", mobile="9876543210", site="ReddyBook"):
    with session_scope() as db:
        row = Submission(
            name=name,
            mobile_number=mobile,
            selected_website=site,
            status=status,
            submitted_at=submitted_at,
        )
        db.add(row)
        db.flush()
        return row.id


def test_in_range_is_inclusive_of_whole_end_day():
    start, end = date(2025, 1, 1), date(2025, 1, 31)
    assert is_in_range(datetime(2025, 1, 15, 10, 0), start, end)
    assert is_in_range(datetime(2025, 1, 1, 0, 0), start, end)
    assert is_in_range(datetime(2025, 1, 31, 23, 59), start, end)
    assert not is_in_range(datetime(2025, 2, 1, 0, 0), start, end)
    assert not is_in_range(datetime(2024, 12, 31, 23, 59), start, end)


def test_in_range_without_bounds_includes_everything():
    assert is_in_range(datetime(1999, 1, 1))
    assert is_in_range(datetime(2025, 6, 1), start=date(2025, 1, 1))
    assert not is_in_range(datetime(2025, 6, 1), end=date(2025, 5, 31))


def test_next_status_flips():
    assert next_status("pending") == "contacted"
    assert next_status("contacted") == "pending"
    assert next_status(None) == "pending"


def test_csv_quotes_fields_with_commas_and_quotes():
    buffer = write_rows_to_csv(["Name", "Note"], [['Kumar, Ravi', 'says "hi"'], ["Anu", None]])
    text = buffer.getvalue()
    assert text.splitlines()[1] == '"Kumar, Ravi","says ""hi"""'
    assert list(csv.reader(StringIO(text)))[2] == ["Anu", ""]


def test_list_marks_rows_in_range_newest_first(client, admin_headers):
    _add_submission("Old", datetime(2024, 12, 20, 9, 0))
    _add_submission("Mid", datetime(2025, 1, 15, 10, 0))
    _add_submission("New", datetime(2025, 2, 1, 0, 0))

    response = client.get(
        "/api/admin/submissions",
        params={"start": "2025-01-01", "end": "2025-01-31"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["in_range"] == 1
    assert [item["name"] for item in body["items"]] == ["New", "Mid", "Old"]
    assert [item["in_range"] for item in body["items"]] == [False, True, False]


def test_csv_export_contains_only_filtered_rows(client, admin_headers):
    _add_submission("Kumar, Ravi", datetime(2025, 1, 15, 10, 5))
    _add_submission("Outside", datetime(2025, 2, 1, 0, 0))

    response = client.get(
        "/api/admin/submissions/export",
        params={"start": "2025-01-01", "end": "2025-01-31"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert "user_submissions.csv" in response.headers["content-disposition"]
    rows = list(csv.reader(StringIO(response.text)))
    assert rows[0] == ["Name", "Mobile Number", "Website", "Status", "Submitted At"]
    assert rows[1:] == [["Kumar, Ravi", "+919876543210", "ReddyBook", "pending", "2025-01-15 10:05"]]


def test_xlsx_export(client, admin_headers):
    _add_submission("Ravi", datetime(2025, 1, 15, 10, 5))
    _add_submission("Anu", datetime(2025, 1, 16, 11, 0))

    response = client.get(
        "/api/admin/submissions/export", params={"format": "xlsx"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert "user_submissions.xlsx" in response.headers["content-disposition"]
    sheet = load_workbook(BytesIO(response.content)).active
    assert sheet.max_row == 3
    assert sheet.cell(row=1, column=1).value == "Name"


def test_export_rejects_unknown_format(client, admin_headers):
    response = client.get(
        "/api/admin/submissions/export", params={"format": "pdf"}, headers=admin_headers
    )
    assert response.status_code == 422


def test_bulk_delete(client, admin_headers):
    first = _add_submission("A", datetime(2025, 1, 1))
    second = _add_submission("B", datetime(2025, 1, 2))
    keep = _add_submission("C", datetime(2025, 1, 3))

    response = client.post("/api/admin/submissions/delete", json={"ids": []}, headers=admin_headers)
    assert response.json() == {"deleted": 0}

    response = client.post(
        "/api/admin/submissions/delete", json={"ids": [first, second]}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json() == {"deleted": 2}

    with session_scope() as db:
        remaining = db.execute(select(Submission.id)).scalars().all()
    assert remaining == [keep]


def test_toggle_status_twice_restores_pending(client, admin_headers):
    submission_id = _add_submission("Ravi", datetime(2025, 1, 1))
    url = f"/api/admin/submissions/{submission_id}/toggle-status"

    assert client.post(url, headers=admin_headers).json()["status"] == "contacted"
    assert client.post(url, headers=admin_headers).json()["status"] == "pending"


def test_toggle_status_unknown_submission(client, admin_headers):
    response = client.post("/api/admin/submissions/missing/toggle-status", headers=admin_headers)
    assert response.status_code == 404


def test_whatsapp_link_for_lead(client, admin_headers):
    submission_id = _add_submission("Ravi", datetime(2025, 1, 1))

    response = client.get(f"/api/admin/submissions/{submission_id}/whatsapp", headers=admin_headers)
    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("https://wa.me/919876543210?text=")
    assert unquote(url.split("?text=", 1)[1]) == "Hello Ravi, this is Reddy Book support team."
