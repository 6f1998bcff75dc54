"""Tests for checklist submissions and cleaning log queries."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from freezegun import freeze_time

from washroom_api.domain.cleaning_logs.checklist import (
    CHECKLIST_ITEMS,
    CHECKLIST_KEYS,
    checklist_status,
    to_legacy_columns,
    unchecked_items,
)
from washroom_api.domain.cleaning_logs.service import CleaningLogService
from washroom_api.email_service import EmailServiceError
from washroom_api.models import CleaningLog

ATTENTION_EMAIL = "washroom_api.domain.cleaning_logs.service.send_attention_required_email"


def _all_checked() -> dict[str, bool]:
    return {key: True for key in CHECKLIST_KEYS}


def _add_log(db, log_id, timestamp, location_id="room-1", status="complete", **extra):
    log = CleaningLog(
        id=log_id,
        location_id=location_id,
        location_name="Main Floor",
        staff_name="Sam",
        timestamp=timestamp,
        status=status,
        **extra,
    )
    db.add(log)
    db.commit()
    return log


# ---------------------------------------------------------------------------
# Checklist
# ---------------------------------------------------------------------------


def test_checklist_has_twelve_items_in_three_sections():
    assert len(CHECKLIST_ITEMS) == 12
    assert {item.section for item in CHECKLIST_ITEMS} == {"supplies", "sanitization", "facility"}
    assert [item.key for item in CHECKLIST_ITEMS if item.has_na_option] == ["requiredSignage"]


def test_legacy_column_mapping():
    checklist = _all_checked()
    checklist["toiletPaper"] = False
    checklist["ventilationLighting"] = False

    assert to_legacy_columns(checklist) == {
        "checklist_supplies": False,
        "checklist_surfaces": True,
        "checklist_fixtures": False,
        "checklist_trash": True,
        "checklist_floor": True,
    }


def test_status_and_unchecked_labels():
    assert checklist_status(_all_checked()) == "complete"

    checklist = _all_checked()
    checklist["floors"] = False
    assert checklist_status(checklist) == "attention_required"
    assert unchecked_items(checklist) == ["Floors / Planchers"]


def test_not_applicable_counts_as_checked():
    checklist = _all_checked()
    checklist["requiredSignage"] = False
    assert checklist_status(checklist, {"requiredSignage"}) == "complete"
    assert checklist_status(checklist) == "attention_required"


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


def test_submit_complete_checklist(client, db, make_washroom):
    washroom = make_washroom()

    with patch(ATTENTION_EMAIL, new_callable=AsyncMock) as mock_send:
        response = client.post(
            "/logs",
            json={"location_id": "room-1", "staff_name": "  Sam  ", "pin": "1234", "checklist": _all_checked()},
        )

    assert response.status_code == 201
    body = response.json()
    assert body["log"]["status"] == "complete"
    assert body["log"]["staff_name"] == "Sam"
    assert body["log"]["location_name"] == "Main Floor"
    assert body["log"]["checklist_supplies"] is True
    assert body["unchecked_items"] == []
    assert body["email_sent"] is False
    mock_send.assert_not_awaited()

    db.refresh(washroom)
    assert washroom.last_cleaned is not None


def test_submit_with_unchecked_items_emails_recipients(client, make_washroom):
    make_washroom()
    checklist = _all_checked()
    checklist["toiletPaper"] = False

    with patch(ATTENTION_EMAIL, new_callable=AsyncMock) as mock_send:
        response = client.post(
            "/logs",
            json={
                "location_id": "room-1",
                "staff_name": "Sam",
                "pin": "1234",
                "checklist": checklist,
                "notes": "Dispenser jammed",
            },
        )

    body = response.json()
    assert body["log"]["status"] == "attention_required"
    assert body["log"]["checklist_supplies"] is False
    assert body["unchecked_items"] == ["Toilet Paper / Papier hygiénique"]
    assert body["email_sent"] is True

    kwargs = mock_send.await_args.kwargs
    assert kwargs["to"] == ["manager@acme.test"]
    assert kwargs["unchecked_items"] == ["Toilet Paper / Papier hygiénique"]
    assert kwargs["notes"] == "Dispenser jammed"


def test_submit_email_failure_keeps_log(client, db, make_washroom):
    make_washroom()

    with patch(ATTENTION_EMAIL, new_callable=AsyncMock, side_effect=EmailServiceError("down")):
        response = client.post(
            "/logs", json={"location_id": "room-1", "staff_name": "Sam", "pin": "1234", "checklist": {}}
        )

    assert response.status_code == 201
    assert response.json()["email_sent"] is False
    assert db.query(CleaningLog).count() == 1


def test_submit_wrong_pin_is_rejected(client, db, make_washroom):
    make_washroom()
    response = client.post(
        "/logs", json={"location_id": "room-1", "staff_name": "Sam", "pin": "0000", "checklist": _all_checked()}
    )

    assert response.status_code == 403
    assert db.query(CleaningLog).count() == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"location_id": "room-1", "staff_name": "   ", "pin": "1234"},
        {"location_id": "room-1", "staff_name": "Sam", "pin": "1234", "checklist": {"mirrors": True}},
        {"location_id": "room-1", "staff_name": "Sam", "pin": "1234", "not_applicable": ["floors"]},
    ],
)
def test_submit_validation(client, make_washroom, payload):
    make_washroom()
    assert client.post("/logs", json=payload).status_code == 422


def test_log_response_expands_legacy_columns(client, make_washroom):
    make_washroom()
    checklist = _all_checked()
    checklist["waterTemperature"] = False

    with patch(ATTENTION_EMAIL, new_callable=AsyncMock):
        response = client.post(
            "/logs", json={"location_id": "room-1", "staff_name": "Sam", "pin": "1234", "checklist": checklist}
        )

    items = response.json()["log"]["checklist_items"]
    # Fixtures, water temperature and ventilation share one stored column
    assert items["fixtures"] is False
    assert items["ventilationLighting"] is False
    assert items["floors"] is True
    assert items["toiletPaper"] is True


def test_submit_unknown_washroom(client):
    response = client.post("/logs", json={"location_id": "ghost", "staff_name": "Sam", "pin": "1234"})
    assert response.status_code == 404


def test_checklist_catalogue_endpoint(client):
    sections = client.get("/logs/checklist").json()

    assert [section["id"] for section in sections] == ["supplies", "sanitization", "facility"]
    assert sections[1]["title_en"] == "2. Sanitization (Infection Control)"
    assert sum(len(section["items"]) for section in sections) == 12
    assert sections[0]["items"][0] == {
        "key": "handwashingStation",
        "label_en": "Handwashing Station",
        "label_fr": "Poste de lavage des mains",
        "section": "supplies",
        "has_na_option": False,
    }


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def test_location_logs_newest_first(client, db, business_headers, make_washroom):
    make_washroom()
    _add_log(db, "old", datetime(2026, 1, 1, 9, 0))
    _add_log(db, "new", datetime(2026, 1, 3, 9, 0))

    response = client.get("/logs/location/room-1", headers=business_headers)
    assert [log["id"] for log in response.json()] == ["new", "old"]


def test_location_logs_of_other_business_hidden(client, business_headers, make_washroom):
    make_washroom(id="theirs", business_name="Other Co")
    response = client.get("/logs/location/theirs", headers=business_headers)
    assert response.status_code == 404


@freeze_time("2026-07-15 12:00:00")
def test_recent_logs_cover_six_months(db, admin, make_washroom):
    make_washroom()
    _add_log(db, "too-old", datetime(2026, 1, 14, 12, 0))
    _add_log(db, "edge", datetime(2026, 1, 15, 12, 0))
    _add_log(db, "recent", datetime(2026, 7, 1, 12, 0))

    logs = CleaningLogService(db).list_recent_for_location("room-1", admin)
    assert [log.id for log in logs] == ["recent", "edge"]


def test_all_logs_scoped_by_business(client, db, business_headers, admin_headers, make_washroom):
    make_washroom()
    make_washroom(id="theirs", business_name="Other Co")
    _add_log(db, "mine", datetime(2026, 1, 1, 9, 0))
    _add_log(db, "theirs-log", datetime(2026, 1, 2, 9, 0), location_id="theirs")

    assert [log["id"] for log in client.get("/logs", headers=business_headers).json()] == ["mine"]
    assert len(client.get("/logs", headers=admin_headers).json()) == 2


def test_business_logs(client, db, business_headers, admin_headers, make_washroom):
    make_washroom(id="theirs", business_name="Other Co")
    _add_log(db, "theirs-log", datetime(2026, 1, 2, 9, 0), location_id="theirs")

    assert client.get("/logs/business/Other Co", headers=business_headers).status_code == 403
    logs = client.get("/logs/business/Other Co", headers=admin_headers).json()
    assert [log["id"] for log in logs] == ["theirs-log"]


def test_range_is_inclusive(client, db, admin_headers, make_washroom):
    make_washroom()
    _add_log(db, "before", datetime(2026, 1, 4, 23, 59))
    _add_log(db, "first", datetime(2026, 1, 5, 0, 0))
    _add_log(db, "last", datetime(2026, 1, 6, 23, 59))
    _add_log(db, "after", datetime(2026, 1, 7, 0, 0))

    response = client.get("/logs/range", params={"start": "2026-01-05", "end": "2026-01-06"}, headers=admin_headers)
    assert [log["id"] for log in response.json()] == ["last", "first"]


def test_range_start_after_end(client, admin_headers):
    response = client.get("/logs/range", params={"start": "2026-01-07", "end": "2026-01-06"}, headers=admin_headers)
    assert response.status_code == 400


def test_unresolved_and_resolve(client, db, business_headers, make_washroom):
    make_washroom()
    _add_log(db, "ok", datetime(2026, 1, 1, 9, 0))
    _add_log(db, "needs-work", datetime(2026, 1, 2, 9, 0), status="attention_required")

    unresolved = client.get("/logs/unresolved", headers=business_headers).json()
    assert [log["id"] for log in unresolved] == ["needs-work"]

    resolved = client.post("/logs/needs-work/resolve", headers=business_headers).json()
    assert resolved["resolved"] is True
    assert resolved["resolved_at"] is not None

    assert client.get("/logs/unresolved", headers=business_headers).json() == []


def test_resolve_unknown_log(client, business_headers):
    assert client.post("/logs/missing/resolve", headers=business_headers).status_code == 404


def test_delete_location_logs(client, db, business_headers, make_washroom):
    make_washroom()
    _add_log(db, "a", datetime(2026, 1, 1, 9, 0))
    _add_log(db, "b", datetime(2026, 1, 2, 9, 0))

    response = client.delete("/logs/location/room-1", headers=business_headers)

    assert response.json() == {"message": "Cleaning logs deleted", "deleted": 2}
    assert db.query(CleaningLog).count() == 0
