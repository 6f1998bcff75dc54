"""Tests for the arq worker and the startup schema upgrade."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import create_engine, inspect, text

from washroom_api import schema_upgrade, worker
from washroom_api.email_service import EmailNotConfiguredError


def test_overdue_check_runs_every_half_hour():
    [job] = worker.WorkerSettings.cron_jobs
    assert job.coroutine is worker.overdue_check_task
    assert job.minute == {0, 30}


@pytest.mark.parametrize("interval, expected", [(15, {0, 15, 30, 45}), (60, {0}), (7, set(range(0, 60, 7)))])
def test_check_minutes(interval, expected):
    assert worker.check_minutes(interval) == expected


@pytest.mark.parametrize("interval", [0, -5, 61, 90])
def test_check_minutes_rejects_out_of_range_interval(interval):
    with pytest.raises(ValueError, match="OVERDUE_CHECK_MINUTES"):
        worker.check_minutes(interval)


def test_redis_settings_from_url(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "rediss://default:pw@cache.example.com:6380")
    settings = worker.get_redis_settings()

    assert settings.host == "cache.example.com"
    assert settings.port == 6380
    assert settings.password == "pw"
    assert settings.ssl is True


async def test_task_fails_without_email_configuration():
    with patch("washroom_api.email_service.RESEND_API_KEY", None):
        with pytest.raises(EmailNotConfiguredError):
            await worker.overdue_check_task({"job_id": "j1"})


async def test_task_runs_overdue_check(db):
    summary = {"message": "No washrooms to check", "checked": 0, "alerts": 0}
    with patch("washroom_api.email_service.RESEND_API_KEY", "re_test"), patch(
        "washroom_api.worker.run_overdue_check", new_callable=AsyncMock, return_value=summary
    ) as mock_run:
        result = await worker.overdue_check_task({"job_id": "j2"})

    assert result == summary
    mock_run.assert_awaited_once()


def test_schema_upgrade_adds_missing_columns():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE washrooms (id VARCHAR(64) PRIMARY KEY, room_name VARCHAR(255))"))

    added = schema_upgrade.upgrade(engine)

    assert "washrooms.alert_enabled" in added
    assert "washrooms.last_alert_sent_at" in added
    columns = {col["name"] for col in inspect(engine).get_columns("washrooms")}
    assert {"alert_email", "alert_days", "timezone"} <= columns

    assert schema_upgrade.upgrade(engine) == []
