from __future__ import annotations

from types import SimpleNamespace

from conftest import InMemoryAttendance, InMemoryUsers
from src.attendance_tracker.attendance_tracker.container import build_services
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig


def test_trend_days_setting_reaches_manager_dashboard(roster, manager, fixed_now):
    settings = SimpleNamespace(TREND_DAYS=3)
    container = build_services(
        users_repo=InMemoryUsers(roster), attendance_repo=InMemoryAttendance(), settings=settings
    )

    dashboard = container.report_service.manager_dashboard(manager, today=fixed_now.date())

    assert [d.day.isoformat() for d in dashboard.trend] == ["2026-01-31", "2026-02-01", "2026-02-02"]


def test_default_trend_is_a_week(roster, manager, fixed_now):
    container = build_services(users_repo=InMemoryUsers(roster), attendance_repo=InMemoryAttendance())

    assert len(container.report_service.manager_dashboard(manager, today=fixed_now.date()).trend) == 7


def test_db_config_from_settings_dict():
    config = DBConfig.from_settings(
        {"host": "db", "port": "3307", "user": "app", "password": "s3cret", "database": "attendance_tracker"}
    )

    assert config.port == 3307
    assert config.describe() == "app@db:3307/attendance_tracker"
    assert "s3cret" not in config.describe()
