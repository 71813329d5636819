"""Example: use the service layer directly (no Flask).

Prints the manager dashboard for the demo manager created by scripts/seed_db.py.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.users.model import Principal


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    manager = container.users_repo.get_by_email("manager@company.com")
    if manager is None:
        raise SystemExit("Run scripts/seed_db.py first")

    dashboard = container.report_service.manager_dashboard(Principal.from_employee(manager))
    print("employees:", dashboard.total_employees)
    print("today:", dashboard.today.present, "present,", dashboard.today.absent, "absent,", dashboard.today.late, "late")
    for day in dashboard.trend:
        print(day.to_dict())
    for dept in dashboard.departments:
        print(dept.to_dict())


if __name__ == "__main__":
    main()
