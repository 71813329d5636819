"""Create the demo manager/employees and a month of random attendance history.

Usage: python scripts/seed_db.py [--days 30] [--seed 42]
"""
from __future__ import annotations

import argparse
import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.database.bootstrap import ensure_demo_users, seed_demo_attendance
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    employee_ids = ensure_demo_users(db_config)
    written = seed_demo_attendance(db_config, employee_ids, today=date.today(), days=args.days, seed=args.seed)

    print(
        "OK: Seeded database -> "
        f"{DBConfig.from_settings(db_config).describe()} "
        f"(employees={len(employee_ids)}, records={written})"
    )


if __name__ == "__main__":
    main()
