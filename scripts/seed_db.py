from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.database.bootstrap import (
    DEMO_USERS,
    apply_seed_sql,
    ensure_demo_users,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Load demo classes, students and logins.")
    parser.add_argument("--env", help="APP_ENV override (development, testing, production)")
    parser.add_argument("--users-only", action="store_true", help="only reset the demo logins")
    args = parser.parse_args()
    if args.env:
        os.environ["APP_ENV"] = args.env

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    if not args.users_only:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    print(f"OK: seeded {db_config.get('database')}")
    for name, email, password, role in DEMO_USERS:
        print(f"  {role.value:<8} {email} / {password} ({name})")


if __name__ == "__main__":
    main()
