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

from src.school_attendance.school_attendance.database.bootstrap import apply_schema, list_tables


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the school attendance tables.")
    parser.add_argument("--env", help="APP_ENV override (development, testing, production)")
    args = parser.parse_args()
    if args.env:
        os.environ["APP_ENV"] = args.env

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(f"OK: schema applied to {db_config.get('database')} ({', '.join(sorted(tables))})")


if __name__ == "__main__":
    main()
