"""Backup database.

Note: Uses the sqlite online backup API, so the app can keep running while
the copy is taken.
"""

from __future__ import annotations

import importlib
import sqlite3
from contextlib import closing
import sys
from datetime import datetime
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "class_register"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from class_register.database.connection import Database, DBConfig
from class_register.settings import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = Database(DBConfig(url=settings.DATABASE_URL))
    if db.engine.dialect.name != "sqlite":
        raise SystemExit("Backup only supports sqlite databases.")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"class_register_{ts}.db"

    raw = db.engine.raw_connection()
    try:
        with closing(sqlite3.connect(out_file)) as target:
            raw.driver_connection.backup(target)
    finally:
        raw.close()
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
