from __future__ import annotations

import importlib
import sys
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "class_register"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from class_register.database.bootstrap import create_schema, seed_demo_data
from class_register.database.connection import Database, DBConfig
from class_register.settings import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = Database(DBConfig(url=settings.DATABASE_URL))

    create_schema(db)
    if seed_demo_data(db):
        print(f"OK: Seeded database -> {settings.DATABASE_URL}")
    else:
        print(f"SKIP: {settings.DATABASE_URL} already has classes")


if __name__ == "__main__":
    main()
