from __future__ import annotations

import importlib

from office_hr.config import get_settings_module
from office_hr.container import connect
from office_hr.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = connect(settings)

    apply_schema(conn)
    tables = list_tables(conn)
    db = conn.config
    print(f"OK: Applied schema.sql -> {db.user}@{db.host}:{db.port}/{db.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
