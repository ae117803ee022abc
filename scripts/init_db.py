from __future__ import annotations

import importlib

from config import get_settings_module

from hrm_system.database.bootstrap import apply_schema, list_tables
from hrm_system.database.connection import DatabaseConnection, DBConfig
from hrm_system.store.server import SCHEMA_PATH


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(db_config)

    apply_schema(conn, db_config.database, schema_path=SCHEMA_PATH)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.describe()} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
