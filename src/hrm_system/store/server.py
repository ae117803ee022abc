from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from ..database.bootstrap import apply_schema, list_tables
from ..database.connection import DatabaseConnection, DBConfig
from ..state.codec import to_document
from ..state.seed import initial_state
from .controller import register
from .memory_kv_repository import InMemoryKeyValueRepository
from .mysql_kv_repository import MySQLKeyValueRepository
from .repository import KeyValueRepository
from .service import StoreService

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def build_repository(settings) -> KeyValueRepository:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryKeyValueRepository()
    if backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    db_config = DBConfig.from_dict(getattr(settings, "DB_CONFIG"))
    conn = DatabaseConnection.get_instance(db_config)
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn, db_config.database, schema_path=SCHEMA_PATH)
        logger.info("Store schema ready (tables=%d)", len(list_tables(conn)))
    return MySQLKeyValueRepository(conn)


def create_store_app(*, store: Optional[StoreService] = None) -> Flask:
    """App factory for the key/value store behind the HRM sync API."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = importlib.import_module(get_settings_module())
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    if store is None:
        store = StoreService(build_repository(settings))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            store.init(to_document(initial_state()))

    register(app, store)
    return app
