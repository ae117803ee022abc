from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .common.web import EXTENSION_KEY, register_error_handlers
from .container import Container, build_container
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .sync.controller import register as register_sync
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s store=%s", settings_module, getattr(settings, "STORE_API_URL", None))

    if container is None:
        container = build_container(settings)
    app.extensions[EXTENSION_KEY] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_tasks(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_audit(app, container)
    register_sync(app, container)

    if bool(getattr(settings, "SYNC_ENABLED", False)):
        container.sync_manager.start(container.holder.replace)
        atexit.register(container.sync_manager.stop)
    atexit.register(container.holder.shutdown)

    return app
