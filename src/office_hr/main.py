from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container, connect
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves
from .organization.controller import register as register_organization
from .payroll.controller import register as register_payroll
from .tasks.controller import register as register_tasks
from .users.controller import register as register_employees

logger = logging.getLogger("office_hr")


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        conn = connect(settings)
        db = conn.config
        logger.info("settings=%s db=%s@%s:%s/%s", settings_module, db.user, db.host, db.port, db.database)
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        container = build_container(conn=conn, settings=settings)

    register_error_handlers(app)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_tasks(app, container)
    register_dashboard(app, container)
    register_employees(app, container)
    register_organization(app, container)

    return app
