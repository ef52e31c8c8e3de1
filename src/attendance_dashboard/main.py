from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.logging_utils import setup_logging
from .config import get_settings_module
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .leave.controller import register as register_leave

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None, *, start: bool = True) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("starting attendance dashboard", extra={"settings": settings_module})

    container = container or build_container(settings=settings)

    register_dashboard(app, container)
    register_attendance(app, container)
    register_leave(app, container)

    if start:
        # Same as the browser start-up: load employees, restore the last selection.
        for notice in container.dashboard_service.start():
            logger.warning(notice.message, extra={"level_hint": notice.level.value})

    return app
