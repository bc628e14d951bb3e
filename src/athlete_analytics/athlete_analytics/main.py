from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .container import build_container
from .core.constants import DEFAULT_LEADERBOARD_LIMIT
from .payroll.controller import register as register_payroll
from .records.repository import RecordSource


def create_app(*, records: Optional[RecordSource] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["LEADERBOARD_LIMIT"] = int(getattr(settings, "LEADERBOARD_LIMIT", DEFAULT_LEADERBOARD_LIMIT))
    data_file = getattr(settings, "DATA_FILE", None)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(__name__)
    logger.info("settings=%s data_file=%s", settings_module, data_file or "-")

    container = build_container(
        records=records,
        data_file=data_file,
        leaderboard_limit=app.config["LEADERBOARD_LIMIT"],
    )

    register_analytics(app, container)
    register_payroll(app, container)

    return app
