from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import build_container
from .database.bootstrap import create_schema, seed_demo_data
from .monetization.controller import register as register_monetization
from .settings import get_settings_module
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    database_url = getattr(settings, "DATABASE_URL")
    logger.info("settings=%s db=%s", settings_module, database_url)

    container = build_container(
        database_url=database_url,
        echo=bool(getattr(settings, "SQL_ECHO", False)),
        ads_enabled=bool(getattr(settings, "ADS_ENABLED", False)),
        interstitial_cooldown_seconds=int(getattr(settings, "INTERSTITIAL_COOLDOWN_SECONDS", 30)),
        max_interstitials_per_session=int(getattr(settings, "MAX_INTERSTITIALS_PER_SESSION", 5)),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        create_schema(container.db)
    if getattr(settings, "AUTO_SEED_DB", False):
        seed_demo_data(container.db)

    app.extensions["class_register"] = container

    register_classes(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_analytics(app, container)
    register_monetization(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
