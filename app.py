from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask, jsonify, redirect, url_for

from domain.errors import UnknownEmployeeError
from domain.shift_types import UnknownShiftTagError
from services import session


BLUEPRINTS = [
    ("blueprints.schedule.routes", "bp"),
    ("blueprints.employees.routes", "bp"),
    ("blueprints.settings.routes", "bp"),
    ("blueprints.reports.routes", "bp"),
]


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(
        DATABASE=os.path.join(app.instance_path, "clinic_roster.sqlite"),
        DOCUMENT_STORE="sqlite",
        DOCUMENT_COLLECTION="schedules",
        FIRESTORE_PROJECT=None,
        CLINIC_CONFIG_PATH=None,
        AUTOSAVE=True,
        AUTO_LOAD=True,
        LOG_LEVEL="INFO",
    )

    if test_config:
        app.config.update(test_config)

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    session.init_app(app)

    for import_path, attr in BLUEPRINTS:
        module = __import__(import_path, fromlist=[attr])
        blueprint = getattr(module, attr)
        app.register_blueprint(blueprint)

    app.add_url_rule("/", endpoint="root", view_func=lambda: redirect(url_for("schedule.schedule_page")))

    @app.route("/healthz")
    def healthcheck() -> tuple[str, int]:
        return "OK", 200

    @app.errorhandler(UnknownEmployeeError)
    def unknown_employee(exc: UnknownEmployeeError):
        return jsonify({"error": f"Employee {exc.args[0]} not found"}), 404

    @app.errorhandler(UnknownShiftTagError)
    def unknown_shift(exc: UnknownShiftTagError):
        return jsonify({"error": str(exc)}), 400

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
