from __future__ import annotations

from flask import Blueprint, jsonify, request

from services.session import get_state

bp = Blueprint("settings", __name__)


def _settings_payload() -> dict:
    state = get_state()
    return {
        "month": state.month_key,
        "branch": state.branch,
        "branches": state.branches,
        "positions": state.config["positions"],
        "clinic_day_off": state.clinic_day_off,
        "day_off_choices": state.day_off_choices,
        "staffing": state.config["staffing"],
    }


@bp.route("/api/settings", methods=["GET"])
def get_settings():
    return jsonify(_settings_payload())


@bp.route("/api/settings", methods=["POST"])
def save_settings():
    payload = request.get_json(force=True)
    state = get_state()
    try:
        with state.lock:
            if payload.get("branch"):
                state.select_branch(payload["branch"])
            if payload.get("clinic_day_off"):
                state.set_clinic_day_off(payload["clinic_day_off"])
            body = _settings_payload()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(body)
