from __future__ import annotations

from datetime import datetime

from flask import Blueprint, jsonify, render_template, request

from adapters.prompt import RecordingPrompt
from services import projection
from services.session import get_state

bp = Blueprint("schedule", __name__)


def _apply_selection(args) -> str | None:
    """Apply ``month`` / ``branch`` from *args*; returns an error message."""
    state = get_state()
    month = args.get("month")
    if month:
        try:
            parsed = datetime.strptime(month, "%Y-%m")
        except ValueError:
            return "Month must be in YYYY-MM format"
        state.select_month(parsed.year, parsed.month)
    branch = args.get("branch")
    if branch:
        try:
            state.select_branch(branch)
        except ValueError as exc:
            return str(exc)
    return None


@bp.route("/schedule")
def schedule_page():
    state = get_state()
    with state.lock:
        error = _apply_selection(request.args)
        return render_template(
            "schedule/index.html",
            state=state,
            grid=state.grid(),
            error_message=error,
        )


@bp.route("/api/schedule")
def get_schedule():
    state = get_state()
    with state.lock:
        error = _apply_selection(request.args)
        if error:
            return jsonify({"error": error}), 400
        payload = projection.grid_as_dict(state.grid())
    return jsonify(payload)


@bp.route("/api/schedule/cell", methods=["POST"])
def set_cell():
    payload = request.get_json(force=True)
    state = get_state()
    employee_id = payload.get("employee_id")
    day = payload.get("date") or payload.get("day")
    if not employee_id or not day:
        return jsonify({"error": "employee_id and date are required"}), 400
    if isinstance(day, str) and day.isdigit():
        day = int(day)
    prompt = RecordingPrompt()
    with state.lock:
        branch = payload.get("branch") or state.branch
        if branch not in state.branches:
            return jsonify({"error": f"Unknown branch: {branch!r}"}), 400
        try:
            key = state.date_key(day)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        ok = state.set_shift(employee_id, key, payload.get("value"), branch=branch, prompt=prompt)
        body = {
            "ok": ok,
            "date": key,
            "employee_id": employee_id,
            "effective": state.get_effective_shift(employee_id, key, branch=branch),
            "headcount": state.headcount(key, branch=branch),
        }
    if prompt.last is not None:
        body["prompt"] = prompt.last.as_dict()
    return jsonify(body), (200 if ok else 409)


@bp.route("/api/schedule/month", methods=["POST"])
def change_month():
    payload = request.get_json(silent=True) or {}
    try:
        delta = int(payload.get("delta", 0))
    except (TypeError, ValueError):
        return jsonify({"error": "delta must be an integer"}), 400
    state = get_state()
    with state.lock:
        month = state.change_month(delta)
    return jsonify({"month": month})
