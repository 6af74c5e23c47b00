from __future__ import annotations

from flask import Blueprint, jsonify, request

from adapters.prompt import RecordingPrompt
from domain.roster import EmployeeDraft
from services.session import get_state

bp = Blueprint("employees", __name__)


def _truthy(value: object) -> bool:
    return str(value).lower() in {"1", "true", "yes", "on"}


@bp.route("/api/employees", methods=["GET"])
def list_employees():
    state = get_state()
    branch = request.args.get("branch")
    with state.lock:
        employees = state.visible_employees(branch) if branch else state.roster.employees
    return jsonify({"employees": [emp.to_dict() for emp in employees]})


@bp.route("/api/employees", methods=["POST"])
def create_employee():
    payload = request.get_json(force=True)
    state = get_state()
    try:
        draft = EmployeeDraft.from_mapping(payload)
        prompt = RecordingPrompt()
        with state.lock:
            employee = state.add_employee(draft, prompt=prompt)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if employee is None:
        return jsonify({"prompt": prompt.last.as_dict()}), 422
    return jsonify({"employee": employee.to_dict()}), 201


@bp.route("/api/employees/<emp_id>", methods=["PUT"])
def update_employee(emp_id: str):
    payload = request.get_json(force=True)
    state = get_state()
    try:
        patch = EmployeeDraft.from_mapping(payload)
        prompt = RecordingPrompt()
        with state.lock:
            employee = state.edit_employee(emp_id, patch, prompt=prompt)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if employee is None:
        return jsonify({"prompt": prompt.last.as_dict()}), 422
    return jsonify({"employee": employee.to_dict()})


@bp.route("/api/employees/<emp_id>", methods=["DELETE"])
def delete_employee(emp_id: str):
    state = get_state()
    confirmed = _truthy(request.args.get("confirm", ""))
    prompt = RecordingPrompt(answer=True if confirmed else None)
    with state.lock:
        deleted = state.delete_employee(emp_id, prompt=prompt)
    if not deleted:
        return jsonify({"deleted": False, "prompt": prompt.last.as_dict()}), 409
    return jsonify({"deleted": True})
