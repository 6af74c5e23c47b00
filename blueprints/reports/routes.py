from __future__ import annotations

from io import BytesIO

from flask import Blueprint, jsonify, request, send_file

from services import export_service
from services.session import get_state

bp = Blueprint("reports", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _branch_arg() -> str | None:
    branch = request.args.get("branch")
    if branch and branch not in get_state().branches:
        raise ValueError(f"Unknown branch: {branch!r}")
    return branch


@bp.route("/api/export/xlsx")
def export_xlsx():
    try:
        branch = _branch_arg()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    state = get_state()
    with state.lock:
        stream, filename = export_service.export_xlsx(state, branch)
    return send_file(stream, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)


@bp.route("/api/export/csv")
def export_csv():
    try:
        branch = _branch_arg()
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    state = get_state()
    with state.lock:
        buffer, filename = export_service.export_csv(state, branch)
    # BOM so spreadsheet apps pick up the Thai text as UTF-8
    data = BytesIO(buffer.getvalue().encode("utf-8-sig"))
    return send_file(data, mimetype="text/csv", as_attachment=True, download_name=filename)
