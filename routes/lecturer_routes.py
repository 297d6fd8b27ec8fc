from flask import Blueprint, Response, current_app, jsonify, request

from models.user_model import LECTURER
from routes import attendance, failure_response, role_required
from utils.code_utils import render_code_qr
from utils.csv_utils import export_csv
from utils.time_utils import today

lecturer_bp = Blueprint("lecturer", __name__)


def _session_json(s):
    return s.to_dict() if s else None


def _selected_date():
    date = request.args.get("date")
    if date:
        return date
    s = attendance().sessions.current()
    return s.date if s else today()


@lecturer_bp.route("/session")
@role_required(LECTURER)
def current_session(user):
    return jsonify({"session": _session_json(attendance().sessions.current())})


@lecturer_bp.route("/session/start", methods=["POST"])
@role_required(LECTURER)
def start_session(user):
    s = attendance().sessions.start(user.name)
    return jsonify({"success": True, "session": s.to_dict()})


@lecturer_bp.route("/session/end", methods=["POST"])
@role_required(LECTURER)
def end_session(user):
    s = attendance().sessions.end()
    return jsonify({"success": s is not None, "session": _session_json(s)})


@lecturer_bp.route("/session/qr")
@role_required(LECTURER)
def session_qr(user):
    s = attendance().sessions.current()
    if not s or not s.is_active:
        return jsonify({"error": "No active session"}), 404
    return jsonify({"qr": render_code_qr(s.session_code), "sessionCode": s.session_code})


@lecturer_bp.route("/live")
@role_required(LECTURER)
def live(user):
    svc = attendance()
    records = svc.sessions.live_records(svc.ledger)
    return jsonify({
        "count": len(records),
        "records": [r.to_dict() for r in records],
        "refresh_seconds": current_app.config["LECTURER_REFRESH_SECONDS"],
    })


@lecturer_bp.route("/records")
@role_required(LECTURER)
def records(user):
    ledger = attendance().ledger
    date = _selected_date()
    return jsonify({
        "date": date,
        "records": [r.to_dict() for r in ledger.filter_by_date(date)],
        "total": len(ledger.all()),
        "unique_dates": ledger.unique_dates(),
    })


@lecturer_bp.route("/dates")
@role_required(LECTURER)
def dates(user):
    return jsonify({"unique_dates": attendance().ledger.unique_dates()})


@lecturer_bp.route("/export")
@role_required(LECTURER)
def export(user):
    date = _selected_date()
    result = export_csv(attendance().ledger.filter_by_date(date), date)
    if not result:
        return failure_response(result)
    filename, text = result.value
    return Response(
        text,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@lecturer_bp.route("/clear", methods=["POST"])
@role_required(LECTURER)
def clear(user):
    attendance().ledger.clear()
    current_app.logger.warning("%s cleared all attendance records", user.name)
    return jsonify({"success": True})
