from flask import Blueprint, current_app, jsonify, request

from models.user_model import STUDENT
from routes import attendance, failure_response, role_required

student_bp = Blueprint("student", __name__)


@student_bp.route("/status")
@role_required(STUDENT)
def status(user):
    svc = attendance()
    s = svc.sessions.current()
    active = bool(s and s.is_active)
    result = svc.presence.check_status(user.id)
    body = {
        "sessionActive": active,
        "lecturerName": s.lecturer_name if active else None,
        "alreadyMarked": result["alreadyMarked"],
        "at": result["at"],
        "poll_seconds": current_app.config["STUDENT_POLL_SECONDS"],
    }
    # the code is only shown back once the student has proven they know it
    if result["alreadyMarked"]:
        body["sessionCode"] = s.session_code
    return jsonify(body)


@student_bp.route("/attendance", methods=["POST"])
@role_required(STUDENT)
def mark_attendance(user):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    result = attendance().presence.submit(
        user.id,
        user.name,
        data.get("code"),
        # only a JSON true counts as connected; "false" or 0 do not
        data.get("networkConnected", True) is True,
    )
    if not result:
        current_app.logger.info("Attendance rejected for %s: %s", user.id, result.error)
        return failure_response(result)
    return jsonify({"success": True, "msg": "Attendance marked", "timestamp": result.value})
