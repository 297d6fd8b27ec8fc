from functools import wraps

from flask import current_app, jsonify, session

from models.user_model import User
from utils.results import (ALREADY_MARKED, EMPTY_EXPORT_SET, INVALID_CODE,
                           NETWORK_REQUIRED, NO_ACTIVE_SESSION)
from utils.store import CURRENT_USER_KEY

# HTTP status for each failed Result
ERROR_STATUS = {
    NETWORK_REQUIRED: 403,
    NO_ACTIVE_SESSION: 409,
    INVALID_CODE: 400,
    ALREADY_MARKED: 409,
    EMPTY_EXPORT_SET: 404,
}


def attendance():
    """Components wired up by create_app()."""
    return current_app.extensions["attendance"]


def current_user():
    return User.from_dict(session.get(CURRENT_USER_KEY))


def role_required(role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return jsonify({"success": False, "msg": "Not logged in"}), 401
            if user.role != role:
                return jsonify({"success": False, "msg": "Unauthorized"}), 403
            return view(user, *args, **kwargs)
        return wrapper
    return decorator


def failure_response(result):
    body = {"success": False, "error": result.error, "msg": result.message}
    return jsonify(body), ERROR_STATUS.get(result.error, 400)
