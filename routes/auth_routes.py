from flask import Blueprint, current_app, jsonify, redirect, request, session, url_for

from models.user_model import ROLES, User
from routes import current_user
from utils.store import CURRENT_USER_KEY

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/")
def root():
    return redirect(url_for("auth.login"))


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form
        user = User.login(data.get("name"), data.get("role"))
        if user is None:
            return jsonify({"success": False, "msg": "Enter your name and pick a role"}), 400
        session[CURRENT_USER_KEY] = user.to_dict()
        current_app.logger.info("%s logged in as %s (%s)", user.name, user.role, user.id)
        return jsonify({"success": True, "user": user.to_dict()})

    user = current_user()
    return jsonify({"user": user.to_dict() if user else None, "roles": list(ROLES)})


@auth_bp.route("/logout")
def logout():
    session.pop(CURRENT_USER_KEY, None)
    return redirect(url_for("auth.login"))
