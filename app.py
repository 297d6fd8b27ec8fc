# app.py
import logging
import threading

from flask import Flask

from models import db
from models.attendance_model import AttendanceLedger
from models.presence_model import PresenceClient
from models.session_model import SessionManager
from routes.auth_routes import auth_bp
from routes.lecturer_routes import lecturer_bp
from routes.student_routes import student_bp
from utils.store import MemoryStore, SqlStore

# -------------------- Configuration --------------------
DEFAULT_CONFIG = {
    "SECRET_KEY": "secret123",
    "SQLALCHEMY_DATABASE_URI": "sqlite:///attendance.db",
    "STORE_BACKEND": "sql",
    "STUDENT_POLL_SECONDS": 5,
    "LECTURER_REFRESH_SECONDS": 3,
    "LOG_LEVEL": "INFO",
}

# loggers of this project's packages; create_app() sets their level
PACKAGE_LOGGERS = ("models", "routes", "utils")


class AttendanceServices:
    """The three components sharing one store and one write lock."""

    def __init__(self, store, **options):
        self.store = store
        # one lock per store: start/end and append/clear never interleave
        self.lock = threading.RLock()
        self.ledger = AttendanceLedger(store, on_corrupt=options.get("on_corrupt"), lock=self.lock)
        self.sessions = SessionManager(store, lock=self.lock, **options)
        self.presence = PresenceClient(self.sessions, self.ledger, clock=self.sessions.clock)


def _build_store(app):
    backend = app.config["STORE_BACKEND"]
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        db.init_app(app)
        with app.app_context():
            db.create_all()
        return SqlStore()
    raise ValueError(f"Unknown STORE_BACKEND {backend!r} (expected 'sql' or 'memory')")


def create_app(config=None, **service_options):
    """
    Build the Flask app. Settings come from DEFAULT_CONFIG, then
    ATTENDANCE_* environment variables, then `config`. Extra keyword
    arguments (clock, code_factory, on_corrupt) go to the SessionManager.
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("ATTENDANCE")
    if config:
        app.config.update(config)

    level = app.config["LOG_LEVEL"]
    app.logger.setLevel(level)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level)

    store = _build_store(app)
    app.extensions["attendance"] = AttendanceServices(store, **service_options)
    app.logger.info("Attendance store backend: %s", app.config["STORE_BACKEND"])

    app.register_blueprint(auth_bp)
    app.register_blueprint(lecturer_bp, url_prefix="/lecturer")
    app.register_blueprint(student_bp, url_prefix="/student")
    return app


# -------------------- Run --------------------
if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(debug=True)
