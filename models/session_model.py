import logging
import threading
from datetime import datetime

from utils.code_utils import generate_session_code
from utils.store import ACTIVE_SESSION_KEY, read_json, write_json
from utils.time_utils import format_date, format_time

logger = logging.getLogger(__name__)


class AttendanceSession:
    def __init__(self, is_active, start_time, date, session_code, lecturer_name):
        self.is_active = is_active
        self.start_time = start_time
        self.date = date
        self.session_code = session_code
        self.lecturer_name = lecturer_name

    @classmethod
    def from_dict(cls, data):
        return cls(
            is_active=bool(data.get("isActive")),
            start_time=data.get("startTime"),
            date=data.get("date"),
            session_code=data.get("sessionCode"),
            lecturer_name=data.get("lecturerName"),
        )

    def to_dict(self):
        return {
            "isActive": self.is_active,
            "startTime": self.start_time,
            "date": self.date,
            "sessionCode": self.session_code,
            "lecturerName": self.lecturer_name,
        }

    def __eq__(self, other):
        return isinstance(other, AttendanceSession) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"AttendanceSession({self.to_dict()!r})"


class SessionManager:
    """
    Owns the single published session slot.

    NoSession --start--> Active --end--> Ended --start--> Active.
    start() on an Active session replaces it with a new code.
    """

    def __init__(self, store, clock=datetime.now, code_factory=generate_session_code,
                 on_corrupt=None, lock=None):
        self.store = store
        self.clock = clock
        self.code_factory = code_factory
        self.on_corrupt = on_corrupt
        self.lock = lock or threading.RLock()

    def current(self):
        data = read_json(self.store, ACTIVE_SESSION_KEY, on_corrupt=self.on_corrupt)
        if data is None:
            return None
        if not isinstance(data, dict):
            if self.on_corrupt:
                self.on_corrupt(ACTIVE_SESSION_KEY, data, "expected an object")
            else:
                logger.warning("Ignoring malformed session value: %.80r", data)
            return None
        return AttendanceSession.from_dict(data)

    def _publish(self, session):
        write_json(self.store, ACTIVE_SESSION_KEY, session.to_dict())

    def start(self, lecturer_name):
        now = self.clock()
        with self.lock:
            previous = self.current()
            if previous and previous.is_active:
                logger.info("Replacing active session %s", previous.session_code)
            session = AttendanceSession(
                is_active=True,
                start_time=format_time(now),
                date=format_date(now),
                session_code=self.code_factory(),
                lecturer_name=lecturer_name,
            )
            self._publish(session)
        logger.info("Session %s started by %s", session.session_code, lecturer_name)
        return session

    def end(self):
        with self.lock:
            session = self.current()
            if session is None:
                return None
            if session.is_active:
                session.is_active = False
                self._publish(session)
                logger.info("Session %s ended", session.session_code)
            return session

    def live_records(self, ledger):
        session = self.current()
        if not session or not session.is_active:
            return []
        return ledger.filter_by_session(session.date, session.session_code)
