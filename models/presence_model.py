import logging
from datetime import datetime

from models.attendance_model import AttendanceRecord
from utils.code_utils import normalize_code
from utils.results import (ALREADY_MARKED, INVALID_CODE, NETWORK_REQUIRED,
                           NO_ACTIVE_SESSION, Result)
from utils.time_utils import format_date, format_time

logger = logging.getLogger(__name__)


class PresenceClient:
    """Gate between a student's submitted code and the ledger."""

    def __init__(self, sessions, ledger, clock=datetime.now):
        self.sessions = sessions
        self.ledger = ledger
        self.clock = clock

    def check_status(self, student_id):
        session = self.sessions.current()
        if session and session.is_active:
            record = self.ledger.has_marked(student_id, session.session_code)
            if record:
                return {"alreadyMarked": True, "at": record.timestamp}
        return {"alreadyMarked": False, "at": None}

    def submit(self, student_id, student_name, submitted_code, network_connected):
        # network_connected is whatever the caller claims; nothing checks it
        if not network_connected:
            return Result.failure(NETWORK_REQUIRED)

        session = self.sessions.current()
        if not session or not session.is_active:
            return Result.failure(NO_ACTIVE_SESSION)

        if normalize_code(submitted_code) != session.session_code:
            logger.info("Invalid code from %s for session %s", student_id, session.session_code)
            return Result.failure(INVALID_CODE)

        now = self.clock()
        record = AttendanceRecord(
            student_id=student_id,
            student_name=student_name,
            timestamp=format_time(now),
            date=format_date(now),
            session_code=session.session_code,
        )
        if not self.ledger.append(record):
            return Result.failure(ALREADY_MARKED)

        logger.info("%s (%s) marked present in session %s at %s",
                    student_name, student_id, session.session_code, record.timestamp)
        return Result.success(record.timestamp)
