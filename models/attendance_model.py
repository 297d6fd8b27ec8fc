import logging
import threading

from utils.store import ATTENDANCE_RECORDS_KEY, read_json, write_json

logger = logging.getLogger(__name__)


class AttendanceRecord:
    def __init__(self, student_id, student_name, timestamp, date, session_code=None):
        self.student_id = student_id
        self.student_name = student_name
        self.timestamp = timestamp
        self.date = date
        self.session_code = session_code

    @classmethod
    def from_dict(cls, data):
        return cls(
            student_id=data.get("studentId"),
            student_name=data.get("studentName"),
            timestamp=data.get("timestamp"),
            date=data.get("date"),
            session_code=data.get("sessionCode"),
        )

    def to_dict(self):
        data = {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "timestamp": self.timestamp,
            "date": self.date,
        }
        # legacy records carry no code at all
        if self.session_code is not None:
            data["sessionCode"] = self.session_code
        return data

    def __eq__(self, other):
        return isinstance(other, AttendanceRecord) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"AttendanceRecord({self.student_id!r}, {self.student_name!r}, "
                f"{self.timestamp!r}, {self.date!r}, {self.session_code!r})")


class AttendanceLedger:
    """
    Append-only list of attendance records kept under one store key.

    A (student_id, session_code) pair is stored at most once; the only way
    to remove records is clear(), which drops all of them.
    """

    def __init__(self, store, on_corrupt=None, lock=None):
        self.store = store
        self.on_corrupt = on_corrupt
        # guards the read-modify-write of the whole list
        self.lock = lock or threading.RLock()

    def _load(self):
        raw = read_json(self.store, ATTENDANCE_RECORDS_KEY, default=[], on_corrupt=self.on_corrupt)
        if not isinstance(raw, list):
            self._report(raw, "expected a list")
            return []
        records = []
        for entry in raw:
            if isinstance(entry, dict):
                records.append(AttendanceRecord.from_dict(entry))
            else:
                self._report(entry, "expected an object")
        return records

    def _report(self, raw, reason):
        if self.on_corrupt:
            self.on_corrupt(ATTENDANCE_RECORDS_KEY, raw, reason)
        else:
            logger.warning("Skipping malformed attendance data (%s): %.80r", reason, raw)

    def _save(self, records):
        write_json(self.store, ATTENDANCE_RECORDS_KEY, [r.to_dict() for r in records])

    def append(self, record):
        with self.lock:
            records = self._load()
            if record.session_code is not None and any(
                r.student_id == record.student_id and r.session_code == record.session_code
                for r in records
            ):
                logger.warning("Rejected duplicate record for %s in session %s",
                               record.student_id, record.session_code)
                return False
            records.append(record)
            self._save(records)
            return True

    def all(self):
        return self._load()

    def has_marked(self, student_id, session_code):
        for r in self._load():
            if r.student_id == student_id and r.session_code == session_code:
                return r
        return None

    def filter_by_date(self, date):
        return [r for r in self._load() if r.date == date]

    def filter_by_session(self, date, session_code):
        return [r for r in self._load() if r.date == date and r.session_code == session_code]

    def unique_dates(self):
        # descending on the stored text: "1/2/2024" is listed before "1/10/2024"
        dates = set()
        for r in self._load():
            if isinstance(r.date, str):
                dates.add(r.date)
            elif r.date is not None:
                self._report(r.to_dict(), "date is not text")
        return sorted(dates, reverse=True)

    def clear(self):
        logger.warning("Clearing all attendance records")
        with self.lock:
            write_json(self.store, ATTENDANCE_RECORDS_KEY, [])
