# utils/store.py
import json
import logging
import threading

from models import db
from models.kv_model import StoredValue

logger = logging.getLogger(__name__)

# Keys shared by every component that reads or writes the store
CURRENT_USER_KEY = "currentUser"
ACTIVE_SESSION_KEY = "activeAttendanceSession"
ATTENDANCE_RECORDS_KEY = "attendanceRecords"


class KeyValueStore:
    """Synchronous string key -> string value store. Last writer wins."""

    def get(self, key):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError

    def remove(self, key):
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def remove(self, key):
        self._data.pop(key, None)


class SqlStore(KeyValueStore):
    """Store backed by the stored_value table. Needs an app context."""

    def __init__(self):
        self._write_lock = threading.Lock()

    def get(self, key):
        # skip the identity map so a value committed by another request is seen
        row = db.session.get(StoredValue, key, populate_existing=True)
        return row.value if row else None

    def set(self, key, value):
        with self._write_lock:
            db.session.merge(StoredValue(key=key, value=value))
            db.session.commit()

    def remove(self, key):
        with self._write_lock:
            row = db.session.get(StoredValue, key)
            if row is not None:
                db.session.delete(row)
                db.session.commit()


def log_corrupt_value(key, raw, error):
    logger.warning("Ignoring malformed value for %r (%s): %.80r", key, error, raw)


def read_json(store, key, default=None, on_corrupt=None):
    """
    Read and decode a JSON value. A missing key returns `default`; a value
    that fails to decode also returns `default` and is reported through
    `on_corrupt(key, raw, error)` instead of raising.
    """
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        (on_corrupt or log_corrupt_value)(key, raw, e)
        return default


def write_json(store, key, value):
    store.set(key, json.dumps(value))
