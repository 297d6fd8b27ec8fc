# utils/results.py
NETWORK_REQUIRED = "NetworkRequired"
NO_ACTIVE_SESSION = "NoActiveSession"
INVALID_CODE = "InvalidCode"
ALREADY_MARKED = "AlreadyMarked"
EMPTY_EXPORT_SET = "EmptyExportSet"

MESSAGES = {
    NETWORK_REQUIRED: "Network connection required. Please connect to the classroom network.",
    NO_ACTIVE_SESSION: "No active attendance session. Please wait for your lecturer to start the session.",
    INVALID_CODE: "Invalid session code. Please check the code displayed by your lecturer.",
    ALREADY_MARKED: "Attendance already marked for this session.",
    EMPTY_EXPORT_SET: "No records to export for this date",
}


class Result:
    """Success/failure outcome returned by every fallible operation."""

    def __init__(self, ok, value=None, error=None):
        self.ok = ok
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value=None):
        return cls(True, value=value)

    @classmethod
    def failure(cls, error):
        return cls(False, error=error)

    @property
    def message(self):
        return MESSAGES.get(self.error) if self.error else None

    def __bool__(self):
        return self.ok

    def __repr__(self):
        if self.ok:
            return f"Result.success({self.value!r})"
        return f"Result.failure({self.error!r})"
