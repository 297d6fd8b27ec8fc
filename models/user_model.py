import time
import uuid

STUDENT = "student"
LECTURER = "lecturer"
ROLES = (STUDENT, LECTURER)


class User:
    """Whoever typed a name and picked a role. No authentication."""

    def __init__(self, name, role, id):
        self.name = name
        self.role = role
        self.id = id

    @classmethod
    def login(cls, name, role, now=time.time):
        name = name.strip() if isinstance(name, str) else ""
        if not name or role not in ROLES:
            return None
        # the random suffix keeps ids unique when two logins share a millisecond
        return cls(name, role, f"{role}-{int(now() * 1000)}-{uuid.uuid4().hex[:8]}")

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or data.get("role") not in ROLES:
            return None
        return cls(data.get("name"), data.get("role"), data.get("id"))

    def to_dict(self):
        return {"name": self.name, "role": self.role, "id": self.id}
