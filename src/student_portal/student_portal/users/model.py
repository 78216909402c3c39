from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..common.datetime_utils import format_timestamp
from ..common.validators import require_non_empty
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Login account.

    ``password`` holds a werkzeug password hash, never the clear text.
    """

    id: str
    password: str
    role: Role
    name: str

    def __post_init__(self):
        require_non_empty(self.id, "User id")
        object.__setattr__(self, "role", Role(self.role))

    def to_dict(self) -> dict:
        return {"id": self.id, "password": self.password, "role": self.role.value, "name": self.name}


@dataclass(frozen=True)
class SessionUser:
    """What we store under ``currentUser`` after login."""

    user_id: str
    name: str
    role: Role
    login_time: datetime

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "loginTime": format_timestamp(self.login_time),
        }


@dataclass(frozen=True)
class Teacher:
    id: str
    name: str
    email: str = ""
    department: str = ""
    courses: tuple[str, ...] = field(default_factory=tuple)
    qualification: str = ""

    def __post_init__(self):
        require_non_empty(self.id, "Teacher id")
        object.__setattr__(self, "courses", tuple(self.courses))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "courses": list(self.courses),
            "qualification": self.qualification,
        }
