from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..core.results import OperationResult
from .model import SessionUser, User
from .repository import SessionRepository, UserRepository

logger = logging.getLogger(__name__)

DASHBOARD_PATHS = {
    Role.ADMIN: "/api/dashboard/admin",
    Role.TEACHER: "/api/dashboard/teacher",
    Role.STUDENT: "/api/dashboard/student",
}


class AuthService:
    """Use case: authenticate users and keep the current session."""

    def __init__(self, users: UserRepository, sessions: SessionRepository):
        self._users = users
        self._sessions = sessions

    def login(self, user_id: str, password: str, role: Role | str, *, now: Optional[datetime] = None) -> SessionUser:
        if not user_id or not password or not role:
            raise AuthenticationError("Please fill in all fields")

        try:
            role = Role(role)
        except ValueError:
            raise AuthenticationError("Invalid credentials. Please check your ID, password, and role.") from None

        user = self._users.get_by_id(user_id)
        if not user or user.role != role or not _password_matches(user, password):
            raise AuthenticationError("Invalid credentials. Please check your ID, password, and role.")

        session = SessionUser(user_id=user.id, name=user.name, role=user.role, login_time=now or now_utc())
        if not self._sessions.set_current(session):
            logger.warning("Session for %s could not be persisted", user.id)
        logger.info("User %s logged in as %s", user.id, user.role.value)
        return session

    def logout(self, user_id: Optional[str] = None) -> None:
        """Clear the stored session.

        With ``user_id`` the record is only cleared when it belongs to that
        user, so one web client signing out leaves another's record alone.
        """
        current = self.get_current_user()
        if user_id is not None and current is not None and current.user_id != user_id:
            return
        self._sessions.clear_current()

    def update_password(
        self, current_password: str, new_password: str, *, user_id: Optional[str] = None
    ) -> OperationResult:
        if user_id is None:
            current = self.get_current_user()
            if current is None:
                return OperationResult(success=False, message="Not logged in")
            user_id = current.user_id

        user = self._users.get_by_id(user_id)
        if user is None:
            return OperationResult(success=False, message="User not found")
        if not _password_matches(user, current_password):
            return OperationResult(success=False, message="Current password is incorrect")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        if not self._users.update(replace(user, password=generate_password_hash(new_password))):
            return OperationResult(success=False, message="Failed to update password")
        logger.info("Password updated for %s", user.id)
        return OperationResult(success=True, message="Password updated successfully")

    def get_current_user(self) -> Optional[SessionUser]:
        return self._sessions.get_current()

    def is_logged_in(self) -> bool:
        return self.get_current_user() is not None

    def has_role(self, role: Role) -> bool:
        current = self.get_current_user()
        return bool(current) and current.role == role

    @staticmethod
    def redirect_for(role: Role | str | None) -> str:
        try:
            return DASHBOARD_PATHS[Role(role)]
        except ValueError:
            return "/"


def _password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password, password or "")
    except ValueError:
        # e.g. placeholder or corrupted hashes
        return False
