from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import parse_timestamp
from ..core.enums import CollectionKey, Role
from ..storage.repository import CollectionRepository
from ..storage.store import RecordStore
from .model import SessionUser, Teacher, User
from .repository import SessionRepository, TeacherRepository, UserRepository

logger = logging.getLogger(__name__)


class StoreUserRepository(CollectionRepository[User], UserRepository):
    key = CollectionKey.USERS

    def _from_row(self, row: dict) -> User:
        return User(id=str(row["id"]), password=str(row["password"]), role=Role(row["role"]), name=str(row.get("name", "")))

    def _to_row(self, item: User) -> dict:
        return item.to_dict()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_all() if u.id == user_id), None)

    def add(self, user: User) -> bool:
        return self._rewrite(lambda users: users + [user])

    def update(self, user: User) -> bool:
        if self.get_by_id(user.id) is None:
            return False
        return self._rewrite(
            lambda users: [user if u.id == user.id else u for u in users],
            replaces=lambda row: row.get("id") == user.id,
        )

    def delete_by_id(self, user_id: str) -> bool:
        return self._rewrite(
            lambda users: [u for u in users if u.id != user_id],
            replaces=lambda row: row.get("id") == user_id,
        )


class StoreTeacherRepository(CollectionRepository[Teacher], TeacherRepository):
    key = CollectionKey.TEACHERS

    def _from_row(self, row: dict) -> Teacher:
        return Teacher(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            email=str(row.get("email") or ""),
            department=str(row.get("department") or ""),
            courses=tuple(str(c) for c in row.get("courses") or []),
            qualification=str(row.get("qualification") or ""),
        )

    def _to_row(self, item: Teacher) -> dict:
        return item.to_dict()

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        return next((t for t in self.list_all() if t.id == teacher_id), None)


class StoreSessionRepository(SessionRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_current(self) -> Optional[SessionUser]:
        row = self._store.get(CollectionKey.CURRENT_USER)
        if not row:
            return None
        try:
            return SessionUser(
                user_id=str(row["userId"]),
                name=str(row.get("name", "")),
                role=Role(row["role"]),
                login_time=parse_timestamp(row["loginTime"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed session %r: %s", row, exc)
            return None

    def set_current(self, user: SessionUser) -> bool:
        return self._store.set(CollectionKey.CURRENT_USER, user.to_dict())

    def clear_current(self) -> bool:
        return self._store.remove(CollectionKey.CURRENT_USER)
