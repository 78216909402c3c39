from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SessionUser, Teacher, User


class UserRepository(Protocol):
    """Repository interface for login accounts."""

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def add(self, user: User) -> bool:
        raise NotImplementedError

    def update(self, user: User) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError


class TeacherRepository(Protocol):
    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError


class SessionRepository(Protocol):
    """Holds the single signed-in user (``currentUser``).

    One record per store, as in the browser portal: the last login wins.
    """

    def get_current(self) -> Optional[SessionUser]:
        raise NotImplementedError

    def set_current(self, user: SessionUser) -> bool:
        raise NotImplementedError

    def clear_current(self) -> bool:
        raise NotImplementedError
