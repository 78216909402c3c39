from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol, Union

from ..core.enums import CollectionKey

logger = logging.getLogger(__name__)

StoreKey = Union[CollectionKey, str]


class QuotaExceededError(OSError):
    """Raised by a backend when a write would exceed its capacity."""


class RecordStore(Protocol):
    """Key-value store of whole JSON collections.

    Reads return a fresh copy (or ``None`` when the key is absent or its
    payload is corrupt). Writes replace the whole collection and report
    failure as ``False`` instead of raising.
    """

    def get(self, key: StoreKey) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: StoreKey, value: Any) -> bool:
        raise NotImplementedError

    def remove(self, key: StoreKey) -> bool:
        raise NotImplementedError

    def clear_all(self) -> None:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError


def key_name(key: StoreKey) -> str:
    return key.value if isinstance(key, CollectionKey) else str(key)


class SerializedRecordStore(ABC):
    """Shared JSON handling for stores that persist text payloads.

    Subclasses only move raw strings around; serialization, corrupt-payload
    handling and failure logging live here.
    """

    backend_errors: tuple[type[BaseException], ...] = (OSError,)

    def __init__(self, *, seeder: Optional[Callable[["RecordStore"], None]] = None):
        self._seeder = seeder

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def _write(self, key: str, payload: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _delete(self, key: str) -> None:
        raise NotImplementedError

    def get(self, key: StoreKey) -> Optional[Any]:
        name = key_name(key)
        try:
            payload = self._read(name)
        except self.backend_errors:
            logger.exception("Error reading %r from storage", name)
            return None
        if payload is None:
            return None
        try:
            return json.loads(payload)
        except ValueError:
            logger.warning("Discarding corrupt payload stored under %r", name)
            return None

    def set(self, key: StoreKey, value: Any) -> bool:
        name = key_name(key)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Error serializing %r for storage", name)
            return False
        try:
            self._write(name, payload)
        except self.backend_errors:
            logger.exception("Error writing %r to storage", name)
            return False
        return True

    def remove(self, key: StoreKey) -> bool:
        name = key_name(key)
        try:
            self._delete(name)
        except self.backend_errors:
            logger.exception("Error removing %r from storage", name)
            return False
        return True

    def clear_all(self) -> None:
        for key in CollectionKey:
            self.remove(key)
        logger.info("All storage cleared")

    def reset(self) -> None:
        self.clear_all()
        if self._seeder is not None:
            self._seeder(self)
        logger.info("Storage reset to defaults")
