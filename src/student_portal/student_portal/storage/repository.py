from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from ..core.enums import CollectionKey
from ..core.exceptions import ValidationError
from .store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionRepository(Generic[T]):
    """Typed view over one collection of a record store.

    Every read loads the whole collection and every write replaces it.
    A missing collection reads as empty. Rows that cannot be mapped to a
    record are skipped on read (and logged); ``_rewrite`` writes them back
    unchanged so a mutation only touches the record it targets.
    """

    key: CollectionKey

    def __init__(self, store: RecordStore):
        self._store = store

    def _from_row(self, row: dict) -> T:
        raise NotImplementedError

    def _to_row(self, item: T) -> dict:
        raise NotImplementedError

    def _load(self) -> tuple[list[T], list[Any]]:
        """Stored collection split into mapped records and rows left as stored."""
        rows = self._store.get(self.key)
        if rows is None:
            return [], []
        if not isinstance(rows, list):
            logger.warning("Collection %r is not a list; treating it as empty", self.key.value)
            return [], []

        items: list[T] = []
        unmapped: list[Any] = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping non-object %s row %r", self.key.value, row)
                unmapped.append(row)
                continue
            try:
                items.append(self._from_row(row))
            except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as exc:
                logger.warning("Skipping malformed %s row %r: %s", self.key.value, row, exc)
                unmapped.append(row)
        return items, unmapped

    def list_all(self) -> list[T]:
        items, _ = self._load()
        return items

    def save_all(self, items: Iterable[T]) -> bool:
        """Replace the whole collection with ``items``."""
        return self._store.set(self.key, [self._to_row(item) for item in items])

    def _rewrite(
        self,
        change: Callable[[list[T]], list[T]],
        *,
        replaces: Optional[Callable[[dict], bool]] = None,
    ) -> bool:
        """Apply ``change`` to the mapped records and write the collection back.

        Unmapped rows are kept, except object rows matched by ``replaces``
        (the stored identity of the record being replaced or deleted).
        """
        items, unmapped = self._load()
        kept = [row for row in unmapped if not (replaces and isinstance(row, dict) and replaces(row))]
        return self._store.set(self.key, [self._to_row(item) for item in change(items)] + kept)


def replace_by_key(items: list, item) -> list:
    """Swap in ``item`` where a record with the same ``key`` sits, else append it."""
    out = [item if existing.key == item.key else existing for existing in items]
    if not any(existing.key == item.key for existing in items):
        out.append(item)
    return out
