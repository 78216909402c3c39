from __future__ import annotations

from typing import Callable, Optional

from .store import QuotaExceededError, RecordStore, SerializedRecordStore


class InMemoryRecordStore(SerializedRecordStore):
    """Process-local store.

    Payloads are kept serialized so every ``get`` hands out an independent copy.
    ``quota_bytes`` caps the total payload size the way a browser storage
    quota does.
    """

    def __init__(
        self,
        *,
        quota_bytes: Optional[int] = None,
        seeder: Optional[Callable[[RecordStore], None]] = None,
    ):
        super().__init__(seeder=seeder)
        self._data: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, payload: str) -> None:
        if self._quota_bytes is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(payload) > self._quota_bytes:
                raise QuotaExceededError(f"Storage quota of {self._quota_bytes} bytes exceeded")
        self._data[key] = payload

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)
