from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

from .store import RecordStore, SerializedRecordStore


class JsonFileRecordStore(SerializedRecordStore):
    """One ``<key>.json`` file per collection inside ``data_dir``."""

    def __init__(self, data_dir: str | Path, *, seeder: Optional[Callable[[RecordStore], None]] = None):
        super().__init__(seeder=seeder)
        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, payload: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)

    def _delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
