"""Backup every collection of the configured store into one JSON file."""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.student_portal.student_portal.container import build_store
from src.student_portal.student_portal.core.enums import CollectionKey


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=settings.STORE_BACKEND,
        data_dir=getattr(settings, "DATA_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"student_portal_{ts}.json"

    dump = {key.value: store.get(key) for key in CollectionKey}
    out_file.write_text(json.dumps(dump, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
