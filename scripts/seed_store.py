from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.student_portal.student_portal.container import build_store
from src.student_portal.student_portal.storage.defaults import seed_defaults


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the configured record store with demo data.")
    parser.add_argument("--reset", action="store_true", help="clear every collection before seeding")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=settings.STORE_BACKEND,
        data_dir=getattr(settings, "DATA_DIR", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    if args.reset:
        store.reset()
        print(f"OK: Reset {settings.STORE_BACKEND} store to defaults")
        return

    seeded = seed_defaults(store)
    print(f"OK: Seeded {settings.STORE_BACKEND} store ({len(seeded)} collections written)")


if __name__ == "__main__":
    main()
