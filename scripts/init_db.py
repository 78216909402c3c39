from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.student_portal.student_portal.storage.bootstrap import apply_schema, list_collections
from src.student_portal.student_portal.storage.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn)
    collections = list_collections(conn)
    print(
        "OK: Applied schema -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(collections={len(collections)})"
    )


if __name__ == "__main__":
    main()
