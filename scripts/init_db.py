from __future__ import annotations

import importlib

from class_management.config import get_settings_module
from class_management.container import build_container
from class_management.database.bootstrap import ensure_indexes, list_collections


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(mongo_config=dict(settings.MONGO_CONFIG))

    ensure_indexes(container.conn)
    collections = list_collections(container.conn)
    print(
        "OK: Indexes ready -> "
        f"{container.conn.config.redacted_uri} db={settings.MONGO_CONFIG['database']} "
        f"(collections={len(collections)})"
    )


if __name__ == "__main__":
    main()
