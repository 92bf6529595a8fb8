from __future__ import annotations

import importlib

from class_management.config import get_settings_module
from class_management.container import build_container
from class_management.database.bootstrap import ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(mongo_config=dict(settings.MONGO_CONFIG))

    created = ensure_demo_users(container.conn)
    print(f"OK: Seeded database -> {container.conn.config.redacted_uri} (new users={created})")


if __name__ == "__main__":
    main()
