from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worktrack.worktrack.database.bootstrap import apply_sql_file, ensure_demo_users
from src.worktrack.worktrack.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    # Sample tasks reference the demo accounts by e-mail.
    ensure_demo_users(db_config)
    apply_sql_file(db_config, path=REPO_ROOT / "database" / "seed.sql")

    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
