from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_analytics.staff_analytics.common.logging_config import setup_logging
from src.staff_analytics.staff_analytics.database.bootstrap import run_sql_file


def main() -> None:
    setup_logging("INFO")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = run_sql_file(db_config, path=REPO_ROOT / "database" / "seed.sql")

    print(
        "OK: Seeded demo organization 'org-demo' -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"({count} statements)"
    )


if __name__ == "__main__":
    main()
