from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.site_ledger.site_ledger.database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the ledger database and its tables.")
    parser.add_argument("--seed", action="store_true", help="also load demo data and demo users")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    database_dir = REPO_ROOT / "database"

    apply_schema(db_config, schema_path=database_dir / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        ensure_demo_users(db_config)

    tables = list_tables(db_config)
    print(
        f"OK: schema ready on {db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}"
        f"/{db_config.get('database')} ({len(tables)} tables: {', '.join(sorted(tables))})"
    )


if __name__ == "__main__":
    main()
