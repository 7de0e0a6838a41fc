"""Create the ledger tables (and optionally the demo roster) for APP_ENV.

Usage: python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from academic_ledger.database.bootstrap import apply_schema, apply_sql_file, list_tables


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: schema.sql -> {target} (tables={len(list_tables(db_config))})")

    if args.seed:
        count = apply_sql_file(db_config, sql_path=REPO_ROOT / "database" / "seed.sql")
        print(f"OK: seed.sql -> {target} ({count} statements)")


if __name__ == "__main__":
    main()
