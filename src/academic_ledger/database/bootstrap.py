"""Apply the SQL scripts under ``database/`` to a MySQL server.

The scripts may carry their own ``CREATE DATABASE``/``USE`` lines for manual
use; those are dropped so the configured database name always wins.
"""

from __future__ import annotations

import re
from contextlib import closing
from pathlib import Path

import mysql.connector

from .connection import DBConfig

_DATABASE_LINES = re.compile(r"^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;[ \t]*$", re.IGNORECASE | re.MULTILINE)
_TOKENS = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^;'"-]+|-""", re.DOTALL)


def split_statements(sql: str) -> list[str]:
    """Split a script on top-level ``;``. Quoted text is kept as is, ``--`` comments are dropped."""

    statements: list[str] = []
    current: list[str] = []
    for match in _TOKENS.finditer(_DATABASE_LINES.sub("", sql)):
        token = match.group(0)
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(current).strip()
            if stmt:
                statements.append(stmt)
            current = []
            continue
        current.append(token)

    tail = "".join(current).strip()
    if tail:
        statements.append(tail)
    return statements


def _open(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(_open(target, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_sql_file(db_config: dict, *, sql_path: str | Path) -> int:
    """Run every statement of ``sql_path`` in one session; returns how many ran."""

    statements = split_statements(Path(sql_path).read_text(encoding="utf-8"))
    with closing(_open(DBConfig.from_dict(db_config))) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    return len(statements)


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    ensure_database_exists(db_config)
    return apply_sql_file(db_config, sql_path=schema_path)


def list_tables(db_config: dict) -> list[str]:
    with closing(_open(DBConfig.from_dict(db_config))) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
