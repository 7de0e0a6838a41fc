from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Yield ``(connection, cursor)`` for one transaction.

    Commits when the block exits normally and rolls back when it raises.
    """

    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
    except Exception:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cur.close()
        conn.close()


def first_row(cur) -> Optional[dict[str, Any]]:
    return cur.fetchone() or None


def all_rows(cur) -> list[dict[str, Any]]:
    return list(cur.fetchall() or [])


def duplicate_key_name(exc: IntegrityError) -> Optional[str]:
    """Name of the unique key a MySQL 1062 error violated, or None for other errors.

    The server message reads: Duplicate entry '...' for key 'table.key_name'.
    """

    if getattr(exc, "errno", None) != errorcode.ER_DUP_ENTRY:
        return None
    msg = str(getattr(exc, "msg", "") or exc)
    marker = "for key '"
    pos = msg.rfind(marker)
    if pos < 0:
        return ""
    key = msg[pos + len(marker):].rstrip("'")
    return key.rsplit(".", 1)[-1]
