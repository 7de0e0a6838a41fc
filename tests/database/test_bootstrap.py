from __future__ import annotations

from pathlib import Path

from mysql.connector.errors import IntegrityError

from academic_ledger.database.bootstrap import split_statements
from academic_ledger.database.connection import DBConfig
from academic_ledger.database.mysql_base import duplicate_key_name

SQL_DIR = Path(__file__).resolve().parents[2] / "database"


def test_split_drops_database_lines_and_comments():
    sql = """
    CREATE DATABASE IF NOT EXISTS other_db;
    USE other_db;
    -- roster
    CREATE TABLE t (name VARCHAR(8) DEFAULT 'a;b');
    INSERT INTO t VALUES ('it''s'), ("x;y")
    """

    stmts = split_statements(sql)

    assert stmts == [
        "CREATE TABLE t (name VARCHAR(8) DEFAULT 'a;b')",
        "INSERT INTO t VALUES ('it''s'), (\"x;y\")",
    ]


def test_schema_file_splits_into_table_statements():
    stmts = split_statements((SQL_DIR / "schema.sql").read_text(encoding="utf-8"))

    assert len(stmts) == 5
    assert all(s.upper().startswith("CREATE TABLE") for s in stmts)
    assert any("uq_fee_paid_slot" in s for s in stmts)


def test_duplicate_key_name_reads_the_violated_key():
    exc = IntegrityError(msg="Duplicate entry 'STU001|May|2026' for key 'fee_records.uq_fee_paid_slot'", errno=1062)
    assert duplicate_key_name(exc) == "uq_fee_paid_slot"

    old_server = IntegrityError(msg="Duplicate entry 'pay_1' for key 'uq_fee_payment_id'", errno=1062)
    assert duplicate_key_name(old_server) == "uq_fee_payment_id"


def test_duplicate_key_name_ignores_other_integrity_errors():
    fk = IntegrityError(msg="Cannot add or update a child row", errno=1452)
    assert duplicate_key_name(fk) is None


def test_db_config_fills_missing_values():
    cfg = DBConfig.from_dict({"host": "db", "port": "3307", "user": "", "database": None})

    assert cfg == DBConfig(host="db", port=3307, user="root", password="", database="academic_ledger")
    assert "database" not in cfg.connect_kwargs(with_database=False)
    assert cfg.connect_kwargs()["database"] == "academic_ledger"
