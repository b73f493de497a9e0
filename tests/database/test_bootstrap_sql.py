from pathlib import Path

from hr_portal.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splits_on_semicolons_outside_quotes_and_comments():
    sql = """
    -- leading comment; with a semicolon
    CREATE TABLE a (x VARCHAR(10) DEFAULT 'a;b');
    INSERT INTO a VALUES ('it\\'s; fine');
    """

    stmts = list(iter_sql_statements(sql))

    assert len(stmts) == 2
    assert stmts[0].startswith("CREATE TABLE a")
    assert "'a;b'" in stmts[0]
    assert stmts[1].startswith("INSERT INTO a")


def test_schema_file_has_no_database_switch_after_strip():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    stmts = list(iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in stmts)
    assert any("uq_attendance_employee_day" in s for s in stmts)
    assert len(stmts) == 3
