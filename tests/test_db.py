import pytest

from core import db


def test_affected_rows_parses_command_status():
    assert db.affected_rows("DELETE 3") == 3
    assert db.affected_rows("DELETE 0") == 0
    assert db.affected_rows("") == 0


def test_sslmode_is_stripped_from_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/club?sslmode=require&application_name=api")

    assert db.database_url() == "postgresql://u:p@db:5432/club?application_name=api"


def test_missing_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(RuntimeError):
        db.database_url()


def test_pool_must_be_connected_first():
    database = db.Database("postgresql://localhost/club")

    with pytest.raises(RuntimeError):
        _ = database.pool


def test_schema_declares_phone_uniqueness():
    sql = db.SCHEMA_PATH.read_text(encoding="utf-8")

    assert "CONSTRAINT waitlist_phone_key UNIQUE (phone)" in sql
