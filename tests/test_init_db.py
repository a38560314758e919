"""Tests for table creation on the configured database."""

from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

import patchql.db
from patchql.db import session as db_session_module
from patchql.init_db import init_db


def test_package_exports_session_factory_and_table_creation():
    assert patchql.db.SessionLocal is db_session_module.SessionLocal
    assert patchql.db.create_tables is db_session_module.create_tables


def test_init_db_creates_the_read_model(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(db_session_module, "engine", engine)

    init_db()

    tables = set(inspect(engine).get_table_names())
    assert {"authors", "contacts", "keys", "messages", "threads"} <= tables
    engine.dispose()
