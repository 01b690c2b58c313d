"""Shared fixtures.

Operation tests run against every backend through the ``store`` fixture. The
PostgreSQL case needs a scratch database named by ``TEST_DATABASE_NAME``
(connection details come from the usual ``DATABASE_*`` variables) and is
skipped otherwise.
"""

import os
from pathlib import Path

import pytest

from taskboard import users
from taskboard.config import Settings
from taskboard.storage import MemoryStore, PostgresStore

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def postgres_settings():
    name = os.getenv("TEST_DATABASE_NAME")
    if not name:
        pytest.skip("TEST_DATABASE_NAME not set")
    from alembic import command
    from alembic.config import Config

    os.environ["DATABASE_NAME"] = name
    command.upgrade(Config(str(ROOT / "alembic.ini")), "head")
    return Settings.from_env()


@pytest.fixture(params=["memory", "postgres"])
def store(request):
    if request.param == "memory":
        yield MemoryStore()
        return
    settings = request.getfixturevalue("postgres_settings")
    pg = PostgresStore(settings.connection_params())
    yield pg
    conn = pg.connect()
    try:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE tasks, board_columns, boards, users RESTART IDENTITY")
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def alice(store):
    return users.register(store, "alice@example.com", "correct horse").id


@pytest.fixture
def bob(store):
    return users.register(store, "bob@example.com", "battery staple").id
