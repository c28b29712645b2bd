"""
Shared pytest fixtures for dbuser tests.

This module provides:
- A file-backed SQLite user table with one row per credential scheme
- A ``QueryConfiguration`` using SQLite placeholders
- A ``UserRepository`` wired to a read-only ``SQLiteAdapter``

Usage:
    def test_lookup(repository):
        assert repository.find_user_by_username("alice").unwrap()["email"] == "alice@example.com"
"""

from __future__ import annotations

import hashlib
import sqlite3
from pathlib import Path

import bcrypt
import pytest
import structlog

from dbuser.core.adapters import SQLiteAdapter, StaticDataSourceProvider
from dbuser.users.config import QueryConfiguration
from dbuser.users.repository import UserRepository


# =============================================================================
# Credential fixtures
# =============================================================================

PBKDF2_SECRET = "$1000$NaCl$" + hashlib.pbkdf2_hmac(
    "sha256", b"secret", b"NaCl", 1000, dklen=32
).hex()

SHA256_SECRET = hashlib.sha256(b"secret").hexdigest()


USERS = [
    # id, username, email, first_name, password_hash
    (1, "alice", "alice@example.com", "Alice", SHA256_SECRET),
    (2, "bob", "bob@example.com", "Bob", PBKDF2_SECRET),
    (3, "carol", "carol@example.org", None, "not-a-hash"),
    (4, "dave", "dave@example.org", "Dave", None),
    (5, "mallory", "mallory@example.net", "Mallory", ""),
]


def create_user_table(path: Path, rows=USERS) -> Path:
    conn = sqlite3.connect(path)
    try:
        conn.execute(
            """
            CREATE TABLE users (
                id INTEGER PRIMARY KEY,
                username TEXT NOT NULL UNIQUE,
                email TEXT,
                first_name TEXT,
                password_hash TEXT
            )
            """
        )
        conn.executemany("INSERT INTO users VALUES (?, ?, ?, ?, ?)", rows)
        conn.commit()
    finally:
        conn.close()
    return path


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """SQLite file holding the ``users`` table."""
    return create_user_table(tmp_path / "users.db")


@pytest.fixture
def bcrypt_user(db_path: Path) -> str:
    """Adds user ``erin`` whose stored credential is a bcrypt hash of ``secret``."""
    stored = bcrypt.hashpw(b"secret", bcrypt.gensalt(rounds=4)).decode("ascii")
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "INSERT INTO users VALUES (?, ?, ?, ?, ?)",
            (6, "erin", "erin@example.com", "Erin", stored),
        )
        conn.commit()
    finally:
        conn.close()
    return "erin"


@pytest.fixture
def adapter(db_path: Path) -> SQLiteAdapter:
    return SQLiteAdapter(path=str(db_path))


@pytest.fixture
def provider(adapter: SQLiteAdapter) -> StaticDataSourceProvider:
    return StaticDataSourceProvider(adapter)


QUERY_TEMPLATES = {
    "list_all": "SELECT id, username, email, first_name FROM users ORDER BY id",
    "count": "SELECT count(*) FROM users",
    "find_by_id": "SELECT id, username, email, first_name FROM users WHERE id = ?",
    "find_by_username": "SELECT id, username, email, first_name FROM users WHERE username = ?",
    "find_by_email": "SELECT id, username, email, first_name FROM users WHERE email = ?",
    "find_by_search_term": (
        "SELECT id, username, email, first_name FROM users "
        "WHERE username LIKE ? ORDER BY id"
    ),
    "find_password_hash": "SELECT password_hash FROM users WHERE username = ?",
}


@pytest.fixture
def query_templates() -> dict[str, str]:
    return dict(QUERY_TEMPLATES)


@pytest.fixture
def query_config(query_templates) -> QueryConfiguration:
    return QueryConfiguration(**query_templates, rdbms="sqlite")


@pytest.fixture
def repository(
    provider: StaticDataSourceProvider, query_config: QueryConfiguration
) -> UserRepository:
    return UserRepository(provider, query_config)


# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep bound structlog context from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
