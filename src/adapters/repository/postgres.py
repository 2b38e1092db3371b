"""
PostgreSQL repository adapter - Implements RegistryPersistence protocol.

This module provides the PostgreSQL implementation of the domain's
persistence port using psycopg3 with raw SQL.

Schema (see migrations/):
- users: one row per registered name (PRIMARY KEY enforces uniqueness)
- confirmation_codes: latest code per name, upserted on every issue
- email_confirmations: presence of a row means the email is confirmed

Concurrency:
------------
The registry checks existence before saving, which is racy across
processes. save_user() therefore inserts with ON CONFLICT DO NOTHING and
reports a zero-row insert as a failure, so exactly one of two concurrent
registrations for the same name succeeds.

All driver errors are translated into PersistenceError so the domain
never sees psycopg types.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import PersistenceError
from src.domain.user import User

logger = logging.getLogger(__name__)


class PostgresRegistryPersistence:
    """
    Implements RegistryPersistence protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[tuple[psycopg.Connection, psycopg.Cursor]]:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                yield conn, cursor
        except psycopg.Error as exc:
            logger.error("Database operation failed: %s", exc)
            raise PersistenceError(f"database operation failed: {exc}") from exc

    def save_user(self, user: User) -> None:
        """
        Insert a user row.

        Raises:
            PersistenceError: If the name is already taken or the insert fails
        """
        sql = """
            INSERT INTO users (name, email, created_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (name) DO NOTHING
        """

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (user.name, user.email))
            conn.commit()
            inserted = cursor.rowcount == 1

        if not inserted:
            raise PersistenceError(f"user {user.name!r} is already stored")

    def user_was_saved(self, name: str) -> bool:
        sql = "SELECT 1 FROM users WHERE name = %s"

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name,))
            return cursor.fetchone() is not None

    def save_confirmation_code(self, name: str, code: str) -> None:
        """
        Upsert the confirmation code for a user (latest write wins).

        The foreign key on users(name) rejects codes for unknown names.
        """
        sql = """
            INSERT INTO confirmation_codes (name, code, issued_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (name) DO UPDATE
            SET code = EXCLUDED.code,
                issued_at = EXCLUDED.issued_at
        """

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name, code))
            conn.commit()

    def get_confirmation_code(self, name: str) -> str:
        sql = "SELECT code FROM confirmation_codes WHERE name = %s"

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name,))
            row = cursor.fetchone()

        if row is None:
            raise PersistenceError(f"no confirmation code stored for {name!r}")
        return row[0]

    def mark_email_as_confirmed(self, name: str) -> None:
        """Record confirmation. A second call keeps the first timestamp."""
        sql = """
            INSERT INTO email_confirmations (name, confirmed_at)
            VALUES (%s, NOW())
            ON CONFLICT (name) DO NOTHING
        """

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name,))
            conn.commit()

    def is_email_confirmed(self, name: str) -> bool:
        sql = "SELECT 1 FROM email_confirmations WHERE name = %s"

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name,))
            return cursor.fetchone() is not None

    def get_user_email(self, name: str) -> str:
        sql = "SELECT email FROM users WHERE name = %s"

        with self._cursor() as (conn, cursor):
            cursor.execute(sql, (name,))
            row = cursor.fetchone()

        if row is None:
            raise PersistenceError(f"user {name!r} is not stored")
        return row[0]


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except (OSError, psycopg.Error) as exc:
            logger.error("Migration failed: %s - %s", sql_file.name, exc)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from exc
