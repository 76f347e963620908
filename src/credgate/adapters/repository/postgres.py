"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness:
-----------
The UNIQUE constraint on accounts.email is the final authority. The
registration workflow pre-checks with find_by_email(), but two concurrent
requests can both pass that check; the losing INSERT raises UniqueViolation,
which is translated to DuplicateIdentityError.

Timeouts:
---------
Every call waits at most ``timeout_seconds`` for a pooled connection and sets
a transaction-local statement_timeout. A cancelled INSERT is rolled back by
the server, so a timed-out create never leaves an account behind.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool, PoolTimeout

from credgate.domain.exceptions import DuplicateIdentityError, InternalError
from credgate.domain.models import Account

logger = logging.getLogger(__name__)


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, timeout_seconds: float = 5.0) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            timeout_seconds: Bound on pool checkout and on each statement
        """
        self._pool = pool
        self._timeout_seconds = timeout_seconds

    def find_by_email(self, email: str) -> Account | None:
        """
        Fetch an account by normalized email.

        Raises:
            InternalError: If the database is unreachable or the query times out
        """
        sql = """
            SELECT id, name, email, password_hash
            FROM accounts
            WHERE email = %s
        """

        with self._transaction() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        if row is None:
            return None
        return Account(id=str(row[0]), name=row[1], email=row[2], password_hash=row[3])

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Insert a new account and return it with its generated id.

        Args:
            name: Display name
            email: Normalized email address (lowercase, stripped)
            password_hash: bcrypt digest from the domain layer

        Raises:
            DuplicateIdentityError: If the UNIQUE constraint on email rejects the row
            InternalError: If the database is unreachable or the insert times out
        """
        sql = """
            INSERT INTO accounts (name, email, password_hash)
            VALUES (%s, %s, %s)
            RETURNING id
        """

        try:
            with self._transaction() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (name, email, password_hash))
                row = cursor.fetchone()
                conn.commit()
        except UniqueViolation as e:
            raise DuplicateIdentityError("Email already registered") from e

        return Account(id=str(row[0]), name=name, email=email, password_hash=password_hash)

    @contextmanager
    def _transaction(self) -> Iterator[psycopg.Connection]:
        """Pooled connection with statement_timeout applied to the current transaction."""
        timeout_ms = str(int(self._timeout_seconds * 1000))
        try:
            with self._pool.connection(timeout=self._timeout_seconds) as conn:
                conn.execute("SELECT set_config('statement_timeout', %s, true)", (timeout_ms,))
                yield conn
        except (PoolTimeout, psycopg.OperationalError) as e:
            raise InternalError("Account store unavailable") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/credgate/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).resolve().parents[4] / "migrations"

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
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
