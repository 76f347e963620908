"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A low-cost bcrypt hasher (cost 4) so tests stay fast
- In-memory account store and registration service
- PostgreSQL connection pool (tests skip when the database is unreachable)
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from credgate.adapters.hashing import BcryptSecretHasher
from credgate.adapters.repository import InMemoryAccountRepository, run_migrations
from credgate.adapters.validation import PydanticCredentialValidator
from credgate.config.settings import get_settings
from credgate.domain.registration import RegistrationService

# Minimum bcrypt cost; production uses 10
TEST_BCRYPT_COST = 4


@pytest.fixture
def hasher() -> BcryptSecretHasher:
    """Fast bcrypt hasher for tests."""
    return BcryptSecretHasher(cost=TEST_BCRYPT_COST)


@pytest.fixture
def memory_repository() -> InMemoryAccountRepository:
    """Empty in-memory account store."""
    return InMemoryAccountRepository()


@pytest.fixture
def validator() -> PydanticCredentialValidator:
    """Server-mode credential validator."""
    return PydanticCredentialValidator()


@pytest.fixture
def registration_service(
    memory_repository: InMemoryAccountRepository,
    hasher: BcryptSecretHasher,
    validator: PydanticCredentialValidator,
) -> RegistrationService:
    """Registration service wired to the in-memory store."""
    return RegistrationService(
        repository=memory_repository,
        hasher=hasher,
        validator=validator,
    )


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool against DATABASE_URL; skips dependent tests if unreachable."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=2.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean accounts table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
    yield
