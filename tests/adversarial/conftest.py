"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and timing tests.
"""

import threading

import pytest

from credgate.adapters.repository import InMemoryAccountRepository
from credgate.domain.models import Account


class RacingRepository(InMemoryAccountRepository):
    """
    In-memory store whose pre-check holds every caller until all have looked.

    Forces the check-then-create window open so that every concurrent
    registration passes find_by_email() before any of them creates.
    """

    def __init__(self, parties: int) -> None:
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=10)

    def find_by_email(self, email: str) -> Account | None:
        found = super().find_by_email(email)
        self._barrier.wait()
        return found


@pytest.fixture
def racing_repository_factory() -> type[RacingRepository]:
    return RacingRepository
