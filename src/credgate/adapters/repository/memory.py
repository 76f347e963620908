"""
In-memory repository adapter - Implements AccountRepository protocol.

Process-local account store for development and tests. A single lock
guards the email index, so concurrent creates for one email cannot both
succeed.
"""

import threading
import uuid

from credgate.domain.exceptions import DuplicateIdentityError
from credgate.domain.models import Account


class InMemoryAccountRepository:
    """
    Implements AccountRepository protocol with a dict keyed by email.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            return self._accounts.get(email)

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Insert a new account.

        Raises:
            DuplicateIdentityError: If the email is already taken
        """
        with self._lock:
            if email in self._accounts:
                raise DuplicateIdentityError("Email already registered")
            account = Account(
                id=str(uuid.uuid4()),
                name=name,
                email=email,
                password_hash=password_hash,
            )
            self._accounts[email] = account
        return account

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
