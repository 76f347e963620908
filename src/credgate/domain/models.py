"""
Domain models - Credential input, persisted Account, session Identity.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credential:
    """Validated registration input. Discarded once the workflow completes."""

    name: str
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class Account:
    """Persisted identity record keyed by unique email."""

    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class Identity:
    """Who a session belongs to."""

    account_id: str
    email: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        """Name if the account has one, email otherwise."""
        return self.name or self.email
