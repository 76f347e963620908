"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .models import Account, Credential, Identity


class RegistrationOutcome(Enum):
    """
    Result of a registration attempt.

    Returned by RegistrationService.register(); the HTTP boundary maps
    each value to a status code and body.
    """

    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    DUPLICATE_IDENTITY = "duplicate_identity"
    INTERNAL_ERROR = "internal_error"


class GateState(Enum):
    """Session Gate states for a single request."""

    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Account | None:
        """
        Look up an account by its normalized email.

        Returns:
            The account, or None if no account uses this email
        """
        ...

    def create(self, name: str, email: str, password_hash: str) -> Account:
        """
        Persist a new account.

        The store enforces email uniqueness on its own; a pre-check by the
        caller does not make this call safe against concurrent creates.

        Raises:
            DuplicateIdentityError: If the email is already taken
        """
        ...


class SecretHasher(Protocol):
    """Port interface for one-way secret hashing."""

    def hash(self, plaintext: str) -> str:
        """
        Return a salted digest; repeated calls give different digests.

        Raises:
            ValueError: If the secret is longer than the hasher can digest whole
        """
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check plaintext against a digest in constant time. Oversized secrets never match."""
        ...

    @property
    def dummy_digest(self) -> str:
        """Digest of a throwaway secret, compared against when no account matches."""
        ...


class CredentialValidator(Protocol):
    """Port interface for credential validation."""

    def validate(self, raw: object) -> Credential:
        """
        Validate an untrusted payload.

        Raises:
            ValidationError: With per-field messages keyed by field name
        """
        ...


class SessionResolver(Protocol):
    """Port interface for resolving a session artifact to an identity."""

    def resolve(self, token: str | None) -> Identity | None:
        """Return the bound identity, or None for absent or invalid sessions."""
        ...
