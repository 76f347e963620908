"""
Domain exceptions - Semantic error types for accounts and sessions.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from collections.abc import Mapping


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class ValidationError(AccountError):
    """One or more credential fields failed shape, format or length rules."""

    def __init__(self, field_errors: Mapping[str, str]) -> None:
        self.field_errors = dict(field_errors)
        super().__init__("; ".join(self.field_errors.values()))


class DuplicateIdentityError(AccountError):
    """An account with this email already exists."""

    pass


class InternalError(AccountError):
    """Storage, hashing or transport failure not classified otherwise."""

    pass


class AuthenticationRequiredError(AccountError):
    """A protected resource was requested without a valid session."""

    pass
