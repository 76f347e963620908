"""
Login domain service - email/password check ahead of session issuance.

Timing oracle prevention: a bcrypt comparison always runs, against the
hasher's dummy digest when no account matches, so response time does not
reveal whether an email is registered.
"""

from dataclasses import dataclass

from .models import Account
from .ports import AccountRepository, SecretHasher


@dataclass
class LoginService:
    """Domain service verifying credentials for sign-in."""

    repository: AccountRepository
    hasher: SecretHasher

    def authenticate(self, email: str, password: str) -> Account | None:
        """
        Return the account if email and password match, None otherwise.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        account = self.repository.find_by_email(email.strip().lower())
        digest = account.password_hash if account is not None else self.hasher.dummy_digest

        password_valid = self.hasher.verify(password, digest)

        if account is None or not password_valid:
            return None
        return account
