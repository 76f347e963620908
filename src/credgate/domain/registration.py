"""
Registration domain service - credential to account workflow.

Steps, in order:
1. Validate the raw submission (no side effects on failure)
2. Pre-check email uniqueness (no hashing when the email is taken)
3. Hash the password off the calling thread, bounded by a timeout
4. Create the account

The pre-check and the create are not atomic. Two concurrent registrations
for the same email can both pass step 2; the store's uniqueness constraint
rejects the second create, which surfaces as DUPLICATE_IDENTITY.
"""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .exceptions import DuplicateIdentityError, ValidationError
from .ports import AccountRepository, CredentialValidator, RegistrationOutcome, SecretHasher

logger = logging.getLogger(__name__)

HASH_WORKERS = 4

# Shared by all service instances; bcrypt releases the GIL while hashing.
_hash_executor = ThreadPoolExecutor(max_workers=HASH_WORKERS, thread_name_prefix="credgate-hash")


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of one registration attempt. Never carries the hash or plaintext."""

    outcome: RegistrationOutcome
    account_id: str | None = None
    field_errors: Mapping[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.outcome is RegistrationOutcome.SUCCESS


@dataclass
class RegistrationService:
    """
    Domain service for account registration.

    Orchestrates validation, uniqueness check, password hashing and
    account creation. Every failure is converted to a RegistrationResult;
    nothing raised by a collaborator escapes register().
    """

    repository: AccountRepository
    hasher: SecretHasher
    validator: CredentialValidator
    hash_timeout_seconds: float = 5.0

    def register(self, payload: object) -> RegistrationResult:
        """
        Register a new account from an untrusted payload.

        Args:
            payload: JSON-shaped submission with name, email and password

        Returns:
            RegistrationResult with the new account id on success
        """
        try:
            credential = self.validator.validate(payload)
        except ValidationError as exc:
            return RegistrationResult(
                RegistrationOutcome.VALIDATION_ERROR, field_errors=exc.field_errors
            )

        email = self._normalize_email(credential.email)

        try:
            if self.repository.find_by_email(email) is not None:
                logger.warning("Registration rejected: email already registered")
                return RegistrationResult(RegistrationOutcome.DUPLICATE_IDENTITY)

            password_hash = self._hash_password(credential.password)
            account = self.repository.create(credential.name, email, password_hash)
        except DuplicateIdentityError:
            # Lost the check-then-create race; the store kept the invariant.
            logger.warning("Registration rejected at create: email already registered")
            return RegistrationResult(RegistrationOutcome.DUPLICATE_IDENTITY)
        except Exception:
            logger.exception("Registration failed")
            return RegistrationResult(RegistrationOutcome.INTERNAL_ERROR)

        logger.info("Account created: %s", account.id)
        return RegistrationResult(RegistrationOutcome.SUCCESS, account_id=account.id)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _hash_password(self, password: str) -> str:
        """
        Hash on the shared worker pool and wait at most hash_timeout_seconds.

        A job abandoned by the timeout is cancelled so it never occupies a worker.

        Raises:
            TimeoutError: If hashing does not finish in time
        """
        future = _hash_executor.submit(self.hasher.hash, password)
        try:
            return future.result(timeout=self.hash_timeout_seconds)
        except TimeoutError:
            # Drop the job if it is still queued; a running hash cannot be stopped
            future.cancel()
            raise
