"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration workflow, the login check and the
session gate. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    AccountError,
    AuthenticationRequiredError,
    DuplicateIdentityError,
    InternalError,
    ValidationError,
)
from .login import LoginService
from .models import Account, Credential, Identity
from .ports import (
    AccountRepository,
    CredentialValidator,
    GateState,
    RegistrationOutcome,
    SecretHasher,
    SessionResolver,
)
from .registration import RegistrationResult, RegistrationService
from .session import GateDecision, SessionGate

__all__ = [
    "Account",
    "AccountError",
    "AccountRepository",
    "AuthenticationRequiredError",
    "Credential",
    "CredentialValidator",
    "DuplicateIdentityError",
    "GateDecision",
    "GateState",
    "Identity",
    "InternalError",
    "LoginService",
    "RegistrationOutcome",
    "RegistrationResult",
    "RegistrationService",
    "SecretHasher",
    "SessionGate",
    "SessionResolver",
    "ValidationError",
]
