"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request

from credgate.adapters.hashing import BcryptSecretHasher
from credgate.adapters.session import JwtSessionManager
from credgate.adapters.validation import PydanticCredentialValidator
from credgate.config.settings import Settings, get_settings
from credgate.domain.login import LoginService
from credgate.domain.models import Identity
from credgate.domain.ports import AccountRepository
from credgate.domain.registration import RegistrationService
from credgate.domain.session import SessionGate

# Module-level singleton - stateless after construction
_validator = PydanticCredentialValidator()


def get_repository(request: Request) -> AccountRepository:
    """
    Get the account store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


@lru_cache
def _hasher_for(cost: int) -> BcryptSecretHasher:
    return BcryptSecretHasher(cost=cost)


def get_hasher(settings: Settings = Depends(get_settings)) -> BcryptSecretHasher:
    """Get bcrypt hasher at the configured cost (one instance per cost)."""
    return _hasher_for(settings.bcrypt_cost)


def get_credential_validator() -> PydanticCredentialValidator:
    return _validator


def get_registration_service(
    repository: AccountRepository = Depends(get_repository),
    hasher: BcryptSecretHasher = Depends(get_hasher),
    validator: PydanticCredentialValidator = Depends(get_credential_validator),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the store, hasher and validator for the domain service.
    """
    return RegistrationService(
        repository=repository,
        hasher=hasher,
        validator=validator,
        hash_timeout_seconds=settings.hash_timeout_seconds,
    )


def get_login_service(
    repository: AccountRepository = Depends(get_repository),
    hasher: BcryptSecretHasher = Depends(get_hasher),
) -> LoginService:
    return LoginService(repository=repository, hasher=hasher)


def get_session_manager(settings: Settings = Depends(get_settings)) -> JwtSessionManager:
    return JwtSessionManager(
        secret_key=settings.session_secret_key,
        algorithm=settings.session_algorithm,
        ttl_seconds=settings.session_ttl_seconds,
    )


def get_session_gate(
    sessions: JwtSessionManager = Depends(get_session_manager),
) -> SessionGate:
    return SessionGate(resolver=sessions)


def require_identity(
    request: Request,
    gate: SessionGate = Depends(get_session_gate),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """
    Resolve the session cookie to an identity for a protected route.

    Runs before the route body, so no protected work starts without a session.

    Raises:
        AuthenticationRequiredError: Turned into a redirect to the login page
    """
    token = request.cookies.get(settings.session_cookie_name)
    return gate.require(token)
