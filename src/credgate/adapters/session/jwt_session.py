"""
JWT session manager - Implements SessionResolver protocol.

Sessions are HS256-signed tokens carrying the account id, email and name,
with issue and expiry timestamps. Anything that fails signature, expiry
or shape checks resolves to no identity.
"""

import logging
import time
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

from credgate.domain.models import Account, Identity

logger = logging.getLogger(__name__)


class JwtSessionManager:
    """
    Issues session tokens and resolves them back to identities.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl_seconds: int = 86400) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, account: Account) -> str:
        """
        Create a signed session token for an authenticated account.

        Args:
            account: The account that just signed in

        Returns:
            Encoded JWT string
        """
        issued_at = int(time.time())
        payload: dict[str, Any] = {
            "sub": account.id,
            "email": account.email,
            "name": account.name,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def resolve(self, token: str | None) -> Identity | None:
        """
        Decode and validate a session token.

        Returns:
            The bound identity, or None for a missing, invalid or expired token
        """
        if not token:
            return None

        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except InvalidTokenError as e:
            logger.debug("Session token rejected: %s", e)
            return None

        email = claims.get("email")
        if not isinstance(email, str) or not email:
            logger.debug("Session token rejected: missing email claim")
            return None

        name = claims.get("name")
        return Identity(
            account_id=str(claims["sub"]),
            email=email,
            name=name if isinstance(name, str) and name else None,
        )
