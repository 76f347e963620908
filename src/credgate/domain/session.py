"""
Session Gate - decides whether a request may reach a protected view.

The session token is passed in explicitly; resolving it is delegated to a
SessionResolver. The gate must run to completion before any protected
data access starts.
"""

from dataclasses import dataclass

from .exceptions import AuthenticationRequiredError
from .models import Identity
from .ports import GateState, SessionResolver


@dataclass(frozen=True)
class GateDecision:
    """Gate verdict for one request."""

    state: GateState
    identity: Identity | None = None

    @property
    def authenticated(self) -> bool:
        return self.state is GateState.AUTHENTICATED


_UNAUTHENTICATED = GateDecision(GateState.UNAUTHENTICATED)


@dataclass
class SessionGate:
    resolver: SessionResolver

    def check(self, token: str | None) -> GateDecision:
        """Resolve the token into AUTHENTICATED(identity) or UNAUTHENTICATED."""
        identity = self.resolver.resolve(token)
        if identity is None:
            return _UNAUTHENTICATED
        return GateDecision(GateState.AUTHENTICATED, identity)

    def require(self, token: str | None) -> Identity:
        """
        Return the session's identity.

        Raises:
            AuthenticationRequiredError: If the request carries no valid session
        """
        decision = self.check(token)
        if decision.identity is None:
            raise AuthenticationRequiredError("Authentication required")
        return decision.identity
