"""Session adapters - Issue and resolve session artifacts."""

from .jwt_session import JwtSessionManager

__all__ = ["JwtSessionManager"]
