"""
API v1 package.

Contains versioned API routes for registration and sign-in.
"""

from credgate.api.v1.routes import router

__all__ = ["router"]
