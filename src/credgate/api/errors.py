"""
Exception handlers - translate escaped errors at the HTTP boundary.

- AuthenticationRequiredError -> 303 redirect to the login entry point
- anything else -> 500 with an opaque message; the cause is only logged
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from credgate.config.settings import get_settings
from credgate.domain.exceptions import AuthenticationRequiredError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


async def authentication_required_handler(
    request: Request, exc: AuthenticationRequiredError
) -> RedirectResponse:
    # Handlers run outside dependency injection; honour overrides set on the app
    settings = request.app.dependency_overrides.get(get_settings, get_settings)()
    return RedirectResponse(url=settings.login_url, status_code=status.HTTP_303_SEE_OTHER)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the boundary exception handlers to an application."""
    app.add_exception_handler(AuthenticationRequiredError, authentication_required_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
