"""
API v1 routes.

Defines REST endpoints for account registration and sign-in.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from credgate.adapters.session import JwtSessionManager
from credgate.api.dependencies import (
    get_login_service,
    get_registration_service,
    get_session_manager,
)
from credgate.api.errors import GENERIC_ERROR_MESSAGE
from credgate.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
)
from credgate.config.settings import Settings, get_settings
from credgate.domain.login import LoginService
from credgate.domain.ports import RegistrationOutcome
from credgate.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

DUPLICATE_IDENTITY_MESSAGE = "User already exists"
INVALID_LOGIN_MESSAGE = "Invalid email or password"


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or email already registered"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": RegisterRequest.model_json_schema()}},
        }
    },
    summary="Register a new user",
    description="Submit name, email and password to create an account.",
)
async def register(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Create an account.

    - **name**: At least 2 characters
    - **email**: Valid email address, not already registered
    - **password**: At least 8 characters

    Returns the new account id on success.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    # Validation, lookup and bcrypt all block; keep them off the event loop.
    result = await run_in_threadpool(service.register, payload)

    if result.outcome is RegistrationOutcome.SUCCESS:
        return RegisterResponse(message="User created successfully", user_id=result.account_id)

    if result.outcome is RegistrationOutcome.VALIDATION_ERROR:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "; ".join(result.field_errors.values()),
                "fields": dict(result.field_errors),
            },
        )

    if result.outcome is RegistrationOutcome.DUPLICATE_IDENTITY:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": DUPLICATE_IDENTITY_MESSAGE},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        422: {"description": "Validation error"},
    },
    summary="Sign in",
    description="Verify email and password and set the session cookie.",
)
def login(
    request_data: LoginRequest,
    response: Response,
    service: LoginService = Depends(get_login_service),
    sessions: JwtSessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
) -> LoginResponse | JSONResponse:
    """
    Sign in with email and password.

    Unknown email and wrong password return the same 401.
    """
    account = service.authenticate(request_data.email, request_data.password)
    if account is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": INVALID_LOGIN_MESSAGE},
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=sessions.issue(account),
        max_age=sessions.ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return LoginResponse(message="Signed in", user_id=account.id)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign out",
    description="Clear the session cookie.",
)
def logout(response: Response, settings: Settings = Depends(get_settings)) -> MessageResponse:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Signed out")
