"""
Protected views.

Every route here depends on require_identity, so the Session Gate runs
before the handler and unauthenticated visitors are redirected to login.
"""

from fastapi import APIRouter, Depends, status

from credgate.api.dependencies import require_identity
from credgate.api.models import DashboardResponse
from credgate.domain.models import Identity

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    responses={
        status.HTTP_303_SEE_OTHER: {"description": "No valid session; redirect to login"},
    },
    summary="Dashboard for the signed-in user",
)
async def dashboard(identity: Identity = Depends(require_identity)) -> DashboardResponse:
    return DashboardResponse(
        message=f"Welcome, {identity.display_name}!",
        name=identity.name,
        email=identity.email,
    )
