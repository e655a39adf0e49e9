"""Activity feed, analytics and initial-load endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ...core.activity_manager import ActivityManager
from ...core.identity import require_identity
from ...core.initial_data import InitialDataLoader
from ...models.requests import OperationResult
from ...models.session import Identity
from ..dependencies import get_activity_manager, get_current_user, get_initial_data_loader
from ..responses import respond

router = APIRouter(prefix="/api/v1", tags=["activity"])


@router.get("/activity", response_model=OperationResult, summary="Recent Activity")
async def recent_activity(
    limit: Optional[int] = Query(default=None, ge=1),
    user: Identity = Depends(get_current_user),
    activity: ActivityManager = Depends(get_activity_manager),
):
    """Most recent activity entries first; defaults to the configured feed size."""
    async def operation():
        require_identity(user)
        return {"activities": await activity.recent_activity(limit)}

    return await respond(operation())


@router.get("/analytics", response_model=OperationResult, summary="Analytics Summary")
async def analytics_summary(
    user: Identity = Depends(get_current_user),
    activity: ActivityManager = Depends(get_activity_manager),
):
    async def operation():
        require_identity(user)
        return {"analytics": await activity.analytics_summary()}

    return await respond(operation())


@router.get(
    "/bootstrap",
    response_model=OperationResult,
    summary="Initial Data",
    description="""
Everything the catalog page needs on first load: the signed-in user, documents,
categories, tags, the user's favorite ids, recent activity, online users and
the analytics summary. A section that cannot be read comes back empty instead
of failing the request.
    """,
)
async def initial_data(
    user: Identity = Depends(get_current_user),
    loader: InitialDataLoader = Depends(get_initial_data_loader),
):
    async def operation():
        return await loader.load(user)

    return await respond(operation())
