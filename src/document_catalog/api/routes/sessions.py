"""Online presence endpoints."""

from fastapi import APIRouter, Depends

from ...core.identity import require_identity
from ...core.session_manager import SessionManager
from ...models.requests import OperationResult
from ...models.session import Identity
from ..dependencies import get_current_user, get_session_manager
from ..responses import respond

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post("/login", response_model=OperationResult, summary="Login")
async def login(
    user: Identity = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Start or restart the caller's presence session."""
    async def operation():
        return {"session": await sessions.login(user)}

    return await respond(operation())


@router.post(
    "/heartbeat",
    response_model=OperationResult,
    summary="Heartbeat",
    description="Refresh the caller's last activity. Clients poll this to stay online; "
                "a heartbeat without a session starts one.",
)
async def heartbeat(
    user: Identity = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
):
    async def operation():
        return {"session": await sessions.heartbeat(user)}

    return await respond(operation())


@router.post("/logout", response_model=OperationResult, summary="Logout")
async def logout(
    user: Identity = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
):
    """End the caller's session. Logging out twice is not an error."""
    async def operation():
        await sessions.logout(user)
        return {}

    return await respond(operation())


@router.get("/online", response_model=OperationResult, summary="Online Users")
async def list_online(
    user: Identity = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Users active within the session timeout, most recent first."""
    async def operation():
        require_identity(user)
        return {"users": await sessions.list_online()}

    return await respond(operation())
