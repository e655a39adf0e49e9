"""Category and tag endpoints."""

import logging
from fastapi import APIRouter, Depends

from ...core.category_manager import CategoryManager
from ...core.identity import require_identity
from ...models.requests import NameRequest, OperationResult
from ...models.session import Identity
from ..dependencies import get_category_manager, get_current_user
from ..responses import respond

router = APIRouter(prefix="/api/v1", tags=["catalog"])
logger = logging.getLogger(__name__)


@router.get("/categories", response_model=OperationResult, summary="List Categories")
async def list_categories(
    user: Identity = Depends(get_current_user),
    registry: CategoryManager = Depends(get_category_manager),
):
    """Active categories sorted by name, with document counts."""
    async def operation():
        require_identity(user)
        return {"categories": await registry.list_categories()}

    return await respond(operation())


@router.post(
    "/categories",
    response_model=OperationResult,
    status_code=201,
    summary="Add Category",
    description="Create a category. Names are unique and compared case-sensitively.",
)
async def add_category(
    request: NameRequest,
    user: Identity = Depends(get_current_user),
    registry: CategoryManager = Depends(get_category_manager),
):
    async def operation():
        category = await registry.add_category(user, request.name)
        return {
            "category_id": category.category_id,
            "category": category,
            "message": "Category added successfully",
        }

    return await respond(operation(), status_code=201)


@router.get("/tags", response_model=OperationResult, summary="List Tags")
async def list_tags(
    user: Identity = Depends(get_current_user),
    registry: CategoryManager = Depends(get_category_manager),
):
    """All tags, most used first."""
    async def operation():
        require_identity(user)
        return {"tags": await registry.list_tags()}

    return await respond(operation())


@router.post("/tags", response_model=OperationResult, status_code=201, summary="Add Tag")
async def add_tag(
    request: NameRequest,
    user: Identity = Depends(get_current_user),
    registry: CategoryManager = Depends(get_category_manager),
):
    async def operation():
        tag = await registry.add_tag(user, request.name)
        return {"tag_id": tag.tag_id, "tag": tag, "message": "Tag added successfully"}

    return await respond(operation(), status_code=201)
