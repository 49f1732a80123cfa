"""
Category API endpoints.

``/stats`` is declared before ``/{id}`` so it is never captured as an id.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_category_service
from api.middleware import RequestContext, protected
from shared.models import SuccessResponse

from .interfaces import ICategoryService
from .models import (
    CategoryListResponse,
    CategoryResponse,
    CategoryStatsResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from .schemas import (
    category_id_schema,
    category_query_schema,
    create_category_schema,
    update_category_schema,
)

router = APIRouter()


@router.get("/stats", response_model=CategoryStatsResponse)
async def get_category_stats(
    ctx: RequestContext = Depends(protected()),
    service: ICategoryService = Depends(get_category_service),
) -> CategoryStatsResponse:
    """Every visible category with the user's transaction count and total."""
    stats = await service.get_stats(ctx.require_user().id)
    return CategoryStatsResponse(data=stats)


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    ctx: RequestContext = Depends(protected(category_query_schema)),
    service: ICategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    """Default categories first, then the user's own, alphabetically."""
    categories = await service.list_categories(ctx.require_user().id, ctx.query.get("type"))
    return CategoryListResponse(count=len(categories), data=categories)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    ctx: RequestContext = Depends(protected(create_category_schema)),
    service: ICategoryService = Depends(get_category_service),
) -> CategoryResponse:
    request = CreateCategoryRequest.model_validate(ctx.body)
    category = await service.create_category(ctx.require_user().id, request)
    return CategoryResponse(data=category)


@router.get("/{id}", response_model=CategoryResponse)
async def get_category(
    ctx: RequestContext = Depends(protected(category_id_schema)),
    service: ICategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = await service.get_category(ctx.require_user().id, ctx.params["id"])
    return CategoryResponse(data=category)


@router.put("/{id}", response_model=CategoryResponse)
async def update_category(
    ctx: RequestContext = Depends(protected(update_category_schema)),
    service: ICategoryService = Depends(get_category_service),
) -> CategoryResponse:
    request = UpdateCategoryRequest.model_validate(ctx.body)
    category = await service.update_category(ctx.require_user().id, ctx.params["id"], request)
    return CategoryResponse(data=category)


@router.delete("/{id}", response_model=SuccessResponse)
async def delete_category(
    ctx: RequestContext = Depends(protected(category_id_schema)),
    service: ICategoryService = Depends(get_category_service),
) -> SuccessResponse:
    await service.delete_category(ctx.require_user().id, ctx.params["id"])
    return SuccessResponse(message="Category deleted successfully")
