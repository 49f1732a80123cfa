"""
Savings goal API endpoints.

``/stats`` is declared before ``/{id}`` so it is never captured as an id.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_savings_goal_service
from api.middleware import RequestContext, protected
from shared.models import SuccessResponse

from .interfaces import ISavingsGoalService
from .models import (
    AddProgressRequest,
    CreateSavingsGoalRequest,
    GoalStatsResponse,
    GoalStatus,
    SavingsGoalListResponse,
    SavingsGoalResponse,
    UpdateSavingsGoalRequest,
)
from .schemas import (
    add_progress_schema,
    create_goal_schema,
    goal_id_schema,
    goal_query_schema,
    update_goal_schema,
)

router = APIRouter()


@router.get("/stats", response_model=GoalStatsResponse)
async def get_goal_stats(
    ctx: RequestContext = Depends(protected()),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> GoalStatsResponse:
    stats = await service.get_stats(ctx.require_user().id)
    return GoalStatsResponse(stats=stats)


@router.get("", response_model=SavingsGoalListResponse)
async def list_goals(
    ctx: RequestContext = Depends(protected(goal_query_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalListResponse:
    """List goals, active first and then by nearest deadline."""
    status = GoalStatus(ctx.query.get("status", GoalStatus.ALL.value))
    goals = await service.list_goals(ctx.require_user().id, status)
    return SavingsGoalListResponse(count=len(goals), data=goals)


@router.post("", response_model=SavingsGoalResponse, status_code=201, response_model_exclude_none=True)
async def create_goal(
    ctx: RequestContext = Depends(protected(create_goal_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    request = CreateSavingsGoalRequest.model_validate(ctx.body)
    goal = await service.create_goal(ctx.require_user().id, request)
    return SavingsGoalResponse(data=goal)


@router.get("/{id}", response_model=SavingsGoalResponse, response_model_exclude_none=True)
async def get_goal(
    ctx: RequestContext = Depends(protected(goal_id_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    goal = await service.get_goal(ctx.require_user().id, ctx.params["id"])
    return SavingsGoalResponse(data=goal)


@router.put("/{id}", response_model=SavingsGoalResponse, response_model_exclude_none=True)
async def update_goal(
    ctx: RequestContext = Depends(protected(update_goal_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    request = UpdateSavingsGoalRequest.model_validate(ctx.body)
    goal = await service.update_goal(ctx.require_user().id, ctx.params["id"], request)
    return SavingsGoalResponse(data=goal)


@router.post("/{id}/progress", response_model=SavingsGoalResponse, response_model_exclude_none=True)
async def add_progress(
    ctx: RequestContext = Depends(protected(add_progress_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SavingsGoalResponse:
    request = AddProgressRequest.model_validate(ctx.body)
    goal = await service.add_progress(ctx.require_user().id, ctx.params["id"], request)
    message = "Goal completed!" if goal.is_completed else "Progress added successfully"
    return SavingsGoalResponse(data=goal, message=message)


@router.delete("/{id}", response_model=SuccessResponse)
async def delete_goal(
    ctx: RequestContext = Depends(protected(goal_id_schema)),
    service: ISavingsGoalService = Depends(get_savings_goal_service),
) -> SuccessResponse:
    await service.delete_goal(ctx.require_user().id, ctx.params["id"])
    return SuccessResponse(message="Savings goal deleted successfully")
