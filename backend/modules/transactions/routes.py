"""
Transaction API endpoints.

All routes require authentication and count against the general API
rate limit. ``/summary`` is declared before ``/{id}`` so it is never
captured as an id.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_transaction_service
from api.middleware import RequestContext, protected
from shared.models import SuccessResponse

from .interfaces import ITransactionService
from .models import (
    CreateTransactionRequest,
    TransactionFilters,
    TransactionListResponse,
    TransactionResponse,
    TransactionSummaryResponse,
    UpdateTransactionRequest,
)
from .schemas import (
    create_transaction_schema,
    summary_query_schema,
    transaction_id_schema,
    transaction_query_schema,
    update_transaction_schema,
)

router = APIRouter()


@router.get("/summary", response_model=TransactionSummaryResponse)
async def get_summary(
    ctx: RequestContext = Depends(protected(summary_query_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> TransactionSummaryResponse:
    """Income/expense totals, per-category breakdown and last six months."""
    filters = TransactionFilters.model_validate(ctx.query)
    summary = await service.get_summary(ctx.require_user().id, filters)
    return TransactionSummaryResponse(summary=summary)


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    ctx: RequestContext = Depends(protected(transaction_query_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    """List the current user's transactions, newest first."""
    filters = TransactionFilters.model_validate(ctx.query)
    transactions = await service.list_transactions(ctx.require_user().id, filters)
    return TransactionListResponse(count=len(transactions), data=transactions)


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    ctx: RequestContext = Depends(protected(create_transaction_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    request = CreateTransactionRequest.model_validate(ctx.body)
    transaction = await service.create_transaction(ctx.require_user().id, request)
    return TransactionResponse(data=transaction)


@router.get("/{id}", response_model=TransactionResponse)
async def get_transaction(
    ctx: RequestContext = Depends(protected(transaction_id_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    transaction = await service.get_transaction(ctx.require_user().id, ctx.params["id"])
    return TransactionResponse(data=transaction)


@router.put("/{id}", response_model=TransactionResponse)
async def update_transaction(
    ctx: RequestContext = Depends(protected(update_transaction_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    request = UpdateTransactionRequest.model_validate(ctx.body)
    transaction = await service.update_transaction(
        ctx.require_user().id, ctx.params["id"], request
    )
    return TransactionResponse(data=transaction)


@router.delete("/{id}", response_model=SuccessResponse)
async def delete_transaction(
    ctx: RequestContext = Depends(protected(transaction_id_schema)),
    service: ITransactionService = Depends(get_transaction_service),
) -> SuccessResponse:
    await service.delete_transaction(ctx.require_user().id, ctx.params["id"])
    return SuccessResponse(message="Transaction deleted successfully")
