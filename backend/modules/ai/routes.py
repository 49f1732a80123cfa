"""
AI assistant API endpoints.

All routes run under the AI rate limiter, which is much tighter than
the general API budget because every query costs an upstream call.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_assistant, get_document_importer
from api.middleware import RequestContext, ai_protected
from modules.validation import FieldError, RequestValidationError

from .interfaces import IDocumentImporter, IFinanceAssistant
from .models import AIQueryRequest, AIQueryResponse, ImportDocumentResponse, SuggestionsResponse
from .schemas import query_schema

router = APIRouter()


@router.post("/query", response_model=AIQueryResponse)
async def query_assistant(
    ctx: RequestContext = Depends(ai_protected(query_schema)),
    assistant: IFinanceAssistant = Depends(get_assistant),
) -> AIQueryResponse:
    """Ask the assistant a question about the current user's finances."""
    request = AIQueryRequest.model_validate(ctx.body)
    answer = await assistant.answer(ctx.require_user(), request.message)
    return AIQueryResponse(
        query=request.message,
        answer=answer,
        timestamp=ctx.container.now(),
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    ctx: RequestContext = Depends(ai_protected()),
    assistant: IFinanceAssistant = Depends(get_assistant),
) -> SuggestionsResponse:
    suggestions = await assistant.suggest_questions(ctx.require_user().id)
    return SuggestionsResponse(suggestions=suggestions)


@router.post("/import-document", response_model=ImportDocumentResponse)
async def import_document(
    file: Optional[UploadFile] = File(None),
    ctx: RequestContext = Depends(ai_protected()),
    importer: IDocumentImporter = Depends(get_document_importer),
) -> ImportDocumentResponse:
    """
    Turn an uploaded bank statement into a categorized transaction preview.

    Accepts CSV, Excel (.xlsx), PDF and statement photos as multipart
    field ``file``. Nothing is saved.
    """
    if file is None:
        raise RequestValidationError([FieldError("body.file", "File is required")])

    data = await file.read()
    result = await importer.import_document(
        ctx.require_user().id,
        file.filename or "",
        file.content_type,
        data,
    )
    return ImportDocumentResponse(transactions=result.transactions, metadata=result.metadata)
