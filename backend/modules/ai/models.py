"""
AI assistant module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from shared.models import ApiModel, EntryType


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class AIQueryRequest(ApiModel):
    message: str


class AIQueryResponse(ApiModel):
    success: bool = True
    query: str
    answer: str
    timestamp: datetime


class SuggestionsResponse(ApiModel):
    success: bool = True
    suggestions: list[str]


class ParsedTransaction(ApiModel):
    """One row of an import preview. Nothing is stored until the user saves it."""

    date: str
    amount: float
    description: str
    type: Optional[EntryType] = None
    category: Optional[str] = None


class ImportMetadata(ApiModel):
    total_transactions: int
    file_type: str
    parsing_method: str
    categorized_by: str


class DocumentImport(ApiModel):
    transactions: list[ParsedTransaction]
    metadata: ImportMetadata


class ImportDocumentResponse(DocumentImport):
    success: bool = True
