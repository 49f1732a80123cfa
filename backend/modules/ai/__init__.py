"""
AI assistant module.

Answers questions about a user's finances using a chat model, with the
user's transactions and categories as context, and turns uploaded bank
statements into categorized transaction previews.

Public API:
- IFinanceAssistant / IChatProvider: Interfaces
- IDocumentImporter / ITextExtractor: Statement import interfaces
- FinanceAssistant (service.py): Default assistant
- DocumentImporter (importer.py): CSV, Excel, PDF and image statements
- AnthropicChatProvider (provider.py): Claude via langchain-anthropic
- AI exceptions: AIConfigurationError, AIRateLimitedError, AIServiceError
- Import exceptions: UnsupportedDocumentError, DocumentTooLargeError, DocumentParseError
"""

from .interfaces import IChatProvider, IDocumentImporter, IFinanceAssistant, ITextExtractor
from .models import ChatMessage, ChatRole, DocumentImport, ParsedTransaction
from .exceptions import (
    AIConfigurationError,
    AIRateLimitedError,
    AIServiceError,
    DocumentParseError,
    DocumentTooLargeError,
    UnsupportedDocumentError,
)

__all__ = [
    "IChatProvider",
    "IDocumentImporter",
    "IFinanceAssistant",
    "ITextExtractor",
    "ChatMessage",
    "ChatRole",
    "DocumentImport",
    "ParsedTransaction",
    "AIConfigurationError",
    "AIRateLimitedError",
    "AIServiceError",
    "DocumentParseError",
    "DocumentTooLargeError",
    "UnsupportedDocumentError",
]
