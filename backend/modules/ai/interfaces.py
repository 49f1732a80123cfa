"""
AI assistant module interfaces.

IChatProvider is the opaque text-generation collaborator; the assistant
only ever hands it a system prompt and a conversation. ITextExtractor is
the equally opaque OCR step used by document import.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import ChatMessage, DocumentImport


@runtime_checkable
class IChatProvider(Protocol):
    """Generates one assistant reply."""

    async def complete(self, system_prompt: str, messages: list[ChatMessage]) -> str:
        """
        Raises:
            AIConfigurationError: If the provider has no credentials
            AIRateLimitedError: If the provider throttles the request
            AIServiceError: For any other upstream failure
        """
        ...


@runtime_checkable
class IFinanceAssistant(Protocol):
    """Answers questions about a user's own finances."""

    async def answer(
        self,
        user: AuthenticatedUser,
        question: str,
        history: list[ChatMessage] | None = None,
    ) -> str:
        ...

    async def suggest_questions(self, user_id: str) -> list[str]:
        """Up to five example questions fitting the user's data."""
        ...


@runtime_checkable
class ITextExtractor(Protocol):
    """Reads the text of a scanned statement or receipt image."""

    async def extract_text(self, data: bytes, media_type: str) -> str:
        """
        Returns the transcribed text, one statement line per line.

        Raises the same errors as IChatProvider.complete.
        """
        ...


@runtime_checkable
class IDocumentImporter(Protocol):
    """Turns an uploaded statement into a categorized preview."""

    async def import_document(
        self,
        user_id: str,
        filename: str,
        content_type: str | None,
        data: bytes,
    ) -> DocumentImport:
        """
        Raises:
            UnsupportedDocumentError: If the file type isn't supported
            DocumentTooLargeError: If the file exceeds the size limit
            DocumentParseError: If nothing could be read from the file
        """
        ...
