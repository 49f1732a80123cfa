"""
Base repository class for document access.

Provides a common abstraction layer for all repositories, encapsulating
collection access and the mapping between stored documents and models.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from .database import Document, DocumentCollection, DocumentStore


T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for document operations:
    - Collection access via self._collection
    - Document-to-model mapping via _to_model / _to_models

    Subclasses set ``collection_name`` and ``model`` and implement
    domain-specific query methods on top.

    Example:
        class TransactionRepository(BaseRepository[Transaction]):
            collection_name = "transactions"
            model = Transaction

            async def list_for_user(self, user_id: str) -> list[Transaction]:
                docs = await self._collection.find(
                    where=lambda d: d["user_id"] == user_id
                )
                return self._to_models(docs)
    """

    collection_name: str
    model: type[T]

    def __init__(self, store: DocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: Document store holding this repository's collection.
        """
        self._collection: DocumentCollection = store.collection(self.collection_name)

    def _to_model(self, document: Optional[Document]) -> Optional[T]:
        if document is None:
            return None
        return self.model.model_validate(document)

    def _to_models(self, documents: list[Document]) -> list[T]:
        return [self.model.model_validate(document) for document in documents]

    async def get_by_id(self, document_id: str) -> Optional[T]:
        return self._to_model(await self._collection.find_by_id(document_id))

    async def delete(self, document_id: str) -> bool:
        return await self._collection.delete(document_id)
