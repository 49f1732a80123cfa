"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container lives on ``app.state.container``; tests build their own
with fake clocks and cheap password hashing and pass it to create_app().
"""

import time
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional

from fastapi import Request

from shared.config import Settings, get_settings
from shared.database import DocumentStore, utcnow

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.ai.interfaces import IDocumentImporter, IFinanceAssistant
    from modules.ai.provider import AnthropicChatProvider
    from modules.auth.interfaces import IAuthService, INotificationSink, IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.tokens import TokenCodec
    from modules.categories.interfaces import ICategoryService
    from modules.ratelimit import IRateLimitStore, RateLimiter
    from modules.savings_goals.interfaces import ISavingsGoalService
    from modules.transactions.interfaces import ITransactionService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.

    Args:
        settings: Settings to build from (defaults to get_settings())
        clock: Wall clock in epoch seconds, used by rate limiting
        now: Wall clock as aware datetime, used by tokens and services
        store: Document store (defaults to a fresh in-memory store)
        password_hasher: Override for password hashing (tests use cheap params)
        assistant: Override for the AI assistant
        document_importer: Override for statement import
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
        now: Callable[[], datetime] = utcnow,
        store: Optional[DocumentStore] = None,
        password_hasher: "Optional[PasswordHasher]" = None,
        assistant: "Optional[IFinanceAssistant]" = None,
        document_importer: "Optional[IDocumentImporter]" = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock
        self.now = now
        self._store = store
        self._password_hasher = password_hasher
        self._assistant_override = assistant
        self._document_importer_override = document_importer
        self._reset_cache()

    def _reset_cache(self) -> None:
        self._users: "IUserRepository | None" = None
        self._token_codec: "TokenCodec | None" = None
        self._notifier: "INotificationSink | None" = None
        self._auth_service: "IAuthService | None" = None
        self._rate_limit_store: "IRateLimitStore | None" = None
        self._limiters: dict[str, "RateLimiter"] = {}
        self._transaction_service: "ITransactionService | None" = None
        self._category_service: "ICategoryService | None" = None
        self._savings_goal_service: "ISavingsGoalService | None" = None
        self._chat_provider: "AnthropicChatProvider | None" = None
        self._assistant: "IFinanceAssistant | None" = self._assistant_override
        self._document_importer: "IDocumentImporter | None" = self._document_importer_override

    @property
    def store(self) -> DocumentStore:
        """Get the document store."""
        if self._store is None:
            self._store = DocumentStore()
        return self._store

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository."""
        if self._users is None:
            from modules.auth.repository import UserRepository
            self._users = UserRepository(self.store)
        return self._users

    @property
    def token_codec(self) -> "TokenCodec":
        """Get the identity token codec. Fails if no JWT secret is configured."""
        if self._token_codec is None:
            from modules.auth.tokens import TokenCodec
            self._token_codec = TokenCodec(
                self.settings.jwt_secret,
                ttl=timedelta(days=self.settings.jwt_expires_days),
                clock=self.now,
            )
        return self._token_codec

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher()
        return self._password_hasher

    @property
    def notifier(self) -> "INotificationSink":
        if self._notifier is None:
            from modules.auth.notifications import LoggingNotificationSink
            self._notifier = LoggingNotificationSink()
        return self._notifier

    @notifier.setter
    def notifier(self, sink: "INotificationSink") -> None:
        self._notifier = sink
        self._auth_service = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                tokens=self.token_codec,
                hasher=self.password_hasher,
                notifier=self.notifier,
                client_url=self.settings.client_url,
                reset_ttl=timedelta(minutes=self.settings.password_reset_ttl_minutes),
                clock=self.now,
            )
        return self._auth_service

    @property
    def rate_limit_store(self) -> "IRateLimitStore":
        """Get the counter store shared by all limiters."""
        if self._rate_limit_store is None:
            from modules.ratelimit import InMemoryRateLimitStore
            self._rate_limit_store = InMemoryRateLimitStore()
        return self._rate_limit_store

    def limiter(self, policy_name: str) -> "RateLimiter":
        """Get the limiter for a policy by name (``api``, ``auth``, ``ai``)."""
        if policy_name not in self._limiters:
            from modules.ratelimit import RateLimiter, ai_policy, api_policy, auth_policy
            builders = {"api": api_policy, "auth": auth_policy, "ai": ai_policy}
            if policy_name not in builders:
                raise KeyError(f"Unknown rate limit policy: {policy_name}")
            self._limiters[policy_name] = RateLimiter(
                builders[policy_name](self.settings),
                store=self.rate_limit_store,
                clock=self.clock,
            )
        return self._limiters[policy_name]

    @property
    def categories(self) -> "ICategoryService":
        """Get the category service instance."""
        if self._category_service is None:
            from modules.categories.repository import CategoryRepository
            from modules.categories.service import CategoryService
            from modules.transactions.repository import TransactionRepository
            self._category_service = CategoryService(
                CategoryRepository(self.store),
                TransactionRepository(self.store),
            )
        return self._category_service

    @property
    def transactions(self) -> "ITransactionService":
        """Get the transaction service instance."""
        if self._transaction_service is None:
            from modules.transactions.repository import TransactionRepository
            from modules.transactions.service import TransactionService
            self._transaction_service = TransactionService(
                TransactionRepository(self.store),
                clock=self.now,
            )
        return self._transaction_service

    @property
    def savings_goals(self) -> "ISavingsGoalService":
        """Get the savings goal service instance."""
        if self._savings_goal_service is None:
            from modules.savings_goals.repository import SavingsGoalRepository
            from modules.savings_goals.service import SavingsGoalService
            self._savings_goal_service = SavingsGoalService(
                SavingsGoalRepository(self.store),
                clock=self.now,
            )
        return self._savings_goal_service

    @property
    def chat_provider(self) -> "AnthropicChatProvider":
        """Get the Claude client shared by the assistant and document import."""
        if self._chat_provider is None:
            from modules.ai.provider import AnthropicChatProvider
            self._chat_provider = AnthropicChatProvider(
                api_key=self.settings.anthropic_api_key,
                model=self.settings.ai_model,
                max_tokens=self.settings.ai_max_tokens,
            )
        return self._chat_provider

    @property
    def assistant(self) -> "IFinanceAssistant":
        """Get the AI finance assistant."""
        if self._assistant is None:
            from modules.ai.service import FinanceAssistant
            self._assistant = FinanceAssistant(
                provider=self.chat_provider,
                transactions=self.transactions,
                categories=self.categories,
                clock=self.now,
            )
        return self._assistant

    @property
    def document_importer(self) -> "IDocumentImporter":
        """Get the statement importer. Claude does both OCR and categorization."""
        if self._document_importer is None:
            from modules.ai.importer import DocumentImporter
            self._document_importer = DocumentImporter(
                provider=self.chat_provider,
                text_extractor=self.chat_provider,
                categories=self.categories,
            )
        return self._document_importer

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._reset_cache()


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's container."""
    return request.app.state.container


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_transaction_service(request: Request) -> "ITransactionService":
    """FastAPI dependency for transaction service."""
    return get_container(request).transactions


def get_category_service(request: Request) -> "ICategoryService":
    """FastAPI dependency for category service."""
    return get_container(request).categories


def get_savings_goal_service(request: Request) -> "ISavingsGoalService":
    """FastAPI dependency for savings goal service."""
    return get_container(request).savings_goals


def get_assistant(request: Request) -> "IFinanceAssistant":
    """FastAPI dependency for the AI assistant."""
    return get_container(request).assistant


def get_document_importer(request: Request) -> "IDocumentImporter":
    """FastAPI dependency for statement import."""
    return get_container(request).document_importer
