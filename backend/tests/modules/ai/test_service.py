"""Tests for the finance assistant and its context."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from modules.ai.context import build_financial_context
from modules.ai.models import ChatMessage, ChatRole
from modules.ai.service import MAX_SUGGESTIONS, FinanceAssistant
from modules.categories.repository import CategoryRepository
from modules.categories.service import CategoryService
from modules.transactions.models import CreateTransactionRequest, TransactionFilters
from modules.transactions.repository import TransactionRepository
from modules.transactions.service import TransactionService
from shared.database import DocumentStore
from shared.models import AuthenticatedUser, EntryType

USER = AuthenticatedUser(id="a" * 24, email="ana@example.com", name="Ana")
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def transactions(store):
    return TransactionService(TransactionRepository(store), clock=lambda: NOW)


@pytest_asyncio.fixture
async def categories(store):
    service = CategoryService(CategoryRepository(store), TransactionRepository(store))
    await service.seed_defaults()
    return service


@pytest.fixture
def provider():
    mock = AsyncMock()
    mock.complete.return_value = "Your balance is 900.00."
    return mock


@pytest.fixture
def assistant(provider, transactions, categories):
    return FinanceAssistant(provider, transactions, categories, clock=lambda: NOW)


async def add(transactions, entry_type, amount, category, user_id=USER.id):
    await transactions.create_transaction(
        user_id,
        CreateTransactionRequest(type=entry_type, amount=amount, category=category, date=NOW),
    )


class TestFinancialContext:
    @pytest.mark.asyncio
    async def test_overview(self, transactions, categories):
        await add(transactions, EntryType.INCOME, 1000, "Salary")
        await add(transactions, EntryType.EXPENSE, 100, "Food & Dining")

        text = build_financial_context(
            await transactions.list_transactions(USER.id, TransactionFilters()),
            await categories.list_categories(USER.id),
        )

        assert "Total income: 1,000.00" in text
        assert "Total expenses: 100.00" in text
        assert "Current balance: 900.00" in text
        assert "Food & Dining: 100.00" in text
        assert "Salary" in text

    def test_no_transactions(self):
        text = build_financial_context([], [])
        assert "No expenses recorded" in text
        assert "Number of transactions: 0" in text


class TestAnswer:
    @pytest.mark.asyncio
    async def test_sends_users_own_data(self, assistant, provider, transactions):
        """The prompt holds the asking user's data and nobody else's."""
        await add(transactions, EntryType.EXPENSE, 42, "Shopping")
        await add(transactions, EntryType.EXPENSE, 9999, "Shopping", user_id="b" * 24)

        answer = await assistant.answer(USER, "How much did I spend?")

        assert answer == "Your balance is 900.00."
        system_prompt, messages = provider.complete.call_args.args
        assert "Total expenses: 42.00" in system_prompt
        assert "9,999.00" not in system_prompt
        assert "today is 2025-01-15" in system_prompt
        assert messages == [ChatMessage(role=ChatRole.USER, content="How much did I spend?")]

    @pytest.mark.asyncio
    async def test_includes_history(self, assistant, provider):
        history = [
            ChatMessage(role=ChatRole.USER, content="Hi"),
            ChatMessage(role=ChatRole.ASSISTANT, content="Hello!"),
        ]
        await assistant.answer(USER, "And now?", history)
        _, messages = provider.complete.call_args.args
        assert [m.content for m in messages] == ["Hi", "Hello!", "And now?"]


class TestSuggestions:
    @pytest.mark.asyncio
    async def test_without_data(self, assistant):
        assert await assistant.suggest_questions(USER.id) == [
            "What is my current balance?",
            "Give me a summary of my finances",
        ]

    @pytest.mark.asyncio
    async def test_with_data_is_capped(self, assistant, transactions):
        await add(transactions, EntryType.INCOME, 1000, "Salary")
        await add(transactions, EntryType.EXPENSE, 10, "Shopping")

        suggestions = await assistant.suggest_questions(USER.id)
        assert len(suggestions) == MAX_SUGGESTIONS
        assert "How can I reduce my expenses?" in suggestions
