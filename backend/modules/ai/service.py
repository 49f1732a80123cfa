"""
Finance assistant implementation.

Each query rebuilds the user's financial context from their own data and
sends it as the system prompt, so answers are grounded in current numbers
and never in another user's records.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from modules.categories.interfaces import ICategoryService
from modules.transactions.interfaces import ITransactionService
from modules.transactions.models import TransactionFilters
from shared.database import utcnow
from shared.models import AuthenticatedUser, EntryType

from .context import build_financial_context
from .interfaces import IChatProvider, IFinanceAssistant
from .models import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5

SYSTEM_PROMPT = """You are a friendly and knowledgeable personal finance assistant. \
Your job is to help the user understand and manage their personal finances.

{context}

INSTRUCTIONS:
1. Use the financial data above to answer the user's questions
2. Be specific and use numbers when relevant
3. Offer useful insights and practical recommendations
4. If the user asks about a specific period, filter the data by date (today is {today})
5. Be concise but informative
6. Reply in the language the user writes in
7. If there isn't enough information to answer, say so clearly
8. You can calculate, compare and analyse trends
9. Suggest ways to save or manage money better when appropriate
"""


class FinanceAssistant(IFinanceAssistant):
    """IFinanceAssistant over an IChatProvider and the user's own data."""

    def __init__(
        self,
        provider: IChatProvider,
        transactions: ITransactionService,
        categories: ICategoryService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._provider = provider
        self._transactions = transactions
        self._categories = categories
        self._clock = clock

    async def build_system_prompt(self, user_id: str) -> str:
        transactions = await self._transactions.list_transactions(user_id, TransactionFilters())
        categories = await self._categories.list_categories(user_id)
        return SYSTEM_PROMPT.format(
            context=build_financial_context(transactions, categories),
            today=self._clock().date().isoformat(),
        )

    async def answer(
        self,
        user: AuthenticatedUser,
        question: str,
        history: Optional[list[ChatMessage]] = None,
    ) -> str:
        system_prompt = await self.build_system_prompt(user.id)
        messages = [*(history or []), ChatMessage(role=ChatRole.USER, content=question)]
        logger.info(f"Assistant query from user {user.id} ({len(question)} chars)")
        return await self._provider.complete(system_prompt, messages)

    async def suggest_questions(self, user_id: str) -> list[str]:
        transactions = await self._transactions.list_transactions(user_id, TransactionFilters())

        suggestions = [
            "What is my current balance?",
            "Give me a summary of my finances",
        ]
        if transactions:
            suggestions.append("Which is my biggest expense category?")
            if any(t.type == EntryType.EXPENSE for t in transactions):
                suggestions.append("How can I reduce my expenses?")
                suggestions.append("How much did I spend this month?")
            if any(t.type == EntryType.INCOME for t in transactions):
                suggestions.append("How much did I earn this month?")
            if len(transactions) > 30:
                suggestions.append("Compare this month's expenses with last month's")

        return suggestions[:MAX_SUGGESTIONS]
