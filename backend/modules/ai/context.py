"""
Financial context for the assistant's system prompt.

Summarises a user's recent transactions and available categories as
plain text the model can reason over.
"""

import json
from collections import defaultdict

from modules.categories.models import Category
from modules.transactions.models import Transaction
from shared.models import EntryType

CONTEXT_TRANSACTIONS = 100
RECENT_TRANSACTIONS = 10
TOP_CATEGORIES = 5


def format_amount(amount: float) -> str:
    return f"{amount:,.2f}"


def build_financial_context(transactions: list[Transaction], categories: list[Category]) -> str:
    """
    Render the user's finances as prompt text.

    ``transactions`` is expected newest first; only the first
    CONTEXT_TRANSACTIONS are used.
    """
    transactions = transactions[:CONTEXT_TRANSACTIONS]

    total_income = sum(t.amount for t in transactions if t.type == EntryType.INCOME)
    total_expenses = sum(t.amount for t in transactions if t.type == EntryType.EXPENSE)

    expenses_by_category: dict[str, float] = defaultdict(float)
    for t in transactions:
        if t.type == EntryType.EXPENSE:
            expenses_by_category[t.category] += t.amount
    top_expenses = sorted(expenses_by_category.items(), key=lambda item: item[1], reverse=True)
    top_expenses_text = ", ".join(
        f"{name}: {format_amount(amount)}" for name, amount in top_expenses[:TOP_CATEGORIES]
    )

    income_categories = ", ".join(c.name for c in categories if c.type == EntryType.INCOME)
    expense_categories = ", ".join(c.name for c in categories if c.type == EntryType.EXPENSE)

    recent = [
        {
            "date": t.date.strftime("%d %B %Y"),
            "type": "Income" if t.type == EntryType.INCOME else "Expense",
            "amount": format_amount(t.amount),
            "category": t.category,
            "description": t.description,
        }
        for t in transactions[:RECENT_TRANSACTIONS]
    ]
    detailed = [
        {
            "date": t.date.isoformat(),
            "type": t.type.value,
            "amount": t.amount,
            "category": t.category,
            "description": t.description,
        }
        for t in transactions
    ]

    return f"""USER FINANCIAL INFORMATION:

OVERVIEW:
- Total income: {format_amount(total_income)}
- Total expenses: {format_amount(total_expenses)}
- Current balance: {format_amount(total_income - total_expenses)}
- Number of transactions: {len(transactions)}

TOP {TOP_CATEGORIES} EXPENSE CATEGORIES:
{top_expenses_text or "No expenses recorded"}

AVAILABLE CATEGORIES:
Income: {income_categories}
Expenses: {expense_categories}

RECENT TRANSACTIONS (last {RECENT_TRANSACTIONS}):
{json.dumps(recent, indent=2, ensure_ascii=False)}

ALL TRANSACTIONS (for detailed analysis):
{json.dumps(detailed, indent=2, ensure_ascii=False)}
"""
