"""
Default categories, shared by every user.

Seeded into the store at startup; users can't edit or delete them.
"""

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    # Income
    {"name": "Salary", "type": "income", "icon": "briefcase", "color": "#10b981"},
    {"name": "Freelance", "type": "income", "icon": "laptop", "color": "#3b82f6"},
    {"name": "Investments", "type": "income", "icon": "trending-up", "color": "#8b5cf6"},
    {"name": "Other Income", "type": "income", "icon": "plus-circle", "color": "#06b6d4"},
    # Expenses
    {"name": "Food & Dining", "type": "expense", "icon": "utensils", "color": "#ef4444"},
    {"name": "Shopping", "type": "expense", "icon": "shopping-bag", "color": "#f59e0b"},
    {"name": "Transport", "type": "expense", "icon": "car", "color": "#6366f1"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "file-text", "color": "#ec4899"},
    {"name": "Entertainment", "type": "expense", "icon": "tv", "color": "#14b8a6"},
    {"name": "Healthcare", "type": "expense", "icon": "heart", "color": "#f43f5e"},
    {"name": "Education", "type": "expense", "icon": "book", "color": "#8b5cf6"},
    {"name": "Other Expenses", "type": "expense", "icon": "more-horizontal", "color": "#64748b"},
]
