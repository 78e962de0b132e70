"""Starter category set offered to new users"""

from typing import Dict, List

DEFAULT_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Food & Dining", "type": "expense", "icon": "🍔", "color": "#ef4444"},
    {"name": "Transportation", "type": "expense", "icon": "🚗", "color": "#f97316"},
    {"name": "Shopping", "type": "expense", "icon": "🛍️", "color": "#eab308"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "💡", "color": "#22c55e"},
    {"name": "Entertainment", "type": "expense", "icon": "🎬", "color": "#06b6d4"},
    {"name": "Healthcare", "type": "expense", "icon": "💊", "color": "#3b82f6"},
    {"name": "Education", "type": "expense", "icon": "📚", "color": "#8b5cf6"},
    {"name": "Other", "type": "expense", "icon": "📦", "color": "#6b7280"},
    {"name": "Salary", "type": "income", "icon": "💰", "color": "#10b981"},
    {"name": "Freelance", "type": "income", "icon": "💻", "color": "#14b8a6"},
    {"name": "Investment", "type": "income", "icon": "📈", "color": "#6366f1"},
    {"name": "Other Income", "type": "income", "icon": "💵", "color": "#84cc16"},
]

ACCOUNT_TYPE_ICONS = {
    "bank": "🏦",
    "ewallet": "📱",
    "cash": "💵",
}
