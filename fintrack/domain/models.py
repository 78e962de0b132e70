"""Domain models - pure Python dataclasses representing finance entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


ACCOUNT_TYPES = ("bank", "ewallet", "cash")
TRANSACTION_TYPES = ("income", "expense")

ACCOUNT_TYPE_LABELS = {
    "bank": "Bank",
    "ewallet": "E-Wallet",
    "cash": "Cash",
}


@dataclass
class Account:
    """Money container owned by a user"""

    id: str
    name: str
    type: str  # "bank", "ewallet" or "cash"
    initial_balance: int
    icon: str
    user_id: str
    created_at: Optional[datetime] = None


@dataclass
class Category:
    """Income or expense classification, optionally budget-limited"""

    id: str
    name: str
    type: str  # "income" or "expense"
    icon: str
    color: str
    user_id: str
    budget_limit: Optional[int] = None


@dataclass
class Transaction:
    """Single dated money movement against one account"""

    id: str
    date: date
    type: str  # "income" or "expense"
    amount: int  # always positive, direction comes from type
    account_id: str
    user_id: str
    category_id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    # Joined rows
    category: Optional[Category] = None
    account: Optional[Account] = None


@dataclass
class AccountBalance:
    """Account paired with its recomputed balance"""

    account: Account
    balance: int


@dataclass
class CategoryStat:
    """Expense total for one category within a reporting period"""

    name: str
    amount: int
    color: str
    icon: str
    percentage: int = 0


@dataclass
class MonthlyStat:
    """Income and expense sums for one month label"""

    month: str
    income: int = 0
    expense: int = 0


@dataclass
class BudgetItem:
    """Budget-bearing category with its spend for the period"""

    category: Category
    spent: int
    percentage: int
    status: str  # "normal", "warning" or "over"


@dataclass
class PeriodSummary:
    """Aggregated statistics for a reporting period"""

    start: date
    end: date
    total_income: int
    total_expense: int
    category_stats: List[CategoryStat] = field(default_factory=list)
    monthly_stats: List[MonthlyStat] = field(default_factory=list)
    spent_by_category: Dict[str, int] = field(default_factory=dict)
