"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import date as Date, datetime
from typing import List, Literal, Optional
from fintrack.domain.models import ACCOUNT_TYPE_LABELS

AccountType = Literal["bank", "ewallet", "cash"]
TransactionType = Literal["income", "expense"]


class DomainSchema(BaseModel):
    """Base for responses built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class AccountSchema(DomainSchema):
    """Stored account"""

    id: str
    name: str
    type: AccountType
    initial_balance: int
    icon: str
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def type_label(self) -> str:
        return ACCOUNT_TYPE_LABELS.get(self.type, self.type)


class AccountBalanceSchema(DomainSchema):
    """Account with its recomputed balance"""

    account: AccountSchema
    balance: int


class AccountsResponse(BaseModel):
    """Response for GET /v1/accounts"""

    accounts: List[AccountBalanceSchema]
    total_balance: int


class AccountCreate(BaseModel):
    """Request body for POST /v1/accounts"""

    name: str = Field(..., min_length=1, description="Display name")
    type: AccountType = "bank"
    initial_balance: int = Field(0, description="Balance when tracking starts, may be negative")
    icon: Optional[str] = Field(None, description="Icon glyph, defaults by account type")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Account name is required")
        return value


class CategorySchema(DomainSchema):
    """Stored category"""

    id: str
    name: str
    type: TransactionType
    icon: str
    color: str
    budget_limit: Optional[int] = None


class CategoryCreate(BaseModel):
    """Request body for POST /v1/categories"""

    name: str = Field(..., min_length=1)
    type: TransactionType = "expense"
    icon: str = "📦"
    color: str = Field("#6b7280", pattern=r"^#[0-9a-fA-F]{6}$")
    budget_limit: Optional[int] = Field(None, gt=0, description="Monthly limit, expense categories only")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        return value


class TransactionSchema(DomainSchema):
    """Stored transaction with joined category and account"""

    id: str
    date: Date
    type: TransactionType
    amount: int
    account_id: str
    category_id: Optional[str] = None
    description: Optional[str] = None
    category: Optional[CategorySchema] = None
    account: Optional[AccountSchema] = None


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    date: Date = Field(default_factory=Date.today)
    type: TransactionType = "expense"
    amount: int = Field(..., gt=0, description="Positive amount; direction comes from type")
    account_id: str = Field(..., min_length=1, description="Account the money moves in or out of")
    category_id: Optional[str] = None
    description: Optional[str] = None

    @field_validator("category_id", "description")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class TransactionGroup(BaseModel):
    """Transactions sharing one date"""

    date: Date
    transactions: List[TransactionSchema]


class TransactionsResponse(BaseModel):
    """Response for GET /v1/transactions"""

    groups: List[TransactionGroup]


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    total_balance: int
    accounts: List[AccountBalanceSchema]
    month_income: int
    month_expense: int
    savings_rate: int
    recent_transactions: List[TransactionSchema]


class CategoryStatSchema(DomainSchema):
    """Expense total for one category"""

    name: str
    amount: int
    color: str
    icon: str
    percentage: int


class MonthlyStatSchema(DomainSchema):
    """Income and expense for one month"""

    month: str
    income: int
    expense: int


class BudgetItemSchema(DomainSchema):
    """Budget utilization for one category"""

    category: CategorySchema
    spent: int
    percentage: int
    status: Literal["normal", "warning", "over"]


class StatisticsResponse(BaseModel):
    """Response for GET /v1/statistics"""

    period: str
    start: Date
    end: Date
    total_income: int
    total_expense: int
    savings_rate: int
    category_stats: List[CategoryStatSchema]
    monthly_stats: List[MonthlyStatSchema]
    budget_items: List[BudgetItemSchema]
