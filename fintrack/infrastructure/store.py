"""Abstract query collaborator over the backing relational store"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional
from fintrack.domain.models import Account, Category, Transaction


class FinanceStore(ABC):
    """
    Read and write access to a user's accounts, categories and transactions.

    Every call is scoped to `user_id`. Implementations raise:
        DataStoreError: Store unreachable or returned an error
        InvalidRowError: A fetched row could not be parsed
        NotFoundError: Row to fetch or delete does not exist for the user
    """

    # Reads

    @abstractmethod
    async def list_accounts(self, user_id: str) -> List[Account]:
        """Accounts ordered by creation time, oldest first"""

    @abstractmethod
    async def get_account(self, user_id: str, account_id: str) -> Account:
        ...

    @abstractmethod
    async def list_categories(self, user_id: str, type: Optional[str] = None) -> List[Category]:
        """Categories ordered by name, optionally restricted to one type"""

    @abstractmethod
    async def list_budget_categories(self, user_id: str) -> List[Category]:
        """Expense categories carrying a budget limit, ordered by name"""

    @abstractmethod
    async def get_category(self, user_id: str, category_id: str) -> Category:
        ...

    @abstractmethod
    async def list_transactions(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[str] = None,
        account_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Transactions with joined category and account, newest date first; start/end inclusive"""

    # Writes

    @abstractmethod
    async def create_account(self, user_id: str, name: str, type: str, initial_balance: int, icon: str) -> Account:
        ...

    @abstractmethod
    async def delete_account(self, user_id: str, account_id: str) -> None:
        """Delete an account together with all of its transactions"""

    @abstractmethod
    async def create_category(
        self,
        user_id: str,
        name: str,
        type: str,
        icon: str,
        color: str,
        budget_limit: Optional[int] = None,
    ) -> Category:
        ...

    @abstractmethod
    async def create_categories(self, user_id: str, rows: List[Dict[str, Any]]) -> List[Category]:
        """Bulk insert; each row carries name, type, icon, color and optionally budget_limit"""

    @abstractmethod
    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category; its transactions become uncategorized"""

    @abstractmethod
    async def create_transaction(
        self,
        user_id: str,
        date: date,
        type: str,
        amount: int,
        account_id: str,
        category_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        ...

    @abstractmethod
    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        ...
