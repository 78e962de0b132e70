"""Data access layer backed by a SQL database"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from fintrack.infrastructure.database.models import AccountRow, CategoryRow, TransactionRow
from fintrack.infrastructure.store import FinanceStore
from fintrack.domain.models import Account, Category, Transaction
from fintrack.domain.exceptions import DataStoreError, NotFoundError


def to_account(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        type=row.type,
        initial_balance=row.initial_balance,
        icon=row.icon,
        user_id=row.user_id,
        created_at=row.created_at,
    )


def to_category(row: CategoryRow) -> Category:
    return Category(
        id=row.id,
        name=row.name,
        type=row.type,
        icon=row.icon,
        color=row.color,
        user_id=row.user_id,
        budget_limit=row.budget_limit,
    )


def to_transaction(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        date=row.date,
        type=row.type,
        amount=row.amount,
        account_id=row.account_id,
        user_id=row.user_id,
        category_id=row.category_id,
        description=row.description,
        created_at=row.created_at,
        category=to_category(row.category) if row.category is not None else None,
        account=to_account(row.account) if row.account is not None else None,
    )


class SqlFinanceStore(FinanceStore):
    """FinanceStore over a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DataStoreError(f"Database write failed: {e}") from e

    def _get_owned(self, model, user_id: str, row_id: str):
        try:
            row = self.db.query(model).filter(model.id == row_id, model.user_id == user_id).first()
        except SQLAlchemyError as e:
            raise DataStoreError(f"Database read failed: {e}") from e
        if row is None:
            raise NotFoundError(f"{model.__tablename__} row {row_id} not found")
        return row

    async def list_accounts(self, user_id: str) -> List[Account]:
        try:
            rows = (
                self.db.query(AccountRow)
                .filter(AccountRow.user_id == user_id)
                .order_by(AccountRow.created_at.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Database read failed: {e}") from e
        return [to_account(row) for row in rows]

    async def get_account(self, user_id: str, account_id: str) -> Account:
        return to_account(self._get_owned(AccountRow, user_id, account_id))

    async def list_categories(self, user_id: str, type: Optional[str] = None) -> List[Category]:
        query = self.db.query(CategoryRow).filter(CategoryRow.user_id == user_id)
        if type is not None:
            query = query.filter(CategoryRow.type == type)
        try:
            rows = query.order_by(CategoryRow.name.asc()).all()
        except SQLAlchemyError as e:
            raise DataStoreError(f"Database read failed: {e}") from e
        return [to_category(row) for row in rows]

    async def list_budget_categories(self, user_id: str) -> List[Category]:
        try:
            rows = (
                self.db.query(CategoryRow)
                .filter(
                    CategoryRow.user_id == user_id,
                    CategoryRow.type == "expense",
                    CategoryRow.budget_limit.isnot(None),
                )
                .order_by(CategoryRow.name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Database read failed: {e}") from e
        return [to_category(row) for row in rows]

    async def get_category(self, user_id: str, category_id: str) -> Category:
        return to_category(self._get_owned(CategoryRow, user_id, category_id))

    async def list_transactions(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[str] = None,
        account_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        query = (
            self.db.query(TransactionRow)
            .options(joinedload(TransactionRow.category), joinedload(TransactionRow.account))
            .filter(TransactionRow.user_id == user_id)
        )
        if start is not None:
            query = query.filter(TransactionRow.date >= start)
        if end is not None:
            query = query.filter(TransactionRow.date <= end)
        if type is not None:
            query = query.filter(TransactionRow.type == type)
        if account_id is not None:
            query = query.filter(TransactionRow.account_id == account_id)

        query = query.order_by(TransactionRow.date.desc(), TransactionRow.created_at.desc())
        if limit is not None:
            query = query.limit(limit)

        try:
            rows = query.all()
        except SQLAlchemyError as e:
            raise DataStoreError(f"Database read failed: {e}") from e
        return [to_transaction(row) for row in rows]

    async def create_account(self, user_id: str, name: str, type: str, initial_balance: int, icon: str) -> Account:
        row = AccountRow(user_id=user_id, name=name, type=type, initial_balance=initial_balance, icon=icon)
        self.db.add(row)
        self._commit()
        return to_account(row)

    async def delete_account(self, user_id: str, account_id: str) -> None:
        row = self._get_owned(AccountRow, user_id, account_id)
        self.db.delete(row)
        self._commit()

    async def create_category(
        self,
        user_id: str,
        name: str,
        type: str,
        icon: str,
        color: str,
        budget_limit: Optional[int] = None,
    ) -> Category:
        row = CategoryRow(user_id=user_id, name=name, type=type, icon=icon, color=color, budget_limit=budget_limit)
        self.db.add(row)
        self._commit()
        return to_category(row)

    async def create_categories(self, user_id: str, rows: List[Dict[str, Any]]) -> List[Category]:
        db_rows = [
            CategoryRow(
                user_id=user_id,
                name=r["name"],
                type=r["type"],
                icon=r["icon"],
                color=r["color"],
                budget_limit=r.get("budget_limit"),
            )
            for r in rows
        ]
        self.db.add_all(db_rows)
        self._commit()
        return [to_category(row) for row in db_rows]

    async def delete_category(self, user_id: str, category_id: str) -> None:
        row = self._get_owned(CategoryRow, user_id, category_id)
        self.db.delete(row)
        self._commit()

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
        row = TransactionRow(
            user_id=user_id,
            date=date,
            type=type,
            amount=amount,
            account_id=account_id,
            category_id=category_id,
            description=description,
        )
        self.db.add(row)
        self._commit()
        return to_transaction(row)

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        row = self._get_owned(TransactionRow, user_id, transaction_id)
        self.db.delete(row)
        self._commit()
