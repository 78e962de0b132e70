"""Supabase (PostgREST) HTTP client for the hosted backend"""

import httpx
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple
from fintrack.config import settings
from fintrack.domain.models import Account, Category, Transaction, ACCOUNT_TYPES, TRANSACTION_TYPES
from fintrack.domain.exceptions import DataStoreError, InvalidRowError, NotFoundError
from fintrack.infrastructure.observability.metrics import store_latency_histogram
from fintrack.infrastructure.store import FinanceStore

TRANSACTION_SELECT = "*,category:categories(*),account:accounts(*)"

Params = Sequence[Tuple[str, str]]


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def parse_account(row: Dict[str, Any]) -> Account:
    """Build an Account from a REST row"""
    try:
        if row["type"] not in ACCOUNT_TYPES:
            raise ValueError(f"unknown account type {row['type']!r}")
        return Account(
            id=str(row["id"]),
            name=row["name"],
            type=row["type"],
            initial_balance=int(row["initial_balance"]),
            icon=row.get("icon") or "",
            user_id=row["user_id"],
            created_at=_parse_timestamp(row.get("created_at")),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRowError(f"Invalid account row: {e}") from e


def parse_category(row: Dict[str, Any]) -> Category:
    """Build a Category from a REST row"""
    try:
        if row["type"] not in TRANSACTION_TYPES:
            raise ValueError(f"unknown category type {row['type']!r}")
        budget_limit = row.get("budget_limit")
        return Category(
            id=str(row["id"]),
            name=row["name"],
            type=row["type"],
            icon=row.get("icon") or "",
            color=row.get("color") or "",
            user_id=row["user_id"],
            budget_limit=int(budget_limit) if budget_limit is not None else None,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRowError(f"Invalid category row: {e}") from e


def parse_transaction(row: Dict[str, Any]) -> Transaction:
    """Build a Transaction, including joined category/account, from a REST row"""
    try:
        amount = int(row["amount"])
        if amount <= 0:
            raise ValueError(f"non-positive amount {amount}")
        if row["type"] not in TRANSACTION_TYPES:
            raise ValueError(f"unknown transaction type {row['type']!r}")
        category_id = row.get("category_id")
        category = row.get("category")
        account = row.get("account")
        return Transaction(
            id=str(row["id"]),
            date=date.fromisoformat(row["date"]),
            type=row["type"],
            amount=amount,
            account_id=str(row["account_id"]),
            user_id=row["user_id"],
            category_id=str(category_id) if category_id is not None else None,
            description=row.get("description"),
            created_at=_parse_timestamp(row.get("created_at")),
            category=parse_category(category) if category else None,
            account=parse_account(account) if account else None,
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidRowError(f"Invalid transaction row: {e}") from e


class SupabaseClient(FinanceStore):
    """FinanceStore over the Supabase REST interface"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self, prefer: str | None = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Params = (),
        json: Any = None,
        prefer: str | None = None,
    ) -> List[Dict[str, Any]]:
        """
        Issue one REST call and return the decoded row list.

        Raises:
            DataStoreError: On timeout, HTTP errors, or a non-JSON body
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with store_latency_histogram.time():
                    response = await client.request(
                        method,
                        f"{self.base_url}/rest/v1/{table}",
                        params=list(params),
                        json=json,
                        headers=self._headers(prefer),
                    )
                response.raise_for_status()
                if not response.content:
                    return []
                data = response.json()

            except httpx.TimeoutException as e:
                raise DataStoreError(f"Store timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataStoreError(f"Store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataStoreError(f"Store unreachable: {e}") from e
            except ValueError as e:
                raise DataStoreError(f"Store returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise DataStoreError("Store returned a non-list payload")
        return data

    async def _fetch_one(self, table: str, user_id: str, row_id: str, select: str = "*") -> Dict[str, Any]:
        rows = await self._request(
            "GET",
            table,
            [("select", select), ("id", f"eq.{row_id}"), ("user_id", f"eq.{user_id}")],
        )
        if not rows:
            raise NotFoundError(f"{table} row {row_id} not found")
        return rows[0]

    async def _delete(self, table: str, user_id: str, row_id: str) -> None:
        rows = await self._request(
            "DELETE",
            table,
            [("id", f"eq.{row_id}"), ("user_id", f"eq.{user_id}")],
            prefer="return=representation",
        )
        if not rows:
            raise NotFoundError(f"{table} row {row_id} not found")

    async def _insert(self, table: str, payload: Any) -> List[Dict[str, Any]]:
        return await self._request("POST", table, json=payload, prefer="return=representation")

    async def _insert_one(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._insert(table, payload)
        if not rows:
            raise DataStoreError(f"Store returned no {table} row for insert")
        return rows[0]

    async def list_accounts(self, user_id: str) -> List[Account]:
        rows = await self._request(
            "GET",
            "accounts",
            [("select", "*"), ("user_id", f"eq.{user_id}"), ("order", "created_at.asc")],
        )
        return [parse_account(row) for row in rows]

    async def get_account(self, user_id: str, account_id: str) -> Account:
        return parse_account(await self._fetch_one("accounts", user_id, account_id))

    async def list_categories(self, user_id: str, type: Optional[str] = None) -> List[Category]:
        params = [("select", "*"), ("user_id", f"eq.{user_id}")]
        if type is not None:
            params.append(("type", f"eq.{type}"))
        params.append(("order", "name.asc"))
        rows = await self._request("GET", "categories", params)
        return [parse_category(row) for row in rows]

    async def list_budget_categories(self, user_id: str) -> List[Category]:
        rows = await self._request(
            "GET",
            "categories",
            [
                ("select", "*"),
                ("user_id", f"eq.{user_id}"),
                ("type", "eq.expense"),
                ("budget_limit", "not.is.null"),
                ("order", "name.asc"),
            ],
        )
        return [parse_category(row) for row in rows]

    async def get_category(self, user_id: str, category_id: str) -> Category:
        return parse_category(await self._fetch_one("categories", user_id, category_id))

    async def list_transactions(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[str] = None,
        account_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        params = [("select", TRANSACTION_SELECT), ("user_id", f"eq.{user_id}")]
        if start is not None:
            params.append(("date", f"gte.{start.isoformat()}"))
        if end is not None:
            params.append(("date", f"lte.{end.isoformat()}"))
        if type is not None:
            params.append(("type", f"eq.{type}"))
        if account_id is not None:
            params.append(("account_id", f"eq.{account_id}"))
        params.append(("order", "date.desc,created_at.desc"))
        if limit is not None:
            params.append(("limit", str(limit)))

        rows = await self._request("GET", "transactions", params)
        return [parse_transaction(row) for row in rows]

    async def create_account(self, user_id: str, name: str, type: str, initial_balance: int, icon: str) -> Account:
        row = await self._insert_one(
            "accounts",
            {"user_id": user_id, "name": name, "type": type, "initial_balance": initial_balance, "icon": icon},
        )
        return parse_account(row)

    async def delete_account(self, user_id: str, account_id: str) -> None:
        # Transactions go with the account through the foreign key cascade
        await self._delete("accounts", user_id, account_id)

    async def create_category(
        self,
        user_id: str,
        name: str,
        type: str,
        icon: str,
        color: str,
        budget_limit: Optional[int] = None,
    ) -> Category:
        row = await self._insert_one(
            "categories",
            {
                "user_id": user_id,
                "name": name,
                "type": type,
                "icon": icon,
                "color": color,
                "budget_limit": budget_limit,
            },
        )
        return parse_category(row)

    async def create_categories(self, user_id: str, rows: List[Dict[str, Any]]) -> List[Category]:
        payload = [
            {
                "user_id": user_id,
                "name": r["name"],
                "type": r["type"],
                "icon": r["icon"],
                "color": r["color"],
                "budget_limit": r.get("budget_limit"),
            }
            for r in rows
        ]
        return [parse_category(row) for row in await self._insert("categories", payload)]

    async def delete_category(self, user_id: str, category_id: str) -> None:
        # category_id on transactions is nulled by the foreign key rule
        await self._delete("categories", user_id, category_id)

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
        row = await self._insert_one(
            "transactions",
            {
                "user_id": user_id,
                "date": date.isoformat(),
                "type": type,
                "amount": amount,
                "account_id": account_id,
                "category_id": category_id,
                "description": description,
            },
        )
        return parse_transaction(row)

    async def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        await self._delete("transactions", user_id, transaction_id)
