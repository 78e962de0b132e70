"""Unit tests for the Supabase REST client"""

import httpx
import pytest
from datetime import date
from fintrack.domain.exceptions import DataStoreError, InvalidRowError, NotFoundError
from fintrack.infrastructure.clients.supabase import SupabaseClient, TRANSACTION_SELECT

FOOD = {
    "id": "cat_food",
    "name": "Food & Dining",
    "type": "expense",
    "icon": "🍔",
    "color": "#ef4444",
    "budget_limit": 1500000,
    "user_id": "user_1",
}

BCA = {
    "id": "acc_bca",
    "name": "BCA",
    "type": "bank",
    "initial_balance": 500000,
    "icon": "🏦",
    "created_at": "2026-09-01T08:00:00+00:00",
    "user_id": "user_1",
}


def make_client(handler) -> SupabaseClient:
    return SupabaseClient(
        base_url="https://project.supabase.co/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


async def test_list_transactions_builds_query_and_parses_joins():
    """Date bounds, joins and ordering are pushed to the store"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(
            200,
            json=[
                {
                    "id": "txn_1",
                    "date": "2026-10-05",
                    "type": "expense",
                    "amount": 45000,
                    "category_id": "cat_food",
                    "account_id": "acc_bca",
                    "description": None,
                    "created_at": "2026-10-05T12:30:00+00:00",
                    "user_id": "user_1",
                    "category": FOOD,
                    "account": BCA,
                }
            ],
        )

    client = make_client(handler)
    transactions = await client.list_transactions("user_1", start=date(2026, 10, 1), end=date(2026, 10, 17))

    request = seen["request"]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/transactions"
    assert request.url.params["select"] == TRANSACTION_SELECT
    assert request.url.params["user_id"] == "eq.user_1"
    assert request.url.params.get_list("date") == ["gte.2026-10-01", "lte.2026-10-17"]
    assert request.url.params["order"] == "date.desc,created_at.desc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"

    [txn] = transactions
    assert txn.date == date(2026, 10, 5)
    assert txn.amount == 45000
    assert txn.category.name == "Food & Dining"
    assert txn.category.budget_limit == 1500000
    assert txn.account.initial_balance == 500000


async def test_list_budget_categories_filters_on_limit():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        return httpx.Response(200, json=[FOOD])

    categories = await make_client(handler).list_budget_categories("user_1")

    assert seen["params"]["type"] == "eq.expense"
    assert seen["params"]["budget_limit"] == "not.is.null"
    assert seen["params"]["order"] == "name.asc"
    assert categories[0].id == "cat_food"


async def test_create_transaction_requests_representation():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(
            201,
            json=[
                {
                    "id": "txn_new",
                    "date": "2026-10-17",
                    "type": "income",
                    "amount": 7500000,
                    "category_id": None,
                    "account_id": "acc_bca",
                    "description": "Salary",
                    "user_id": "user_1",
                }
            ],
        )

    txn = await make_client(handler).create_transaction(
        "user_1", date(2026, 10, 17), "income", 7500000, "acc_bca", description="Salary"
    )

    request = seen["request"]
    assert request.method == "POST"
    assert request.headers["Prefer"] == "return=representation"
    assert b'"amount":7500000' in request.content.replace(b" ", b"")
    assert txn.id == "txn_new"
    assert txn.category_id is None


async def test_delete_missing_row_raises_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(200, json=[])

    with pytest.raises(NotFoundError):
        await make_client(handler).delete_account("user_1", "acc_missing")


async def test_http_error_raises_data_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "boom"})

    with pytest.raises(DataStoreError):
        await make_client(handler).list_accounts("user_1")


async def test_timeout_raises_data_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(DataStoreError):
        await make_client(handler).list_accounts("user_1")


async def test_malformed_row_raises_invalid_row_error():
    """A non-positive amount never reaches the aggregation layer"""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {
                    "id": "txn_bad",
                    "date": "2026-10-05",
                    "type": "expense",
                    "amount": -45000,
                    "account_id": "acc_bca",
                    "user_id": "user_1",
                }
            ],
        )

    with pytest.raises(InvalidRowError):
        await make_client(handler).list_transactions("user_1")


async def test_empty_insert_representation_raises_data_store_error():
    """An insert that echoes no row is a store failure, not a crash"""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        return httpx.Response(201, json=[])

    with pytest.raises(DataStoreError):
        await make_client(handler).create_account("user_1", "BCA", "bank", 500000, "🏦")
