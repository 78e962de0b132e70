"""GET /v1/dashboard - Balances, current month totals and recent activity"""

import asyncio
from fastapi import APIRouter, Depends

from fintrack.api.v1.schemas import AccountBalanceSchema, DashboardResponse, TransactionSchema
from fintrack.api.dependencies import get_store, get_user_id
from fintrack.config import settings
from fintrack.domain.aggregation import savings_rate, summarize_totals
from fintrack.domain.balances import compute_account_balances, total_balance
from fintrack.infrastructure.store import FinanceStore
from fintrack.utils.date_utils import current_month_range

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """
    Home screen summary.

    Flow:
    1. Fetch accounts, full history, this month's rows and latest rows in parallel
    2. Recompute every account balance from its history
    3. Total this month's income and expense
    """
    # No upper bound: future-dated rows count toward this month
    month_start, _ = current_month_range()

    accounts, history, month_transactions, recent = await asyncio.gather(
        store.list_accounts(user_id),
        store.list_transactions(user_id),
        store.list_transactions(user_id, start=month_start),
        store.list_transactions(user_id, limit=settings.recent_transactions_limit),
    )

    balances = compute_account_balances(accounts, history)
    income, expense = summarize_totals(month_transactions)

    return DashboardResponse(
        total_balance=total_balance(balances),
        accounts=[AccountBalanceSchema.model_validate(b) for b in balances],
        month_income=income,
        month_expense=expense,
        savings_rate=savings_rate(income, expense),
        recent_transactions=[TransactionSchema.model_validate(t) for t in recent],
    )
