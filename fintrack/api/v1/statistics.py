"""GET /v1/statistics - Period statistics and budget utilization"""

import time
import asyncio
from fastapi import APIRouter, Depends, Query, Request

from fintrack.api.v1.schemas import (
    BudgetItemSchema,
    CategoryStatSchema,
    MonthlyStatSchema,
    StatisticsResponse,
)
from fintrack.api.dependencies import get_request_id, get_store, get_user_id
from fintrack.domain.aggregation import aggregate_period, savings_rate
from fintrack.domain.budgets import evaluate_budgets, STATUS_OVER
from fintrack.infrastructure.store import FinanceStore
from fintrack.infrastructure.observability.metrics import record_statistics
from fintrack.infrastructure.observability.logging import log_statistics
from fintrack.utils.date_utils import period_date_range

router = APIRouter()


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    request: Request,
    period: str = Query("month", pattern="^(month|3months|6months|year)$"),
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """
    Aggregate a reporting period.

    Flow:
    1. Resolve the period to an inclusive date range ending today
    2. Fetch the period's transactions and the budgeted categories in parallel
    3. Reduce to totals, category breakdown and monthly series
    4. Evaluate budgets against per-category spend
    """
    start_time = time.time()
    request_id = get_request_id(request)

    start, end = period_date_range(period)

    transactions, budget_categories = await asyncio.gather(
        store.list_transactions(user_id, start=start, end=end),
        store.list_budget_categories(user_id),
    )

    summary = aggregate_period(start, end, transactions)
    budget_items = evaluate_budgets(budget_categories, summary.spent_by_category)

    duration_ms = (time.time() - start_time) * 1000
    record_statistics(period, budget_items)
    log_statistics(
        request_id,
        user_id,
        period,
        transaction_count=len(transactions),
        over_budget_count=sum(1 for item in budget_items if item.status == STATUS_OVER),
        duration_ms=duration_ms,
    )

    return StatisticsResponse(
        period=period,
        start=summary.start,
        end=summary.end,
        total_income=summary.total_income,
        total_expense=summary.total_expense,
        savings_rate=savings_rate(summary.total_income, summary.total_expense),
        category_stats=[CategoryStatSchema.model_validate(s) for s in summary.category_stats],
        monthly_stats=[MonthlyStatSchema.model_validate(m) for m in summary.monthly_stats],
        budget_items=[BudgetItemSchema.model_validate(item) for item in budget_items],
    )
