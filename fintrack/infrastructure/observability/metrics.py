"""Prometheus metrics for monitoring statistics requests, budgets and store health"""

from typing import Iterable
from prometheus_client import Counter, Histogram
from fintrack.domain.models import BudgetItem

# Statistics metrics
statistics_counter = Counter(
    "fintrack_statistics_total",
    "Statistics reports computed",
    ["period"],  # month | 3months | 6months | year
)

budget_status_counter = Counter(
    "fintrack_budget_status_total",
    "Budget evaluations by utilization band",
    ["status"],  # normal | warning | over
)

# Store metrics
store_fetch_failures_counter = Counter(
    "store_fetch_failures_total",
    "Failed calls to the backing store",
)

store_latency_histogram = Histogram(
    "store_request_latency_seconds",
    "Backing store response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_statistics(period: str, budget_items: Iterable[BudgetItem]) -> None:
    """Record a statistics report and the band of every evaluated budget"""
    statistics_counter.labels(period=period).inc()
    for item in budget_items:
        budget_status_counter.labels(status=item.status).inc()
