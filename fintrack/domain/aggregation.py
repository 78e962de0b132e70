"""Period aggregation engine - totals, category breakdown and monthly trend"""

from datetime import date
from typing import Dict, Iterable, List, Tuple
from fintrack.domain.models import CategoryStat, MonthlyStat, PeriodSummary, Transaction
from fintrack.utils.date_utils import month_label

UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#6b7280"
UNCATEGORIZED_ICON = "📦"


def calculate_percentage(part: int, total: int) -> int:
    """
    Rounded percentage of `part` in `total`, halves rounded up.

    Returns 0 when total is 0 instead of dividing by zero.
    """
    if total == 0:
        return 0
    # floor(100 * part / total + 0.5) in integer arithmetic
    return (200 * part + total) // (2 * total)


def savings_rate(income: int, expense: int) -> int:
    """Share of income left after expenses, as a percentage (can be negative)"""
    if income <= 0:
        return 0
    return calculate_percentage(income - expense, income)


def summarize_totals(transactions: Iterable[Transaction]) -> Tuple[int, int]:
    """Return (total_income, total_expense); each transaction lands in exactly one"""
    income = 0
    expense = 0
    for txn in transactions:
        if txn.type == "income":
            income += txn.amount
        else:
            expense += txn.amount
    return income, expense


def aggregate_period(start: date, end: date, transactions: Iterable[Transaction]) -> PeriodSummary:
    """
    Aggregate transactions already filtered to [start, end] by the store.

    Produces:
    - total income and total expense
    - expense totals per category name, largest first (stable on ties),
      with expenses lacking a category grouped under "Uncategorized"
    - income/expense per month label, in first-encounter order
    - expense totals per category id, used for budget evaluation
    """
    income = 0
    expense = 0
    category_map: Dict[str, CategoryStat] = {}
    monthly_map: Dict[str, MonthlyStat] = {}
    spent_by_category: Dict[str, int] = {}

    for txn in transactions:
        if txn.type == "income":
            income += txn.amount
        else:
            expense += txn.amount

            if txn.category is not None:
                name = txn.category.name or UNCATEGORIZED_NAME
                color = txn.category.color or UNCATEGORIZED_COLOR
                icon = txn.category.icon or UNCATEGORIZED_ICON
            else:
                name, color, icon = UNCATEGORIZED_NAME, UNCATEGORIZED_COLOR, UNCATEGORIZED_ICON

            stat = category_map.get(name)
            if stat is None:
                stat = category_map[name] = CategoryStat(name=name, amount=0, color=color, icon=icon)
            stat.amount += txn.amount

            if txn.category_id:
                spent_by_category[txn.category_id] = spent_by_category.get(txn.category_id, 0) + txn.amount

        # Month order follows first encounter, not the calendar
        key = month_label(txn.date)
        monthly = monthly_map.get(key)
        if monthly is None:
            monthly = monthly_map[key] = MonthlyStat(month=key)
        if txn.type == "income":
            monthly.income += txn.amount
        else:
            monthly.expense += txn.amount

    category_stats: List[CategoryStat] = sorted(category_map.values(), key=lambda s: s.amount, reverse=True)
    for stat in category_stats:
        stat.percentage = calculate_percentage(stat.amount, expense)

    return PeriodSummary(
        start=start,
        end=end,
        total_income=income,
        total_expense=expense,
        category_stats=category_stats,
        monthly_stats=list(monthly_map.values()),
        spent_by_category=spent_by_category,
    )


def group_by_date(transactions: Iterable[Transaction]) -> Dict[date, List[Transaction]]:
    """Bucket transactions by day, keeping the order they arrive in"""
    groups: Dict[date, List[Transaction]] = {}
    for txn in transactions:
        groups.setdefault(txn.date, []).append(txn)
    return groups
