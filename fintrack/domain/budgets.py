"""Budget utilization evaluation"""

from typing import Dict, Iterable, List, Optional
from fintrack.domain.models import BudgetItem, Category
from fintrack.domain.aggregation import calculate_percentage

STATUS_NORMAL = "normal"
STATUS_WARNING = "warning"
STATUS_OVER = "over"

WARNING_THRESHOLD = 80
OVER_THRESHOLD = 100


def budget_percentage(spent: int, budget_limit: Optional[int]) -> int:
    """Rounded spent / budget_limit * 100; a zero or missing limit gives 0"""
    if not budget_limit:
        return 0
    return calculate_percentage(spent, budget_limit)


def budget_status(percentage: int) -> str:
    """
    Classify utilization into a band.

    Bands are closed on the lower bound:
    - [100, inf): over
    - [80, 100):  warning
    - below 80:   normal
    """
    if percentage >= OVER_THRESHOLD:
        return STATUS_OVER
    elif percentage >= WARNING_THRESHOLD:
        return STATUS_WARNING
    else:
        return STATUS_NORMAL


def evaluate_budgets(categories: Iterable[Category], spent_by_category: Dict[str, int]) -> List[BudgetItem]:
    """
    Build one BudgetItem per budget-bearing category.

    Spent amounts are looked up by category id (missing means nothing spent).
    Items are ordered by percentage descending; ties keep input order.
    """
    items = []
    for category in categories:
        spent = spent_by_category.get(category.id, 0)
        percentage = budget_percentage(spent, category.budget_limit)
        items.append(
            BudgetItem(
                category=category,
                spent=spent,
                percentage=percentage,
                status=budget_status(percentage),
            )
        )

    return sorted(items, key=lambda item: item.percentage, reverse=True)
