"""Unit tests for period aggregation"""

from datetime import date
from conftest import make_category, make_transaction
from fintrack.domain.aggregation import (
    aggregate_period,
    calculate_percentage,
    group_by_date,
    savings_rate,
    summarize_totals,
    UNCATEGORIZED_COLOR,
    UNCATEGORIZED_ICON,
)

START = date(2026, 8, 1)
END = date(2026, 10, 31)


def test_aggregate_period_category_breakdown_with_uncategorized():
    """Expenses without a category land in 'Uncategorized'"""
    food = make_category()
    transactions = [
        make_transaction("expense", 50000, category=food),
        make_transaction("expense", 30000, category=None),
    ]

    summary = aggregate_period(START, END, transactions)

    assert [(s.name, s.amount) for s in summary.category_stats] == [("Food", 50000), ("Uncategorized", 30000)]
    assert summary.total_expense == 80000
    assert summary.total_income == 0

    uncategorized = summary.category_stats[1]
    assert uncategorized.color == UNCATEGORIZED_COLOR
    assert uncategorized.icon == UNCATEGORIZED_ICON
    assert summary.category_stats[0].color == "#ef4444"


def test_aggregate_period_blank_category_styling_falls_back():
    """A category stored without color or icon borrows the default styling"""
    bare = make_category(id="cat_bare", name="Misc", color="", icon="")

    summary = aggregate_period(START, END, [make_transaction("expense", 20000, category=bare)])

    [stat] = summary.category_stats
    assert stat.name == "Misc"
    assert stat.color == UNCATEGORIZED_COLOR
    assert stat.icon == UNCATEGORIZED_ICON
    assert summary.spent_by_category == {"cat_bare": 20000}


def test_aggregate_period_totals_partition_transactions():
    """Every transaction is counted once, in income or expense"""
    salary = make_category("cat_salary", "Salary", type="income")
    transactions = [
        make_transaction("income", 7500000, category=salary),
        make_transaction("expense", 120000),
        make_transaction("income", 250000),
        make_transaction("expense", 42000, category=make_category()),
    ]

    summary = aggregate_period(START, END, transactions)

    assert summary.total_income + summary.total_expense == sum(t.amount for t in transactions)
    assert summary.total_income == 7750000
    assert sum(s.amount for s in summary.category_stats) == summary.total_expense


def test_aggregate_period_income_not_in_category_stats():
    salary = make_category("cat_salary", "Salary", type="income")
    summary = aggregate_period(START, END, [make_transaction("income", 100, category=salary)])

    assert summary.category_stats == []
    assert summary.spent_by_category == {}


def test_aggregate_period_category_ranking_is_stable():
    """Equal totals keep the order categories were first seen"""
    transport = make_category("cat_transport", "Transportation")
    shopping = make_category("cat_shopping", "Shopping")
    bills = make_category("cat_bills", "Bills & Utilities")
    transactions = [
        make_transaction("expense", 20000, category=transport),
        make_transaction("expense", 20000, category=shopping),
        make_transaction("expense", 90000, category=bills),
    ]

    summary = aggregate_period(START, END, transactions)

    assert [s.name for s in summary.category_stats] == ["Bills & Utilities", "Transportation", "Shopping"]


def test_aggregate_period_category_share_percentages():
    food = make_category()
    transactions = [
        make_transaction("expense", 75000, category=food),
        make_transaction("expense", 25000),
    ]

    summary = aggregate_period(START, END, transactions)

    assert [s.percentage for s in summary.category_stats] == [75, 25]


def test_aggregate_period_monthly_stats_keep_encounter_order():
    """Months appear in the order first seen, not calendar order"""
    transactions = [
        make_transaction("expense", 1000, day=date(2026, 10, 3)),
        make_transaction("income", 5000, day=date(2026, 8, 25)),
        make_transaction("expense", 2000, day=date(2026, 9, 14)),
        make_transaction("income", 3000, day=date(2026, 10, 1)),
    ]

    summary = aggregate_period(START, END, transactions)

    assert [m.month for m in summary.monthly_stats] == ["Oct 2026", "Aug 2026", "Sep 2026"]
    october = summary.monthly_stats[0]
    assert (october.income, october.expense) == (3000, 1000)
    assert (summary.monthly_stats[1].income, summary.monthly_stats[1].expense) == (5000, 0)


def test_aggregate_period_spent_by_category_id():
    """Budget spend is keyed by category id, uncategorized expenses excluded"""
    food = make_category()
    also_food = make_category("cat_food_2", "Food")
    transactions = [
        make_transaction("expense", 10000, category=food),
        make_transaction("expense", 2500, category=food),
        make_transaction("expense", 4000, category=also_food),
        make_transaction("expense", 700),
    ]

    summary = aggregate_period(START, END, transactions)

    assert summary.spent_by_category == {"cat_food": 12500, "cat_food_2": 4000}
    # Same name merges in the breakdown
    assert [(s.name, s.amount) for s in summary.category_stats] == [("Food", 16500), ("Uncategorized", 700)]


def test_aggregate_period_empty():
    summary = aggregate_period(START, END, [])

    assert summary.total_income == 0
    assert summary.total_expense == 0
    assert summary.category_stats == []
    assert summary.monthly_stats == []
    assert summary.start == START
    assert summary.end == END


def test_summarize_totals():
    transactions = [
        make_transaction("income", 300),
        make_transaction("expense", 120),
        make_transaction("expense", 80),
    ]
    assert summarize_totals(transactions) == (300, 200)
    assert summarize_totals([]) == (0, 0)


def test_calculate_percentage_rounding():
    assert calculate_percentage(1, 3) == 33
    assert calculate_percentage(2, 3) == 67
    assert calculate_percentage(1, 8) == 13  # 12.5 rounds up
    assert calculate_percentage(0, 500) == 0
    assert calculate_percentage(500, 0) == 0


def test_savings_rate():
    assert savings_rate(1000000, 750000) == 25
    assert savings_rate(100000, 150000) == -50
    assert savings_rate(0, 50000) == 0


def test_group_by_date_keeps_arrival_order():
    newest = make_transaction("expense", 1, day=date(2026, 10, 5), id="a")
    same_day = make_transaction("income", 2, day=date(2026, 10, 5), id="b")
    older = make_transaction("expense", 3, day=date(2026, 10, 2), id="c")

    groups = group_by_date([newest, same_day, older])

    assert list(groups) == [date(2026, 10, 5), date(2026, 10, 2)]
    assert [t.id for t in groups[date(2026, 10, 5)]] == ["a", "b"]
