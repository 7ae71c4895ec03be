"""Mini README: Tests for dashboard and history read models.

Structure:
    * test_month_summary_matches_ledger_figures - headline numbers per month.
    * test_budget_progress_caps_and_handles_missing_budget - progress bar maths.
    * test_expense_breakdown_orders_categories - category totals, largest first.
    * test_history_filtering_and_grouping - type filter, search and day groups.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from budgetbadges.finance import FinanceLedger, categories_for
from budgetbadges.finance.categories import EXPENSE_CATEGORIES, INVESTMENT_CATEGORIES
from budgetbadges.finance.reports import (
    budget_progress,
    expense_breakdown,
    filter_history,
    group_by_day,
    month_summary,
    recent_transactions,
)

NOW = datetime(2024, 5, 20, 12, 0, tzinfo=timezone.utc)


def _populated_ledger() -> FinanceLedger:
    ledger = FinanceLedger(clock=lambda: NOW)
    ledger.set_budget("2024-05", 1000, 50)
    ledger.add_transaction("expense", 400, "Housing", "Rent", occurred_at=datetime(2024, 5, 1, 8, tzinfo=timezone.utc))
    ledger.add_transaction("expense", 120, "Food", "Weekly groceries", occurred_at=datetime(2024, 5, 3, 18, tzinfo=timezone.utc))
    ledger.add_transaction("expense", 180, "Food", "Dinner out", occurred_at=datetime(2024, 5, 3, 20, tzinfo=timezone.utc))
    ledger.add_transaction("investment", 300, "Stocks", "Index fund", occurred_at=datetime(2024, 5, 5, tzinfo=timezone.utc))
    ledger.add_transaction("expense", 60, "Transportation", "Train pass", occurred_at=datetime(2024, 4, 28, tzinfo=timezone.utc))
    return ledger


def test_month_summary_matches_ledger_figures() -> None:
    summary = month_summary(_populated_ledger())

    assert summary.month == "2024-05"
    assert summary.total_budget == pytest.approx(1000.0)
    assert summary.expenses == pytest.approx(700.0)
    assert summary.investments == pytest.approx(300.0)
    assert summary.stored_extra_savings == pytest.approx(50.0)
    assert summary.extra_savings == pytest.approx(350.0)
    assert summary.budget_progress == pytest.approx(70.0)
    assert not summary.near_limit
    assert summary.as_dict()["remaining_budget"] == pytest.approx(300.0)


def test_month_summary_without_budget() -> None:
    summary = month_summary(_populated_ledger(), "2024-04")

    assert summary.total_budget == 0.0
    assert summary.extra_savings == 0.0
    assert summary.expenses == pytest.approx(60.0)
    assert summary.budget_progress == 0.0


def test_budget_progress_caps_and_handles_missing_budget() -> None:
    assert budget_progress(0, 100) == 0.0
    assert budget_progress(200, 500) == 100.0
    assert budget_progress(200, 180) == pytest.approx(90.0)


def test_expense_breakdown_orders_categories() -> None:
    breakdown = expense_breakdown(_populated_ledger(), "2024-05")

    assert breakdown == [("Housing", pytest.approx(400.0)), ("Food", pytest.approx(300.0))]


def test_recent_transactions_limit() -> None:
    recent = recent_transactions(_populated_ledger(), limit=2)

    assert [transaction.description for transaction in recent] == ["Index fund", "Dinner out"]


def test_history_filtering_and_grouping() -> None:
    ledger = _populated_ledger()

    expenses = filter_history(ledger, "expense")
    assert len(expenses) == 4
    assert [t.description for t in filter_history(ledger, search="FOOD")] == ["Dinner out", "Weekly groceries"]
    assert [t.description for t in filter_history(ledger, "all", search="index")] == ["Index fund"]
    assert filter_history(ledger, "investment", search="rent") == []

    grouped = group_by_day(filter_history(ledger, "expense"))
    assert list(grouped) == [date(2024, 5, 3), date(2024, 5, 1), date(2024, 4, 28)]
    assert [t.description for t in grouped[date(2024, 5, 3)]] == ["Dinner out", "Weekly groceries"]


def test_category_catalogs() -> None:
    assert categories_for("expense") == EXPENSE_CATEGORIES
    assert categories_for("Investment") == INVESTMENT_CATEGORIES
    assert "Other" in EXPENSE_CATEGORIES and "Other" in INVESTMENT_CATEGORIES
