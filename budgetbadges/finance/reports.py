"""Mini README: Read models for dashboard and history screens.

Structure:
    * MonthSummary - budget, spend, investments and savings for one month.
    * month_summary / budget_progress - dashboard headline figures.
    * expense_breakdown - expense totals per category, largest first.
    * recent_transactions - newest entries for the dashboard list.
    * filter_history / group_by_day - history view filtering and grouping.

Every helper only reads from a ``FinanceLedger``; nothing here mutates state.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .ledger import FinanceLedger
from .models import Transaction, TransactionType, as_utc

NEAR_LIMIT_PERCENT = 90.0


@dataclass(frozen=True, slots=True)
class MonthSummary:
    """Headline figures for a single month."""

    month: str
    total_budget: float
    stored_extra_savings: float
    extra_savings: float
    expenses: float
    investments: float
    budget_progress: float

    @property
    def near_limit(self) -> bool:
        return self.budget_progress >= NEAR_LIMIT_PERCENT

    @property
    def remaining_budget(self) -> float:
        return self.total_budget - self.expenses

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["near_limit"] = self.near_limit
        payload["remaining_budget"] = self.remaining_budget
        return payload


def budget_progress(total_budget: float, expenses: float) -> float:
    """Percentage of the budget spent, capped at 100 and 0 without a budget."""

    if total_budget <= 0:
        return 0.0
    return min(expenses / total_budget * 100.0, 100.0)


def month_summary(ledger: FinanceLedger, month: Optional[str] = None) -> MonthSummary:
    """Aggregate the dashboard figures for ``month`` (defaults to the current month)."""

    month = month or ledger.current_month()
    budget = ledger.get_budget_by_month(month)
    total_budget = budget.total_budget if budget else 0.0
    expenses = ledger.total_expenses(month)
    return MonthSummary(
        month=month,
        total_budget=total_budget,
        stored_extra_savings=budget.extra_savings if budget else 0.0,
        extra_savings=ledger.extra_savings(month),
        expenses=expenses,
        investments=ledger.total_investments(month),
        budget_progress=budget_progress(total_budget, expenses),
    )


def expense_breakdown(ledger: FinanceLedger, month: Optional[str] = None) -> List[Tuple[str, float]]:
    """Return ``(category, total)`` pairs for expenses, largest total first."""

    month = month or ledger.current_month()
    totals: Dict[str, float] = defaultdict(float)
    for transaction in ledger.transactions:
        if transaction.transaction_type is TransactionType.EXPENSE and transaction.matches_period(month):
            totals[transaction.category] += transaction.amount
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def recent_transactions(ledger: FinanceLedger, limit: int = 5) -> List[Transaction]:
    return ledger.list_transactions()[: max(limit, 0)]


def filter_history(
    ledger: FinanceLedger,
    transaction_type: Optional[TransactionType | str] = None,
    search: str = "",
) -> List[Transaction]:
    """Filter by type and a case-insensitive search over description and category."""

    kind = TransactionType.from_str(transaction_type) if transaction_type not in (None, "", "all") else None
    needle = search.strip().lower()
    return [
        transaction
        for transaction in ledger.list_transactions()
        if (kind is None or transaction.transaction_type is kind)
        and (
            not needle
            or needle in transaction.description.lower()
            or needle in transaction.category.lower()
        )
    ]


def group_by_day(transactions: Iterable[Transaction]) -> Dict[date, List[Transaction]]:
    """Group transactions by UTC calendar day, keeping their incoming order."""

    grouped: Dict[date, List[Transaction]] = {}
    for transaction in transactions:
        grouped.setdefault(as_utc(transaction.occurred_at).date(), []).append(transaction)
    return grouped
