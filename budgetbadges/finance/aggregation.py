"""Mini README: Pure aggregation helpers shared by the ledger and badges.

Structure:
    * total_by_type - sum of amounts for one transaction type, optionally
      restricted to a month (or year) prefix.
    * extra_savings_for - money left over in a budgeted month plus the
      manually tracked savings.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .models import Budget, Transaction, TransactionType


def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
    period: Optional[str] = None,
) -> float:
    """Sum the amounts of ``transaction_type`` entries dated within ``period``."""

    return sum(
        (
            transaction.amount
            for transaction in transactions
            if transaction.transaction_type is transaction_type
            and (not period or transaction.matches_period(period))
        ),
        0.0,
    )


def extra_savings_for(budget: Optional[Budget], expenses: float) -> float:
    """Return unspent budget plus stored savings, or only the stored savings when over budget."""

    if budget is None:
        return 0.0
    if budget.total_budget >= expenses:
        return budget.total_budget - expenses + budget.extra_savings
    return budget.extra_savings
