"""Mini README: Suggested categories for daily entries.

Categories are free text in the ledger; these catalogs only feed pickers in
the presentation layer.
"""

from __future__ import annotations

from typing import Tuple

from .models import TransactionType

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Housing",
    "Transportation",
    "Food",
    "Utilities",
    "Insurance",
    "Healthcare",
    "Entertainment",
    "Personal",
    "Other",
)

INVESTMENT_CATEGORIES: Tuple[str, ...] = (
    "Stocks",
    "Bonds",
    "Retirement",
    "Real Estate",
    "Crypto",
    "Savings",
    "Business",
    "Education",
    "Other",
)


def categories_for(transaction_type: TransactionType | str) -> Tuple[str, ...]:
    """Return the suggested categories for an expense or investment."""

    kind = TransactionType.from_str(transaction_type)
    if kind is TransactionType.INVESTMENT:
        return INVESTMENT_CATEGORIES
    return EXPENSE_CATEGORIES
