"""Mini README: Personal finance tracking for budgetbadges.

This package holds the ledger store, the badge evaluator and the read models
built on top of them. ``models`` defines the value objects, ``ledger`` owns
and persists state, ``badges`` derives achievements, and ``reports`` shapes
figures for dashboards and history views.
"""

from .badges import Badge, default_badges, evaluate_badges
from .categories import EXPENSE_CATEGORIES, INVESTMENT_CATEGORIES, categories_for
from .ledger import FinanceLedger, OperationResult
from .models import Budget, Transaction, TransactionType, month_key
from .validation import LedgerValidationError

__all__ = [
    "Badge",
    "Budget",
    "EXPENSE_CATEGORIES",
    "FinanceLedger",
    "INVESTMENT_CATEGORIES",
    "LedgerValidationError",
    "OperationResult",
    "Transaction",
    "TransactionType",
    "categories_for",
    "default_badges",
    "evaluate_badges",
    "month_key",
]
