"""Mini README: Core package initializer for budgetbadges.

budgetbadges records daily expenses and investments, tracks monthly budgets
and awards achievement badges, keeping everything in local storage. Import
``create_ledger`` to obtain a ledger wired to the configured storage.
"""

from .application import create_ledger
from .logging_utils import get_logger

__all__ = ["create_ledger", "get_logger"]
