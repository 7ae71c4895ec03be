"""Mini README: Input validation for ledger mutations.

Structure:
    * LedgerValidationError - rejected input with a short title and a reason.
    * validate_* helpers - coerce raw form values or raise the error above.

The ledger converts ``LedgerValidationError`` into rejected
``OperationResult`` objects, so a bad form submission never raises past the
ledger and never touches stored state.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .models import TransactionType

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class LedgerValidationError(ValueError):
    """Raised when a mutation receives input the ledger refuses to store."""

    def __init__(self, title: str, reason: str) -> None:
        super().__init__(f"{title}: {reason}")
        self.title = title
        self.reason = reason


def _as_number(value: Any, title: str, reason: str) -> float:
    if isinstance(value, bool):
        raise LedgerValidationError(title, reason)
    try:
        number = float(value)
    except (TypeError, ValueError) as error:
        raise LedgerValidationError(title, reason) from error
    if not math.isfinite(number):
        raise LedgerValidationError(title, reason)
    return number


def validate_transaction_type(value: Any) -> TransactionType:
    try:
        return TransactionType.from_str(value)
    except ValueError as error:
        raise LedgerValidationError(
            "Invalid type", "Entries must be either an expense or an investment."
        ) from error


def validate_amount(value: Any) -> float:
    """Return ``value`` as a positive float."""

    amount = _as_number(value, "Invalid amount", "Please enter an amount greater than zero.")
    if amount <= 0:
        raise LedgerValidationError("Invalid amount", "Please enter an amount greater than zero.")
    return amount


def validate_category(value: Any) -> str:
    category = str(value).strip() if value is not None else ""
    if not category:
        raise LedgerValidationError("Missing category", "Please select a category.")
    return category


def validate_month(value: Any) -> str:
    month = str(value).strip() if value is not None else ""
    if not MONTH_PATTERN.match(month):
        raise LedgerValidationError("Invalid month", "Months must use the YYYY-MM format.")
    return month


def validate_total_budget(value: Any) -> float:
    total = _as_number(value, "Invalid budget", "Budget amount must be a number.")
    if total < 0:
        raise LedgerValidationError("Invalid budget", "Budget amount cannot be negative.")
    return total


def normalise_extra_savings(value: Any) -> float:
    """Return extra savings with negative values clamped to zero."""

    if value is None:
        return 0.0
    savings = _as_number(value, "Invalid savings", "Extra savings must be a number.")
    return savings if savings >= 0 else 0.0
