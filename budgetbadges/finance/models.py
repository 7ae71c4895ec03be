"""Mini README: Core value objects for the personal finance ledger.

Structure:
    * TransactionType - enum of expense versus investment entries.
    * Transaction - immutable record of a single expense or investment.
    * Budget - month-scoped spending ceiling with manually tracked savings.
    * month_key / as_utc / to_millis / format_month - timestamp and month helpers.

Timestamps are stored as timezone-aware UTC datetimes. Month filtering uses
the ISO representation, so a prefix such as ``"2024-05"`` selects a month and
``"2024"`` selects a whole year.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class TransactionType(str, Enum):
    """Enumerate the supported transaction categories."""

    EXPENSE = "expense"
    INVESTMENT = "investment"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


def as_utc(moment: datetime) -> datetime:
    """Return ``moment`` as an aware UTC datetime, treating naive values as UTC."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def to_millis(moment: datetime) -> datetime:
    """Return ``moment`` in UTC truncated to the millisecond precision that is stored."""

    moment = as_utc(moment)
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def month_key(moment: datetime) -> str:
    """Return the ``YYYY-MM`` key of ``moment`` in UTC."""

    return as_utc(moment).strftime("%Y-%m")


def format_month(month: str) -> str:
    """Render a month key as ``May 2024``."""

    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single recorded expense or investment event."""

    transaction_id: str
    occurred_at: datetime
    transaction_type: TransactionType
    amount: float
    category: str
    description: str

    @property
    def month(self) -> str:
        return month_key(self.occurred_at)

    def timestamp(self) -> str:
        """ISO timestamp in UTC with a ``Z`` suffix, used for prefix filtering."""

        return as_utc(self.occurred_at).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def matches_period(self, prefix: str) -> bool:
        return self.timestamp().startswith(prefix)


@dataclass(frozen=True, slots=True)
class Budget:
    """Spending ceiling and extra savings recorded for one month."""

    budget_id: str
    month: str
    total_budget: float
    extra_savings: float = 0.0
