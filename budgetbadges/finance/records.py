"""Mini README: Persisted record schemas for the ledger collections.

Structure:
    * TransactionRecord / BudgetRecord / BadgeRecord - pydantic models mirroring
      the stored JSON layout (camelCase keys such as ``totalBudget``).
    * load_transactions / load_budgets / load_badges - decode raw storage
      values, falling back to defaults when data is missing or invalid.
    * dump_transactions / dump_budgets / dump_badges - encode domain objects.

Each collection is decoded on its own. Rows that fail validation are skipped
with a warning so one damaged entry does not cost the rest of the collection.
A value that is not a list at all is replaced by the collection default
(empty list, or the badge catalog).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer

from .badges import Badge, default_badges, merge_with_catalog
from .models import Budget, Transaction, TransactionType, as_utc
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

TRANSACTIONS_KEY = "transactions"
BUDGETS_KEY = "budgets"
BADGES_KEY = "badges"
COLLECTION_KEYS = (TRANSACTIONS_KEY, BUDGETS_KEY, BADGES_KEY)

RecordT = TypeVar("RecordT", bound="_Record")


def _iso(moment: datetime) -> str:
    return as_utc(moment).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TransactionRecord(_Record):
    id: str = Field(min_length=1)
    date: datetime
    type: TransactionType
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: str
    description: str = ""

    @field_serializer("date")
    def _serialise_date(self, value: datetime) -> str:
        return _iso(value)

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionRecord":
        return cls(
            id=transaction.transaction_id,
            date=transaction.occurred_at,
            type=transaction.transaction_type,
            amount=transaction.amount,
            category=transaction.category,
            description=transaction.description,
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.id,
            occurred_at=as_utc(self.date),
            transaction_type=self.type,
            amount=self.amount,
            category=self.category,
            description=self.description,
        )


class BudgetRecord(_Record):
    id: str = Field(min_length=1)
    month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    total_budget: float = Field(alias="totalBudget", ge=0, allow_inf_nan=False)
    extra_savings: float = Field(0.0, alias="extraSavings", ge=0, allow_inf_nan=False)

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetRecord":
        return cls(
            id=budget.budget_id,
            month=budget.month,
            total_budget=budget.total_budget,
            extra_savings=budget.extra_savings,
        )

    def to_domain(self) -> Budget:
        return Budget(
            budget_id=self.id,
            month=self.month,
            total_budget=self.total_budget,
            extra_savings=self.extra_savings,
        )


class BadgeRecord(_Record):
    id: str
    name: str = ""
    description: str = ""
    icon: str = ""
    earned: bool = False
    earned_date: Optional[datetime] = Field(None, alias="earnedDate")
    progress: Optional[float] = Field(None, ge=0, le=100)

    @field_serializer("earned_date")
    def _serialise_earned_date(self, value: Optional[datetime]) -> Optional[str]:
        return _iso(value) if value is not None else None

    @classmethod
    def from_domain(cls, badge: Badge) -> "BadgeRecord":
        return cls(
            id=badge.badge_id,
            name=badge.name,
            description=badge.description,
            icon=badge.icon,
            earned=badge.earned,
            earned_date=badge.earned_at,
            progress=badge.progress,
        )

    def to_domain(self) -> Badge:
        return Badge(
            badge_id=self.id,
            name=self.name,
            description=self.description,
            icon=self.icon,
            earned=self.earned,
            earned_at=as_utc(self.earned_date) if self.earned_date is not None else None,
            progress=self.progress,
        )


def _decode(raw: Any, model: Type[RecordT], label: str) -> Optional[List[RecordT]]:
    """Validate each stored row, or return ``None`` when the value is absent or not a list."""

    if raw is None:
        return None
    if not isinstance(raw, list):
        LOGGER.warning("Stored %s are not a list; using defaults", label)
        return None
    records: List[RecordT] = []
    for index, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as error:
            LOGGER.warning(
                "Skipping stored %s entry %s (%s error(s))", label, index, error.error_count()
            )
    return records


def load_transactions(raw: Any) -> List[Transaction]:
    records = _decode(raw, TransactionRecord, TRANSACTIONS_KEY)
    if records is None:
        return []
    return [record.to_domain() for record in records]


def load_budgets(raw: Any) -> List[Budget]:
    """Decode budgets keeping a single entry per month (the last one stored)."""

    records = _decode(raw, BudgetRecord, BUDGETS_KEY)
    if records is None:
        return []
    by_month: Dict[str, Budget] = {}
    for record in records:
        if record.month in by_month:
            LOGGER.warning("Duplicate stored budget for %s; keeping the latest", record.month)
        by_month[record.month] = record.to_domain()
    return list(by_month.values())


def load_badges(raw: Any) -> List[Badge]:
    records = _decode(raw, BadgeRecord, BADGES_KEY)
    if records is None:
        return default_badges()
    return merge_with_catalog(record.to_domain() for record in records)


def _dump(items: List[Any], factory: Callable[[Any], BaseModel]) -> List[Dict[str, Any]]:
    return [
        factory(item).model_dump(mode="json", by_alias=True, exclude_none=True)
        for item in items
    ]


def dump_transactions(transactions: List[Transaction]) -> List[Dict[str, Any]]:
    return _dump(transactions, TransactionRecord.from_domain)


def dump_budgets(budgets: List[Budget]) -> List[Dict[str, Any]]:
    return _dump(budgets, BudgetRecord.from_domain)


def dump_badges(badges: List[Badge]) -> List[Dict[str, Any]]:
    return _dump(badges, BadgeRecord.from_domain)
