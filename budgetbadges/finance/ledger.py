"""Mini README: Persistent finance ledger for expenses, investments and budgets.

Structure:
    * OperationResult - accepted or rejected outcome handed back to the UI.
    * FinanceLedger - owns transactions, budgets and badges, restores them
      from a key-value storage backend and saves after each mutation.

Mutations validate their input first. Rejected input produces a rejected
``OperationResult`` carrying a human-readable reason and leaves every
collection untouched. Accepted input replaces the affected collection in a
single assignment, recomputes badges from that new state and then writes all
three collections through one storage session. If that write fails the
previous collections are restored before the error propagates. Queries are
pure reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from .aggregation import extra_savings_for, total_by_type
from .badges import Badge, default_badges, evaluate_badges
from .models import Budget, Transaction, TransactionType, format_month, month_key, to_millis
from .records import (
    BADGES_KEY,
    BUDGETS_KEY,
    COLLECTION_KEYS,
    TRANSACTIONS_KEY,
    dump_badges,
    dump_budgets,
    dump_transactions,
    load_badges,
    load_budgets,
    load_transactions,
)
from .validation import (
    LedgerValidationError,
    normalise_extra_savings,
    validate_amount,
    validate_category,
    validate_month,
    validate_total_budget,
    validate_transaction_type,
)
from ..logging_utils import get_logger
from ..storage import InMemoryStorage, KeyValueStorage, StorageError

LOGGER = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _clean_description(description: Any) -> str:
    return str(description).strip() if description is not None else ""


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a ledger mutation as presented to the caller."""

    accepted: bool
    title: str
    message: str
    value: Optional[Any] = None

    @classmethod
    def rejected(cls, error: LedgerValidationError) -> "OperationResult":
        return cls(accepted=False, title=error.title, message=error.reason)

    def __bool__(self) -> bool:
        return self.accepted


class FinanceLedger:
    """Manage transactions, monthly budgets and achievement badges."""

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._storage = storage if storage is not None else InMemoryStorage()
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_id
        self._transactions: List[Transaction] = []
        self._budgets: List[Budget] = []
        self._badges: List[Badge] = default_badges()
        self.load()
        LOGGER.debug(
            "Finance ledger initialised with %s transactions, %s budgets",
            len(self._transactions),
            len(self._budgets),
        )

    # ------------------------------------------------------------------ storage

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    def load(self) -> None:
        """Restore all collections from storage, using defaults where data is unusable."""

        self._transactions = load_transactions(self._storage.read(TRANSACTIONS_KEY))
        self._budgets = load_budgets(self._storage.read(BUDGETS_KEY))
        self._badges = load_badges(self._storage.read(BADGES_KEY))

    def save(self) -> None:
        """Write the three collections through a single storage session."""

        with self._storage.session() as handle:
            handle.set(TRANSACTIONS_KEY, dump_transactions(self._transactions))
            handle.set(BUDGETS_KEY, dump_budgets(self._budgets))
            handle.set(BADGES_KEY, dump_badges(self._badges))

    # ---------------------------------------------------------------- mutations

    def add_transaction(
        self,
        transaction_type: Any,
        amount: Any,
        category: Any,
        description: Any = None,
        *,
        occurred_at: Optional[datetime] = None,
    ) -> OperationResult:
        """Record an expense or investment.

        Blank descriptions default to ``"<type> - <category>"`` and the
        timestamp defaults to the ledger clock.
        """

        try:
            kind = validate_transaction_type(transaction_type)
            value = validate_amount(amount)
            label = validate_category(category)
        except LedgerValidationError as error:
            return self._reject("add_transaction", error)

        transaction = Transaction(
            transaction_id=self._id_factory(),
            occurred_at=to_millis(occurred_at if occurred_at is not None else self._clock()),
            transaction_type=kind,
            amount=value,
            category=label,
            description=_clean_description(description) or f"{kind.value} - {label}",
        )
        self._commit(transactions=[*self._transactions, transaction])
        LOGGER.info(
            "Recorded %s %s of %.2f in %s",
            kind.value,
            transaction.transaction_id,
            value,
            label,
        )
        return OperationResult(
            accepted=True,
            title="Entry added",
            message=f"Your {kind.value} has been recorded.",
            value=transaction,
        )

    def set_budget(self, month: Any, total_budget: Any, extra_savings: Any = 0.0) -> OperationResult:
        """Create or overwrite the budget of ``month``."""

        try:
            key = validate_month(month)
            total = validate_total_budget(total_budget)
            savings = normalise_extra_savings(extra_savings)
        except LedgerValidationError as error:
            return self._reject("set_budget", error)

        budgets = list(self._budgets)
        for index, existing in enumerate(budgets):
            if existing.month == key:
                budget = replace(existing, total_budget=total, extra_savings=savings)
                budgets[index] = budget
                LOGGER.info("Updated budget %s for %s", budget.budget_id, key)
                break
        else:
            budget = Budget(
                budget_id=self._id_factory(),
                month=key,
                total_budget=total,
                extra_savings=savings,
            )
            budgets.append(budget)
            LOGGER.info("Created budget %s for %s", budget.budget_id, key)

        self._commit(budgets=budgets)
        return OperationResult(
            accepted=True,
            title="Budget updated",
            message=f"Your monthly budget has been set for {format_month(key)}.",
            value=budget,
        )

    def update_badges(self) -> List[Badge]:
        """Recompute badges from the current collections and persist them."""

        self._commit()
        return self.badges

    def clear_all_data(self) -> None:
        """Forget every transaction and budget and reset all badges."""

        self._storage.clear(COLLECTION_KEYS)
        self._transactions = []
        self._budgets = []
        self._badges = default_badges()
        LOGGER.info("Cleared all ledger data from %s storage", self._storage.backend_name)

    def _commit(
        self,
        *,
        transactions: Optional[List[Transaction]] = None,
        budgets: Optional[List[Budget]] = None,
    ) -> None:
        """Swap in new collections, refresh badges and save, or roll back if saving fails."""

        previous = (self._transactions, self._budgets, self._badges)
        if transactions is not None:
            self._transactions = transactions
        if budgets is not None:
            self._budgets = budgets
        self._badges = evaluate_badges(
            self._badges, self._transactions, self._budgets, now=to_millis(self._clock())
        )
        try:
            self.save()
        except StorageError:
            self._transactions, self._budgets, self._badges = previous
            LOGGER.error(
                "Could not save ledger to %s storage; changes discarded",
                self._storage.backend_name,
            )
            raise

    @staticmethod
    def _reject(operation: str, error: LedgerValidationError) -> OperationResult:
        LOGGER.warning("Rejected %s: %s", operation, error)
        return OperationResult.rejected(error)

    # ------------------------------------------------------------------ queries

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def budgets(self) -> List[Budget]:
        return list(self._budgets)

    @property
    def badges(self) -> List[Badge]:
        return [replace(badge) for badge in self._badges]

    def list_transactions(self) -> List[Transaction]:
        """Return transactions ordered by most recent first."""

        return sorted(self._transactions, key=lambda transaction: transaction.occurred_at, reverse=True)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise KeyError(f"Transaction {transaction_id} not found")

    def total_expenses(self, month: Optional[str] = None) -> float:
        return total_by_type(self._transactions, TransactionType.EXPENSE, month)

    def total_investments(self, month: Optional[str] = None) -> float:
        return total_by_type(self._transactions, TransactionType.INVESTMENT, month)

    def get_budget_by_month(self, month: str) -> Optional[Budget]:
        for budget in self._budgets:
            if budget.month == month:
                return budget
        return None

    def extra_savings(self, month: str) -> float:
        """Unspent budget plus stored savings for ``month``; 0 without a budget."""

        return extra_savings_for(self.get_budget_by_month(month), self.total_expenses(month))

    def known_months(self) -> List[str]:
        """Months with a budget or at least one transaction, newest first."""

        months = {budget.month for budget in self._budgets}
        months.update(transaction.month for transaction in self._transactions)
        return sorted(months, reverse=True)

    def current_month(self) -> str:
        return month_key(self._clock())

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Export the persisted layout of all collections."""

        return {
            TRANSACTIONS_KEY: dump_transactions(self._transactions),
            BUDGETS_KEY: dump_budgets(self._budgets),
            BADGES_KEY: dump_badges(self._badges),
        }
