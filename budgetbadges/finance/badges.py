"""Mini README: Achievement badges derived from ledger contents.

Structure:
    * Badge - catalog entry with earned flag, earned timestamp and progress.
    * default_badges - fresh copy of the fixed four-entry catalog.
    * merge_with_catalog - repairs a stored badge list against the catalog.
    * evaluate_badges - recomputes earned/progress state for all badges.

Badges are never created or removed by the user; evaluation only flips the
``earned`` flag on and updates progress for the savings badge. The rules read
the transaction and budget collections as sets, so evaluating the same state
twice, or the same entries in a different order, yields the same badges.
An earned badge keeps its first ``earned_at`` forever.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .aggregation import extra_savings_for, total_by_type
from .models import Budget, Transaction, TransactionType
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

FIRST_STEPS = "1"
INVESTOR = "2"
BUDGET_MASTER = "3"
SAVER = "4"

SAVER_TARGET_MONTHS = 3


@dataclass(slots=True)
class Badge:
    """Gamified achievement flag with an optional progress indicator."""

    badge_id: str
    name: str
    description: str
    icon: str
    earned: bool = False
    earned_at: Optional[datetime] = None
    progress: Optional[float] = None


_CATALOG: Tuple[Badge, ...] = (
    Badge(FIRST_STEPS, "First Steps", "Track your first expense", "badge"),
    Badge(INVESTOR, "Investor", "Make your first investment", "badge-percent"),
    Badge(BUDGET_MASTER, "Budget Master", "Stay under budget for a month", "badge-check"),
    Badge(
        SAVER,
        "Saver",
        "Save extra money for 3 consecutive months",
        "dollar-sign",
        progress=0.0,
    ),
)


def default_badges() -> List[Badge]:
    """Return a fresh, unearned copy of the badge catalog."""

    return [replace(badge) for badge in _CATALOG]


def merge_with_catalog(stored: Iterable[Badge]) -> List[Badge]:
    """Align stored badges with the catalog.

    Catalog metadata (name, description, icon) always wins; earned state and
    progress come from the stored entry. Missing entries are restored and
    unknown ids are dropped.
    """

    by_id: Dict[str, Badge] = {badge.badge_id: badge for badge in stored}
    merged: List[Badge] = []
    for template in _CATALOG:
        existing = by_id.get(template.badge_id)
        if existing is None:
            merged.append(replace(template))
            continue
        merged.append(
            replace(
                template,
                earned=existing.earned,
                earned_at=existing.earned_at,
                progress=existing.progress if existing.progress is not None else template.progress,
            )
        )
    return merged


def _has_expense(transactions: Sequence[Transaction], budgets: Sequence[Budget]) -> Tuple[bool, None]:
    return any(t.transaction_type is TransactionType.EXPENSE for t in transactions), None


def _has_investment(transactions: Sequence[Transaction], budgets: Sequence[Budget]) -> Tuple[bool, None]:
    return any(t.transaction_type is TransactionType.INVESTMENT for t in transactions), None


def _stayed_under_budget(transactions: Sequence[Transaction], budgets: Sequence[Budget]) -> Tuple[bool, None]:
    return (
        any(
            budget.total_budget >= total_by_type(transactions, TransactionType.EXPENSE, budget.month)
            for budget in budgets
        ),
        None,
    )


def _saved_for_three_months(
    transactions: Sequence[Transaction], budgets: Sequence[Budget]
) -> Tuple[bool, float]:
    months_with_savings = {
        budget.month
        for budget in budgets
        if extra_savings_for(
            budget, total_by_type(transactions, TransactionType.EXPENSE, budget.month)
        )
        > 0
    }
    count = len(months_with_savings)
    progress = min(count / SAVER_TARGET_MONTHS * 100.0, 100.0)
    return count >= SAVER_TARGET_MONTHS, progress


Rule = Callable[[Sequence[Transaction], Sequence[Budget]], Tuple[bool, Optional[float]]]

RULES: Dict[str, Rule] = {
    FIRST_STEPS: _has_expense,
    INVESTOR: _has_investment,
    BUDGET_MASTER: _stayed_under_budget,
    SAVER: _saved_for_three_months,
}


def evaluate_badges(
    badges: Iterable[Badge],
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    *,
    now: datetime,
) -> List[Badge]:
    """Return a new badge list reflecting the given ledger state."""

    transaction_list = list(transactions)
    budget_list = list(budgets)
    evaluated: List[Badge] = []
    for badge in merge_with_catalog(badges):
        rule = RULES[badge.badge_id]
        achieved, progress = rule(transaction_list, budget_list)
        if badge.earned:
            evaluated.append(replace(badge, progress=100.0 if badge.progress is not None else None))
            continue
        if achieved:
            LOGGER.info("Badge '%s' earned", badge.name)
            evaluated.append(
                replace(
                    badge,
                    earned=True,
                    earned_at=now,
                    progress=100.0 if progress is not None else None,
                )
            )
            continue
        evaluated.append(replace(badge, progress=progress if progress is not None else badge.progress))
    return evaluated
