"""Mini README: Tests for storage backends and persisted record decoding.

Covers the JSON file backend, the buffered session that flushes on every
exit path, the backend registry, and the silent fallback to defaults when
stored collections are missing or corrupt.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from budgetbadges.finance import FinanceLedger
from budgetbadges.finance.records import dump_transactions, load_badges, load_budgets, load_transactions
from budgetbadges.storage import REGISTRY, InMemoryStorage, JsonFileStorage

NOW = datetime(2024, 5, 15, 9, 30, tzinfo=timezone.utc)


def test_json_storage_reads_back_written_values(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path)

    storage.write("budgets", [{"id": "b1", "month": "2024-05", "totalBudget": 10, "extraSavings": 0}])

    assert storage.read("budgets")[0]["totalBudget"] == 10
    assert storage.read("transactions") is None
    assert not list(tmp_path.glob("*.tmp"))


def test_json_storage_rejects_path_like_keys(tmp_path) -> None:
    with pytest.raises(ValueError):
        JsonFileStorage(tmp_path).read("../escape")


def test_unreadable_file_reads_as_missing(tmp_path) -> None:
    (tmp_path / "transactions.json").write_text("{not json", encoding="utf-8")

    assert JsonFileStorage(tmp_path).read("transactions") is None


def test_session_flushes_when_block_raises() -> None:
    """Writes buffered before an error are still flushed when the block exits."""

    storage = InMemoryStorage()

    with pytest.raises(RuntimeError):
        with storage.session() as handle:
            handle.set("budgets", [])
            assert storage.read("budgets") is None
            assert handle.get("budgets") == []
            raise RuntimeError("boom")

    assert storage.read("budgets") == []


def test_memory_storage_copies_values() -> None:
    storage = InMemoryStorage()
    payload = [{"id": "1"}]
    storage.write("badges", payload)

    payload[0]["id"] = "changed"
    storage.read("badges")[0]["id"] = "changed again"

    assert storage.read("badges") == [{"id": "1"}]


def test_registry_creates_configured_backends(tmp_path) -> None:
    assert list(REGISTRY.available_backends()) == ["json", "memory"]
    assert isinstance(REGISTRY.create("JSON", directory=tmp_path), JsonFileStorage)
    assert isinstance(REGISTRY.create("memory", directory=tmp_path), InMemoryStorage)
    with pytest.raises(KeyError):
        REGISTRY.create("sqlite")


def test_corrupt_collections_fall_back_to_defaults(tmp_path) -> None:
    """A damaged collection resets to its default without touching the others."""

    (tmp_path / "transactions.json").write_text("[{\"id\": 1", encoding="utf-8")
    (tmp_path / "budgets.json").write_text(
        json.dumps([{"id": "b1", "month": "2024-05", "totalBudget": 1000, "extraSavings": 50}]),
        encoding="utf-8",
    )
    (tmp_path / "badges.json").write_text(json.dumps({"unexpected": "shape"}), encoding="utf-8")

    ledger = FinanceLedger(JsonFileStorage(tmp_path))

    assert ledger.transactions == []
    assert ledger.get_budget_by_month("2024-05").total_budget == pytest.approx(1000.0)
    assert [badge.badge_id for badge in ledger.badges] == ["1", "2", "3", "4"]
    assert not any(badge.earned for badge in ledger.badges)


def test_invalid_rows_are_skipped_individually() -> None:
    """A damaged row is dropped while its valid neighbours still load."""

    raw = [
        {"id": "t1", "date": "2024-05-01T10:00:00.000Z", "type": "expense", "amount": 5, "category": "Food"},
        {"id": "t2", "date": "2024-05-01T10:00:00.000Z", "type": "expense", "amount": -5, "category": "Food"},
    ]

    assert [transaction.transaction_id for transaction in load_transactions(raw)] == ["t1"]
    assert load_transactions(None) == []
    assert load_budgets("nonsense") == []
    assert len(load_badges(None)) == 4


def test_stored_layout_uses_original_field_names() -> None:
    ledger = FinanceLedger(clock=lambda: NOW, id_factory=lambda: "fixed")
    ledger.add_transaction("expense", 12.5, "Food", "Lunch")
    ledger.set_budget("2024-05", 100, 5)

    snapshot = ledger.snapshot()

    assert snapshot["transactions"] == [
        {
            "id": "fixed",
            "date": "2024-05-15T09:30:00.000Z",
            "type": "expense",
            "amount": 12.5,
            "category": "Food",
            "description": "Lunch",
        }
    ]
    assert snapshot["budgets"] == [
        {"id": "fixed", "month": "2024-05", "totalBudget": 100.0, "extraSavings": 5.0}
    ]
    first_steps = snapshot["badges"][0]
    assert first_steps["earned"] is True
    assert first_steps["earnedDate"] == "2024-05-15T09:30:00.000Z"
    assert "progress" not in first_steps
    assert dump_transactions(ledger.transactions) == snapshot["transactions"]


def test_duplicate_stored_months_keep_latest() -> None:
    raw = [
        {"id": "b1", "month": "2024-05", "totalBudget": 100, "extraSavings": 0},
        {"id": "b2", "month": "2024-05", "totalBudget": 300, "extraSavings": 0},
    ]

    budgets = load_budgets(raw)

    assert len(budgets) == 1
    assert budgets[0].total_budget == 300


def test_invalid_budget_row_keeps_other_months() -> None:
    raw = [
        {"id": "b1", "month": "2024-04", "totalBudget": 500},
        {"id": "b2", "month": "April", "totalBudget": 700},
        {"id": "b3", "month": "2024-05", "totalBudget": -1},
        {"id": "b4", "month": "2024-06", "totalBudget": 900, "extraSavings": 20},
    ]

    budgets = load_budgets(raw)

    assert [budget.month for budget in budgets] == ["2024-04", "2024-06"]
    assert budgets[1].extra_savings == pytest.approx(20.0)
