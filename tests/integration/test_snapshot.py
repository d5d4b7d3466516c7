"""
Integration tests for loading JSON snapshots into a store.
"""

import importlib.util
import json
from datetime import date
from pathlib import Path

import pytest

from finance_tracker_mcp.core.exceptions import DecodeError, SnapshotNotFoundError
from finance_tracker_mcp.core.snapshot import load_snapshot, read_snapshot
from finance_tracker_mcp.server import FinanceTrackerServer


@pytest.fixture
def write_snapshot(tmp_path):
    """Write data as a snapshot file and return its path."""

    def _write(data, name="snapshot.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


SNAPSHOT = {
    "categories": [
        {"id": "food", "name": "Food", "color": "#f97316", "icon": "fas fa-utensils"},
        {
            "ref": "pay",
            "name": "Salary",
            "color": "#059669",
            "icon": "fas fa-money-bill",
            "type": "income",
        },
    ],
    "transactions": [
        {
            "description": "Lunch",
            "amount": 12.5,
            "category_id": "food",
            "date": "2026-10-02",
            "type": "expense",
        },
        {
            "id": "old-id",
            "description": "Pay",
            "amount": 2500,
            "category_id": "pay",
            "date": "2026-10-01T09:00:00",
            "type": "income",
        },
        {
            "description": "Taxi",
            "amount": 30,
            "category_id": "elsewhere",
            "date": "2026-10-05",
            "type": "expense",
        },
    ],
    "budgets": [{"category_id": "food", "amount": 300, "month": 10, "year": 2026}],
}


@pytest.mark.integration
def test_load_snapshot_counts(storage, write_snapshot):
    counts = load_snapshot(write_snapshot(SNAPSHOT), storage)

    assert counts == {"categories": 2, "transactions": 3, "budgets": 1}
    assert len(storage.list_categories()) == 2
    assert len(storage.list_transactions()) == 3
    assert len(storage.list_budgets()) == 1


@pytest.mark.integration
def test_load_snapshot_remaps_category_references(storage, write_snapshot):
    load_snapshot(write_snapshot(SNAPSHOT), storage)

    ids = {cat.name: cat.id for cat in storage.list_categories()}
    by_description = {txn.description: txn for txn in storage.list_transactions()}

    assert by_description["Lunch"].category_id == ids["Food"]
    assert by_description["Pay"].category_id == ids["Salary"]
    assert by_description["Taxi"].category_id == "elsewhere"
    assert storage.list_budgets()[0].category_id == ids["Food"]


@pytest.mark.integration
def test_load_snapshot_assigns_new_ids(storage, write_snapshot):
    load_snapshot(write_snapshot(SNAPSHOT), storage)

    assert storage.get_transaction("old-id") is None
    assert storage.get_category("food") is None


@pytest.mark.integration
def test_sections_are_optional(storage, write_snapshot):
    counts = load_snapshot(write_snapshot({"transactions": SNAPSHOT["transactions"][:1]}), storage)
    assert counts == {"categories": 0, "transactions": 1, "budgets": 0}


@pytest.mark.integration
def test_missing_file(storage, tmp_path):
    with pytest.raises(SnapshotNotFoundError):
        load_snapshot(tmp_path / "nope.json", storage)


@pytest.mark.integration
def test_invalid_json(storage, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DecodeError):
        load_snapshot(path, storage)


@pytest.mark.integration
@pytest.mark.parametrize(
    "data",
    [
        [],
        {"transactions": {"description": "not a list"}},
        {"budgets": ["not an object"]},
    ],
)
def test_wrong_shape(write_snapshot, data):
    with pytest.raises(DecodeError):
        read_snapshot(write_snapshot(data))


@pytest.mark.integration
def test_invalid_entry_leaves_store_untouched(storage, write_snapshot):
    data = {
        "categories": SNAPSHOT["categories"],
        "transactions": [dict(SNAPSHOT["transactions"][0], amount=-1)],
    }

    with pytest.raises(DecodeError, match="Invalid entry"):
        load_snapshot(write_snapshot(data), storage)

    assert storage.list_categories() == []
    assert storage.list_transactions() == []


@pytest.mark.integration
def test_server_loads_data_file(storage, write_snapshot):
    server = FinanceTrackerServer(storage, data_file=write_snapshot(SNAPSHOT))

    assert server.tools.get_transactions()["count"] == 3


@pytest.mark.integration
def test_sample_snapshot_loads(storage, write_snapshot):
    script = Path(__file__).parents[2] / "scripts" / "generate_sample_snapshot.py"
    spec = importlib.util.spec_from_file_location("generate_sample_snapshot", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    snapshot = module.build_snapshot(date(2026, 10, 15))
    counts = load_snapshot(write_snapshot(snapshot), storage)

    # Five full months plus the entries up to the 15th of October
    assert counts == {"categories": 12, "transactions": 75, "budgets": 6}
    category_ids = {cat.id for cat in storage.list_categories()}
    assert all(txn.category_id in category_ids for txn in storage.list_transactions())
    assert max(txn.date for txn in storage.list_transactions()).date() == date(2026, 10, 15)
