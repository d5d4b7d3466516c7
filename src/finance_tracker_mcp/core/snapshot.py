"""
JSON snapshot loader.

A snapshot is a JSON document of the form::

    {
        "categories": [{"id": "food", "name": "Food", "color": "#f97316",
                        "icon": "fas fa-utensils", "type": "expense"}],
        "transactions": [{"description": "Lunch", "amount": 12.5,
                          "category_id": "food", "date": "2026-10-02",
                          "type": "expense"}],
        "budgets": [{"category_id": "food", "amount": 300,
                     "month": 10, "year": 2026}]
    }

Every list is optional. Records get fresh ids from the store; the ``id`` (or
``ref``) of a snapshot category is only used to point transactions and
budgets at the category it became. Category ids that match no snapshot
category are kept unchanged.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from finance_tracker_mcp.core.exceptions import DecodeError, SnapshotNotFoundError
from finance_tracker_mcp.core.storage import Storage
from finance_tracker_mcp.models.budget import NewBudget
from finance_tracker_mcp.models.category import NewCategory
from finance_tracker_mcp.models.transaction import NewTransaction

logger = logging.getLogger(__name__)

REFERENCE_KEYS = ("id", "ref")


def read_snapshot(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read and sanity-check a snapshot file.

    Raises:
        SnapshotNotFoundError: If the file does not exist
        DecodeError: If the file is not valid JSON or has the wrong shape
    """
    if not path.is_file():
        raise SnapshotNotFoundError(f"Snapshot not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Snapshot {path} must contain a JSON object")

    sections = {}
    for section in ("categories", "transactions", "budgets"):
        entries = data.get(section, [])
        if not isinstance(entries, list) or not all(
            isinstance(entry, dict) for entry in entries
        ):
            raise DecodeError(f"Snapshot section '{section}' must be a list of objects")
        sections[section] = entries
    return sections


def load_snapshot(path: Path, storage: Storage) -> Dict[str, int]:
    """
    Load a snapshot file into a store.

    Args:
        path: Path to the JSON snapshot
        storage: Store to insert the records into

    Returns:
        Number of records created per collection

    Raises:
        SnapshotNotFoundError: If the file does not exist
        DecodeError: If the file or one of its entries is invalid
    """
    sections = read_snapshot(path)

    # Validate everything first so a bad entry leaves the store untouched.
    try:
        categories = [
            (_reference(entry), NewCategory.model_validate(_strip(entry)))
            for entry in sections["categories"]
        ]
        transactions = [
            NewTransaction.model_validate(_strip(entry))
            for entry in sections["transactions"]
        ]
        budgets = [
            NewBudget.model_validate(_strip(entry)) for entry in sections["budgets"]
        ]
    except ValidationError as e:
        raise DecodeError(f"Invalid entry in snapshot {path}: {e}") from e

    id_map: Dict[str, str] = {}
    for reference, category in categories:
        record = storage.create_category(category)
        if reference is not None:
            id_map[reference] = record.id

    for transaction in transactions:
        category_id = id_map.get(transaction.category_id, transaction.category_id)
        storage.create_transaction(
            transaction.model_copy(update={"category_id": category_id})
        )

    for budget in budgets:
        category_id = id_map.get(budget.category_id, budget.category_id)
        storage.create_budget(budget.model_copy(update={"category_id": category_id}))

    counts = {
        "categories": len(categories),
        "transactions": len(transactions),
        "budgets": len(budgets),
    }
    logger.info(
        "Loaded snapshot %s: %d categories, %d transactions, %d budgets",
        path,
        counts["categories"],
        counts["transactions"],
        counts["budgets"],
    )
    return counts


def _reference(entry: Dict[str, Any]) -> Any:
    for key in REFERENCE_KEYS:
        if entry.get(key) is not None:
            return str(entry[key])
    return None


def _strip(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in entry.items() if key not in REFERENCE_KEYS}
