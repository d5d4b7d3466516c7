"""
Entity store for categories, transactions and budgets.

``Storage`` describes the operations every backend provides;
``InMemoryStorage`` keeps the records in process memory. Missing records
are reported as ``None`` (lookups, updates) or ``False`` (deletes), never
as exceptions.
"""

import logging
from itertools import count
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from finance_tracker_mcp.core.seed import DEFAULT_CATEGORIES
from finance_tracker_mcp.models.budget import Budget, NewBudget
from finance_tracker_mcp.models.category import Category, NewCategory
from finance_tracker_mcp.models.transaction import NewTransaction, Transaction

logger = logging.getLogger(__name__)

ID_WIDTH = 24


class Storage(Protocol):
    """Operations the tools and analytics layers need from a backend."""

    # Categories
    def create_category(self, category: NewCategory) -> Category: ...

    def get_category(self, category_id: str) -> Optional[Category]: ...

    def list_categories(self) -> List[Category]: ...

    # Transactions
    def create_transaction(self, transaction: NewTransaction) -> Transaction: ...

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]: ...

    def list_transactions(self) -> List[Transaction]: ...

    def update_transaction(
        self, transaction_id: str, changes: Mapping[str, Any]
    ) -> Optional[Transaction]: ...

    def delete_transaction(self, transaction_id: str) -> bool: ...

    # Budgets
    def create_budget(self, budget: NewBudget) -> Budget: ...

    def get_budget(self, budget_id: str) -> Optional[Budget]: ...

    def list_budgets(self) -> List[Budget]: ...

    def update_budget(
        self, budget_id: str, changes: Mapping[str, Any]
    ) -> Optional[Budget]: ...

    def delete_budget(self, budget_id: str) -> bool: ...


class InMemoryStorage:
    """
    Store backed by plain dictionaries.

    Ids come from one counter shared by all collections and are never
    reused, even after a delete.
    """

    def __init__(
        self,
        seed_categories: bool = True,
        categories: Optional[Iterable[NewCategory]] = None,
    ):
        """
        Initialize an empty store.

        Args:
            seed_categories: Create the default category set
            categories: Categories to create instead of the default set
        """
        self._categories: Dict[str, Category] = {}
        self._transactions: Dict[str, Transaction] = {}
        self._budgets: Dict[str, Budget] = {}
        self._ids = count(1)

        if categories is None and seed_categories:
            categories = DEFAULT_CATEGORIES
        for category in categories or ():
            self.create_category(category)

    def _next_id(self) -> str:
        return str(next(self._ids)).zfill(ID_WIDTH)

    # Categories

    def create_category(self, category: NewCategory) -> Category:
        record = Category(id=self._next_id(), **category.model_dump())
        self._categories[record.id] = record
        logger.debug("Created category %s (%s)", record.id, record.name)
        return record

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def list_categories(self) -> List[Category]:
        return list(self._categories.values())

    # Transactions

    def create_transaction(self, transaction: NewTransaction) -> Transaction:
        record = Transaction(id=self._next_id(), **transaction.model_dump())
        self._transactions[record.id] = record
        logger.debug("Created transaction %s", record.id)
        return record

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def list_transactions(self) -> List[Transaction]:
        """All transactions, newest first by date."""
        return sorted(
            self._transactions.values(), key=lambda txn: txn.date, reverse=True
        )

    def update_transaction(
        self, transaction_id: str, changes: Mapping[str, Any]
    ) -> Optional[Transaction]:
        """
        Merge changes into an existing transaction.

        Fields missing from ``changes`` keep their current value. The merged
        record is validated again, so date strings are parsed here too.

        Returns:
            The updated transaction, or None if the id does not exist
        """
        existing = self._transactions.get(transaction_id)
        if existing is None:
            return None

        merged = {**existing.model_dump(), **changes, "id": existing.id}
        record = Transaction.model_validate(merged)
        self._transactions[record.id] = record
        logger.debug("Updated transaction %s: %s", record.id, sorted(changes))
        return record

    def delete_transaction(self, transaction_id: str) -> bool:
        removed = self._transactions.pop(transaction_id, None) is not None
        if removed:
            logger.debug("Deleted transaction %s", transaction_id)
        return removed

    # Budgets

    def create_budget(self, budget: NewBudget) -> Budget:
        record = Budget(id=self._next_id(), **budget.model_dump())
        self._budgets[record.id] = record
        logger.debug("Created budget %s", record.id)
        return record

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return self._budgets.get(budget_id)

    def list_budgets(self) -> List[Budget]:
        """All budgets in creation order."""
        return list(self._budgets.values())

    def update_budget(
        self, budget_id: str, changes: Mapping[str, Any]
    ) -> Optional[Budget]:
        existing = self._budgets.get(budget_id)
        if existing is None:
            return None

        merged = {**existing.model_dump(), **changes, "id": existing.id}
        record = Budget.model_validate(merged)
        self._budgets[record.id] = record
        logger.debug("Updated budget %s: %s", record.id, sorted(changes))
        return record

    def delete_budget(self, budget_id: str) -> bool:
        removed = self._budgets.pop(budget_id, None) is not None
        if removed:
            logger.debug("Deleted budget %s", budget_id)
        return removed
