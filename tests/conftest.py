"""
Pytest configuration and fixtures for finance-tracker-mcp tests.
"""

from typing import Callable

import pytest

from finance_tracker_mcp.core.storage import InMemoryStorage
from finance_tracker_mcp.models.budget import Budget, NewBudget
from finance_tracker_mcp.models.category import Category, NewCategory
from finance_tracker_mcp.models.transaction import NewTransaction, Transaction
from finance_tracker_mcp.tools.tools import FinanceTrackerTools


@pytest.fixture
def storage() -> InMemoryStorage:
    """Empty store without the default categories."""
    return InMemoryStorage(seed_categories=False)


@pytest.fixture
def seeded_storage() -> InMemoryStorage:
    """Store with the default categories."""
    return InMemoryStorage()


@pytest.fixture
def food(storage: InMemoryStorage) -> Category:
    return storage.create_category(
        NewCategory(name="Food & Dining", color="#f97316", icon="fas fa-utensils")
    )


@pytest.fixture
def salary(storage: InMemoryStorage) -> Category:
    return storage.create_category(
        NewCategory(
            name="Salary", color="#059669", icon="fas fa-money-bill", type="income"
        )
    )


@pytest.fixture
def add_transaction(storage: InMemoryStorage) -> Callable[..., Transaction]:
    """Factory inserting a transaction into the ``storage`` fixture."""

    def _add(
        amount: float,
        date: str,
        type: str = "expense",
        category_id: str = "none",
        description: str = "Test transaction",
    ) -> Transaction:
        return storage.create_transaction(
            NewTransaction(
                description=description,
                amount=amount,
                category_id=category_id,
                date=date,
                type=type,
            )
        )

    return _add


@pytest.fixture
def add_budget(storage: InMemoryStorage) -> Callable[..., Budget]:
    """Factory inserting a budget into the ``storage`` fixture."""

    def _add(category_id: str, amount: float, month: int = 10, year: int = 2026) -> Budget:
        return storage.create_budget(
            NewBudget(category_id=category_id, amount=amount, month=month, year=year)
        )

    return _add


@pytest.fixture
def tools(storage: InMemoryStorage) -> FinanceTrackerTools:
    return FinanceTrackerTools(storage)
