"""
Pydantic models for finance tracker data structures.
"""

from finance_tracker_mcp.models.analytics import (
    BudgetPerformance,
    CategoryExpense,
    ForecastPoint,
    MonthlyExpense,
    SpendingTrend,
    SummaryStats,
)
from finance_tracker_mcp.models.budget import Budget, NewBudget
from finance_tracker_mcp.models.category import (
    FALLBACK_COLOR,
    UNKNOWN_CATEGORY_NAME,
    Category,
    EntryType,
    NewCategory,
)
from finance_tracker_mcp.models.transaction import NewTransaction, Transaction

__all__ = [
    "Budget",
    "BudgetPerformance",
    "Category",
    "CategoryExpense",
    "EntryType",
    "FALLBACK_COLOR",
    "ForecastPoint",
    "MonthlyExpense",
    "NewBudget",
    "NewCategory",
    "NewTransaction",
    "SpendingTrend",
    "SummaryStats",
    "Transaction",
    "UNKNOWN_CATEGORY_NAME",
]
