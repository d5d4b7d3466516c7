"""
MCP tool definitions for the finance tracker.

Exposes the store and analytics operations through the Model Context
Protocol. Arguments arrive here already validated by the request schemas in
``finance_tracker_mcp.models.schemas``.
"""

import csv
import io
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

from pydantic import BaseModel

from finance_tracker_mcp.core.analytics import AnalyticsEngine
from finance_tracker_mcp.core.exceptions import RecordNotFoundError
from finance_tracker_mcp.core.storage import Storage
from finance_tracker_mcp.models.budget import Budget, NewBudget
from finance_tracker_mcp.models.category import (
    UNKNOWN_CATEGORY_NAME,
    EntryType,
    NewCategory,
)
from finance_tracker_mcp.models.schemas import (
    BudgetIdRequest,
    BudgetInput,
    BudgetUpdate,
    BudgetUpdateRequest,
    CategoryIdRequest,
    CategoryInput,
    CategoryListRequest,
    DateRangeFilter,
    EmptyRequest,
    ExportRequest,
    ForecastRequest,
    MonthlyExpensesRequest,
    SpendingTrendsRequest,
    TransactionIdRequest,
    TransactionInput,
    TransactionQuery,
    TransactionUpdate,
    TransactionUpdateRequest,
)
from finance_tracker_mcp.models.transaction import NewTransaction, Transaction

CSV_HEADER = ["Date", "Description", "Amount", "Type", "Category"]


class FinanceTrackerTools:
    """Collection of MCP tools for managing and analysing finances."""

    def __init__(self, storage: Storage, analytics: Optional[AnalyticsEngine] = None):
        """
        Initialize tools with a store.

        Args:
            storage: Store holding categories, transactions and budgets
            analytics: Analytics engine (default: one reading ``storage``)
        """
        self.storage = storage
        self.analytics = analytics or AnalyticsEngine(storage)

    def _category_name(self, category_id: str) -> str:
        category = self.storage.get_category(category_id)
        return category.name if category else UNKNOWN_CATEGORY_NAME

    def _transaction_dict(self, txn: Transaction) -> Dict[str, Any]:
        data = txn.model_dump(mode="json")
        data["category_name"] = self._category_name(txn.category_id)
        return data

    def _budget_dict(self, budget: Budget) -> Dict[str, Any]:
        data = budget.model_dump(mode="json")
        data["category_name"] = self._category_name(budget.category_id)
        return data

    # Categories

    def get_categories(self, type: Optional[EntryType] = None) -> Dict[str, Any]:
        """
        Get all categories.

        Args:
            type: Optional filter by category type (income or expense)

        Returns:
            Dict with category count and list of categories
        """
        categories = self.storage.list_categories()
        if type:
            categories = [cat for cat in categories if cat.type == type]

        return {
            "count": len(categories),
            "categories": [cat.model_dump(mode="json") for cat in categories],
        }

    def get_category(self, category_id: str) -> Dict[str, Any]:
        """
        Raises:
            RecordNotFoundError: If category_id is not found
        """
        category = self.storage.get_category(category_id)
        if category is None:
            raise RecordNotFoundError("Category", category_id)
        return category.model_dump(mode="json")

    def create_category(self, category: NewCategory) -> Dict[str, Any]:
        return self.storage.create_category(category).model_dump(mode="json")

    # Transactions

    def get_transactions(self, query: Optional[TransactionQuery] = None) -> Dict[str, Any]:
        """
        Get transactions with optional filters, newest first.

        Args:
            query: Filters (category, type, dates or period, amounts, limit)

        Returns:
            Dict with transaction count and list of transactions
        """
        query = query or TransactionQuery()
        transactions = query.apply(self.storage.list_transactions())

        return {
            "count": len(transactions),
            "transactions": [self._transaction_dict(txn) for txn in transactions],
        }

    def get_transaction(self, transaction_id: str) -> Dict[str, Any]:
        """
        Get one transaction, including its category name.

        Raises:
            RecordNotFoundError: If transaction_id is not found
        """
        txn = self.storage.get_transaction(transaction_id)
        if txn is None:
            raise RecordNotFoundError("Transaction", transaction_id)
        return self._transaction_dict(txn)

    def create_transaction(self, transaction: NewTransaction) -> Dict[str, Any]:
        return self._transaction_dict(self.storage.create_transaction(transaction))

    def update_transaction(
        self, transaction_id: str, changes: TransactionUpdate
    ) -> Dict[str, Any]:
        """
        Apply a partial update to a transaction.

        Raises:
            RecordNotFoundError: If transaction_id is not found
        """
        txn = self.storage.update_transaction(transaction_id, changes.changes())
        if txn is None:
            raise RecordNotFoundError("Transaction", transaction_id)
        return self._transaction_dict(txn)

    def delete_transaction(self, transaction_id: str) -> Dict[str, Any]:
        """Delete a transaction; ``deleted`` is False if it did not exist."""
        return {
            "transaction_id": transaction_id,
            "deleted": self.storage.delete_transaction(transaction_id),
        }

    # Budgets

    def get_budgets(self) -> Dict[str, Any]:
        budgets = self.storage.list_budgets()
        return {
            "count": len(budgets),
            "budgets": [self._budget_dict(budget) for budget in budgets],
        }

    def get_budget(self, budget_id: str) -> Dict[str, Any]:
        """
        Raises:
            RecordNotFoundError: If budget_id is not found
        """
        budget = self.storage.get_budget(budget_id)
        if budget is None:
            raise RecordNotFoundError("Budget", budget_id)
        return self._budget_dict(budget)

    def create_budget(self, budget: NewBudget) -> Dict[str, Any]:
        return self._budget_dict(self.storage.create_budget(budget))

    def update_budget(self, budget_id: str, changes: BudgetUpdate) -> Dict[str, Any]:
        """
        Apply a partial update to a budget.

        Raises:
            RecordNotFoundError: If budget_id is not found
        """
        budget = self.storage.update_budget(budget_id, changes.changes())
        if budget is None:
            raise RecordNotFoundError("Budget", budget_id)
        return self._budget_dict(budget)

    def delete_budget(self, budget_id: str) -> Dict[str, Any]:
        """Delete a budget; ``deleted`` is False if it did not exist."""
        return {
            "budget_id": budget_id,
            "deleted": self.storage.delete_budget(budget_id),
        }

    # Analytics

    def get_monthly_expenses(self, months: int = 6) -> Dict[str, Any]:
        """
        Get expense totals per month, oldest first, ending this month.

        Args:
            months: Number of months in the window (default: 6)
        """
        series = self.analytics.monthly_expenses(months)
        return {
            "months": len(series),
            "data": [point.model_dump(mode="json") for point in series],
        }

    def get_category_expenses(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Get expense totals per category.

        Args:
            start_date: Only count expenses on or after this time
            end_date: Only count expenses on or before this time

        Returns:
            Dict with the date range, overall total and per-category totals
        """
        categories = self.analytics.category_expenses(start_date, end_date)
        total = sum(entry.amount for entry in categories)

        return {
            "period": {
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
            },
            "total_spending": round(total, 2),
            "category_count": len(categories),
            "categories": [entry.model_dump(mode="json") for entry in categories],
        }

    def get_summary(self) -> Dict[str, Any]:
        return self.analytics.summary_stats().model_dump(mode="json")

    def get_spending_trends(self, months: int = 12) -> Dict[str, Any]:
        series = self.analytics.spending_trends(months)
        return {
            "months": len(series),
            "data": [point.model_dump(mode="json") for point in series],
        }

    def get_spending_forecast(self, months: int = 3) -> Dict[str, Any]:
        """
        Get a naive expense forecast for the coming months.

        The projection is a straight line through the last six months of
        expenses; it is a heuristic, not a statistical model.
        """
        series = self.analytics.spending_forecast(months)
        return {
            "months": len(series),
            "data": [point.model_dump(mode="json") for point in series],
        }

    def get_budget_performance(self) -> Dict[str, Any]:
        entries = self.analytics.budget_performance()
        return {
            "count": len(entries),
            "budgets": [entry.model_dump(mode="json") for entry in entries],
        }

    # Export

    def export_transactions(
        self,
        format: str = "json",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Export transactions, newest first.

        Args:
            format: "json" for a list of transactions, "csv" for delimited text
                    with the columns Date, Description, Amount, Type, Category
            start_date: Only export transactions on or after this time
            end_date: Only export transactions on or before this time

        Returns:
            Dict with the format, transaction count and exported content
        """
        transactions = self.storage.list_transactions()
        if start_date is not None:
            transactions = [txn for txn in transactions if txn.date >= start_date]
        if end_date is not None:
            transactions = [txn for txn in transactions if txn.date <= end_date]

        if format == "csv":
            content: Any = transactions_to_csv(transactions, self._category_name)
        else:
            content = [self._transaction_dict(txn) for txn in transactions]

        return {
            "format": format,
            "count": len(transactions),
            "content": content,
        }


def transactions_to_csv(
    transactions: List[Transaction], category_name: Callable[[str], str]
) -> str:
    """
    Render transactions as CSV text.

    Args:
        transactions: Transactions in output order
        category_name: Callable mapping a category id to a display name

    Returns:
        CSV text with a header row and one row per transaction
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for txn in transactions:
        writer.writerow(
            [
                txn.date.date().isoformat(),
                txn.description,
                f"{txn.amount:.2f}",
                txn.type,
                category_name(txn.category_id),
            ]
        )
    return buffer.getvalue()


class ToolDefinition(NamedTuple):
    name: str
    description: str
    request_model: Type[BaseModel]


TOOL_DEFINITIONS: List[ToolDefinition] = [
    ToolDefinition(
        "get_categories",
        "List categories. Optionally filter by type (income or expense).",
        CategoryListRequest,
    ),
    ToolDefinition(
        "get_category",
        "Get a single category by ID.",
        CategoryIdRequest,
    ),
    ToolDefinition(
        "create_category",
        "Create a category with a name, color token, icon token and type.",
        CategoryInput,
    ),
    ToolDefinition(
        "get_transactions",
        (
            "Get transactions, newest first, with optional filters. Supports "
            "category, type, date range, amount range and an optional limit "
            "(all matches are returned when it is omitted). Use "
            "'period' for common date ranges (this-month, last-month, "
            "last-3-months, last-6-months, this-year, last-1-day)."
        ),
        TransactionQuery,
    ),
    ToolDefinition(
        "get_transaction",
        "Get a single transaction by ID, including its category name.",
        TransactionIdRequest,
    ),
    ToolDefinition(
        "create_transaction",
        (
            "Record an income or expense. Amount is a positive number; the "
            "direction is given by 'type'."
        ),
        TransactionInput,
    ),
    ToolDefinition(
        "update_transaction",
        "Update some fields of a transaction. Omitted fields are unchanged.",
        TransactionUpdateRequest,
    ),
    ToolDefinition(
        "delete_transaction",
        "Delete a transaction by ID.",
        TransactionIdRequest,
    ),
    ToolDefinition(
        "get_budgets",
        "List all monthly budgets.",
        EmptyRequest,
    ),
    ToolDefinition(
        "get_budget",
        "Get a single budget by ID.",
        BudgetIdRequest,
    ),
    ToolDefinition(
        "create_budget",
        "Set a spending ceiling for one category in one month (1-12) and year.",
        BudgetInput,
    ),
    ToolDefinition(
        "update_budget",
        "Update some fields of a budget. Omitted fields are unchanged.",
        BudgetUpdateRequest,
    ),
    ToolDefinition(
        "delete_budget",
        "Delete a budget by ID.",
        BudgetIdRequest,
    ),
    ToolDefinition(
        "get_monthly_expenses",
        (
            "Get total expenses per month for the last N months (default 6), "
            "oldest first. Months without expenses are reported as 0."
        ),
        MonthlyExpensesRequest,
    ),
    ToolDefinition(
        "get_category_expenses",
        (
            "Get total expenses per category, optionally restricted to a date "
            "range or a period."
        ),
        DateRangeFilter,
    ),
    ToolDefinition(
        "get_summary",
        (
            "Get total balance (all income minus all expenses), this month's "
            "income and expenses, and the savings rate in percent."
        ),
        EmptyRequest,
    ),
    ToolDefinition(
        "get_spending_trends",
        "Get income, expenses and savings per month for the last N months (default 12).",
        SpendingTrendsRequest,
    ),
    ToolDefinition(
        "get_spending_forecast",
        (
            "Get a simple projection of expenses for the next N months "
            "(default 3) with a confidence value between 0.5 and 1."
        ),
        ForecastRequest,
    ),
    ToolDefinition(
        "get_budget_performance",
        "Compare this month's budgets with actual spending per category.",
        EmptyRequest,
    ),
    ToolDefinition(
        "export_transactions",
        "Export transactions as JSON or CSV, optionally for a date range or period.",
        ExportRequest,
    ),
]

TOOLS_BY_NAME: Dict[str, ToolDefinition] = {tool.name: tool for tool in TOOL_DEFINITIONS}


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.request_model.model_json_schema(),
        }
        for tool in TOOL_DEFINITIONS
    ]
