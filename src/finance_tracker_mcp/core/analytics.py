"""
Analytics over the current contents of a store.

Every method reads the store again when called; nothing is cached. Months
are local calendar months and all ratios fall back to 0 instead of dividing
by zero.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from finance_tracker_mcp.core.storage import Storage
from finance_tracker_mcp.models.analytics import (
    BudgetPerformance,
    CategoryExpense,
    ForecastPoint,
    MonthlyExpense,
    SpendingTrend,
    SummaryStats,
)
from finance_tracker_mcp.models.budget import Budget
from finance_tracker_mcp.models.category import FALLBACK_COLOR, UNKNOWN_CATEGORY_NAME
from finance_tracker_mcp.models.transaction import Transaction
from finance_tracker_mcp.utils.date_utils import (
    future_month_buckets,
    month_bucket,
    month_buckets,
)

# Number of past months the forecast is based on.
FORECAST_HISTORY_MONTHS = 6


def total_amount(transactions: Iterable[Transaction], entry_type: str) -> float:
    """Sum the magnitudes of all transactions of one type."""
    return sum((txn.amount for txn in transactions if txn.type == entry_type), 0.0)


def percentage(part: float, whole: float) -> float:
    """100 * part / whole, or 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100


class AnalyticsEngine:
    """Derives dashboard figures from a store."""

    def __init__(self, storage: Storage):
        """
        Initialize the engine.

        Args:
            storage: Store whose current records are aggregated on each call
        """
        self.storage = storage

    def _category_display(self, category_id: str) -> Tuple[str, str]:
        """Name and color for a category id, with the fallback if it is missing."""
        category = self.storage.get_category(category_id)
        if category is None:
            return UNKNOWN_CATEGORY_NAME, FALLBACK_COLOR
        return category.name, category.color

    def monthly_expenses(self, month_count: int) -> List[MonthlyExpense]:
        """
        Expense totals for the last ``month_count`` months, oldest first.

        The window ends at the current month and contains every month, with
        0 for months without expenses.
        """
        transactions = self.storage.list_transactions()
        result = []
        for bucket in month_buckets(month_count):
            in_month = [txn for txn in transactions if bucket.contains(txn.date)]
            result.append(
                MonthlyExpense(
                    month=bucket.label,
                    period=bucket.period,
                    amount=total_amount(in_month, "expense"),
                )
            )
        return result

    def category_expenses(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[CategoryExpense]:
        """
        Expense totals grouped by category.

        Args:
            start_date: Only count expenses on or after this time
            end_date: Only count expenses on or before this time

        Returns:
            One entry per category with a non-zero total
        """
        totals: Dict[str, float] = {}
        for txn in self.storage.list_transactions():
            if txn.type != "expense":
                continue
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            totals[txn.category_id] = totals.get(txn.category_id, 0.0) + txn.amount

        result = []
        for category_id, amount in totals.items():
            if amount == 0:
                continue
            name, color = self._category_display(category_id)
            result.append(
                CategoryExpense(
                    category_id=category_id,
                    category=name,
                    amount=amount,
                    color=color,
                )
            )
        return result

    def summary_stats(self) -> SummaryStats:
        """
        Overall balance plus this month's income, expenses and savings rate.

        The month covers the 1st of the current month up to now. The savings
        rate is not clamped, so it can be negative or above 100.
        """
        now = datetime.now()
        first_of_month = datetime(now.year, now.month, 1)
        transactions = self.storage.list_transactions()

        total_balance = total_amount(transactions, "income") - total_amount(
            transactions, "expense"
        )

        this_month = [txn for txn in transactions if first_of_month <= txn.date <= now]
        monthly_income = total_amount(this_month, "income")
        monthly_expenses = total_amount(this_month, "expense")

        return SummaryStats(
            total_balance=total_balance,
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            savings_rate=percentage(monthly_income - monthly_expenses, monthly_income),
        )

    def spending_trends(self, month_count: int) -> List[SpendingTrend]:
        """Income, expenses and savings per month, oldest first."""
        transactions = self.storage.list_transactions()
        result = []
        for bucket in month_buckets(month_count):
            in_month = [txn for txn in transactions if bucket.contains(txn.date)]
            income = total_amount(in_month, "income")
            expenses = total_amount(in_month, "expense")
            result.append(
                SpendingTrend(
                    month=bucket.label,
                    period=bucket.period,
                    income=income,
                    expenses=expenses,
                    savings=income - expenses,
                )
            )
        return result

    def spending_forecast(self, month_count: int) -> List[ForecastPoint]:
        """
        Project expenses for the next ``month_count`` months.

        A straight line through the last six months: the mean expense plus
        ``(last - first) / count`` per month ahead, never below 0.
        Confidence drops by 0.1 per month with a floor of 0.5.
        """
        history = self.spending_trends(FORECAST_HISTORY_MONTHS)
        expenses = [point.expenses for point in history]

        mean = sum(expenses) / len(expenses)
        slope = (expenses[-1] - expenses[0]) / len(expenses) if len(expenses) > 1 else 0.0

        result = []
        for i, bucket in enumerate(future_month_buckets(month_count), start=1):
            result.append(
                ForecastPoint(
                    month=bucket.label,
                    period=bucket.period,
                    predicted=max(0.0, mean + slope * i),
                    confidence=max(0.5, 1 - 0.1 * i),
                )
            )
        return result

    def budget_performance(self) -> List[BudgetPerformance]:
        """
        Budget versus actual expenses for the current month.

        When several budgets exist for the same category and month, the one
        created last is used.
        """
        now = datetime.now()
        bucket = month_bucket(now.year, now.month)

        selected: Dict[str, Budget] = {}
        for budget in self.storage.list_budgets():
            if budget.month == now.month and budget.year == now.year:
                selected[budget.category_id] = budget

        transactions = [
            txn
            for txn in self.storage.list_transactions()
            if txn.type == "expense" and bucket.contains(txn.date)
        ]

        result = []
        for category_id, budget in selected.items():
            actual = sum(
                (txn.amount for txn in transactions if txn.category_id == category_id),
                0.0,
            )
            name, _ = self._category_display(category_id)
            result.append(
                BudgetPerformance(
                    budget_id=budget.id,
                    category_id=category_id,
                    category_name=name,
                    budget_amount=budget.amount,
                    actual_amount=actual,
                    variance=budget.amount - actual,
                    percentage_used=percentage(actual, budget.amount),
                )
            )
        return result
