"""
Result models for the analytics tools.
"""

from pydantic import BaseModel


class MonthlyExpense(BaseModel):
    """Total expenses for one calendar month."""

    month: str  # "Oct"
    period: str  # "2026-10"
    amount: float


class CategoryExpense(BaseModel):
    """Total expenses for one category."""

    category_id: str
    category: str
    amount: float
    color: str


class SummaryStats(BaseModel):
    """Headline figures for the dashboard."""

    total_balance: float
    monthly_income: float
    monthly_expenses: float
    savings_rate: float  # percent, not clamped


class SpendingTrend(BaseModel):
    """Income, expenses and savings for one calendar month."""

    month: str
    period: str
    income: float
    expenses: float
    savings: float


class ForecastPoint(BaseModel):
    """Projected expenses for one future month."""

    month: str
    period: str
    predicted: float
    confidence: float


class BudgetPerformance(BaseModel):
    """Budget versus actual spending for one category in the current month."""

    budget_id: str
    category_id: str
    category_name: str
    budget_amount: float
    actual_amount: float
    variance: float
    percentage_used: float  # percent, not clamped
