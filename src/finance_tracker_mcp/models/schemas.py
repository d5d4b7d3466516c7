"""
Request schemas for the MCP tools.

Tool arguments are validated against these models before any store or
analytics operation runs.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from finance_tracker_mcp.models.budget import NewBudget
from finance_tracker_mcp.models.category import EntryType, NewCategory
from finance_tracker_mcp.models.transaction import NewTransaction, Transaction
from finance_tracker_mcp.utils.date_utils import (
    months_for_period,
    normalize_period,
    parse_end_timestamp,
    parse_period,
    parse_timestamp,
)

REQUEST_CONFIG = {"extra": "forbid"}


class CategoryInput(NewCategory):
    """Arguments for create_category."""

    model_config = REQUEST_CONFIG

    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    icon: str = Field(min_length=1)


class CategoryListRequest(BaseModel):
    """Arguments for get_categories."""

    model_config = REQUEST_CONFIG

    type: Optional[EntryType] = None


class CategoryIdRequest(BaseModel):
    model_config = REQUEST_CONFIG

    category_id: str = Field(min_length=1)


class TransactionInput(NewTransaction):
    """Arguments for create_transaction."""

    model_config = REQUEST_CONFIG

    description: str = Field(min_length=1)
    amount: float = Field(gt=0)
    category_id: str = Field(min_length=1)


class TransactionIdRequest(BaseModel):
    model_config = REQUEST_CONFIG

    transaction_id: str = Field(min_length=1)


class TransactionUpdate(BaseModel):
    """
    A partial transaction update.

    Only the fields that were provided (and are not null) are applied.
    """

    model_config = REQUEST_CONFIG

    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    category_id: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    type: Optional[EntryType] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Optional[datetime]:
        return None if v is None else parse_timestamp(v)

    def changes(self) -> Dict[str, Any]:
        """The provided fields as a dict suitable for a store update."""
        return self.model_dump(
            include=set(NewTransaction.model_fields),
            exclude_unset=True,
            exclude_none=True,
        )


class TransactionUpdateRequest(TransactionUpdate):
    """Arguments for update_transaction."""

    transaction_id: str = Field(min_length=1)


class BudgetInput(NewBudget):
    """Arguments for create_budget."""

    model_config = REQUEST_CONFIG

    category_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    year: int = Field(ge=2000)


class BudgetIdRequest(BaseModel):
    model_config = REQUEST_CONFIG

    budget_id: str = Field(min_length=1)


class BudgetUpdate(BaseModel):
    """A partial budget update."""

    model_config = REQUEST_CONFIG

    category_id: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = Field(default=None, ge=2000)

    def changes(self) -> Dict[str, Any]:
        """The provided fields as a dict suitable for a store update."""
        return self.model_dump(
            include=set(NewBudget.model_fields),
            exclude_unset=True,
            exclude_none=True,
        )


class BudgetUpdateRequest(BudgetUpdate):
    """Arguments for update_budget."""

    budget_id: str = Field(min_length=1)


class DateRangeFilter(BaseModel):
    """
    An optional inclusive date range.

    A period preset (this-month, last-3-months, ...) takes precedence over
    explicit dates. A bare end date covers that whole day.
    """

    model_config = REQUEST_CONFIG

    period: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        months_for_period(v)
        return normalize_period(v)

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start(cls, v: Any) -> Optional[datetime]:
        return None if v is None else parse_timestamp(v)

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_end(cls, v: Any) -> Optional[datetime]:
        return None if v is None else parse_end_timestamp(v)

    def resolve(
        self, now: Optional[datetime] = None
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Return the effective (start, end) bounds."""
        if self.period:
            return parse_period(self.period, now)
        return self.start_date, self.end_date


class TransactionQuery(DateRangeFilter):
    """
    Filters for get_transactions.

    All filters are optional and combined with AND; amount bounds are
    inclusive.
    """

    category_id: Optional[str] = Field(default=None, min_length=1)
    type: Optional[EntryType] = None
    min_amount: Optional[float] = Field(default=None, ge=0)
    max_amount: Optional[float] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)

    def apply(
        self, transactions: List[Transaction], now: Optional[datetime] = None
    ) -> List[Transaction]:
        """
        Filter transactions and apply the limit.

        Args:
            transactions: Transactions in the order they should be returned
            now: Reference time for period presets

        Returns:
            The matching transactions, at most ``limit`` of them when a
            limit is given
        """
        start, end = self.resolve(now)
        result = transactions[:]

        if self.category_id is not None:
            result = [t for t in result if t.category_id == self.category_id]
        if self.type:
            result = [t for t in result if t.type == self.type]
        if start is not None:
            result = [t for t in result if t.date >= start]
        if end is not None:
            result = [t for t in result if t.date <= end]
        if self.min_amount is not None:
            result = [t for t in result if t.amount >= self.min_amount]
        if self.max_amount is not None:
            result = [t for t in result if t.amount <= self.max_amount]

        if self.limit is not None:
            result = result[: self.limit]
        return result


class MonthlyExpensesRequest(BaseModel):
    """Arguments for get_monthly_expenses."""

    model_config = REQUEST_CONFIG

    months: int = Field(default=6, ge=1, le=120)
    period: Optional[str] = None

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        months_for_period(v)
        return normalize_period(v)

    def month_count(self) -> int:
        """Number of buckets, with a period preset overriding months."""
        return months_for_period(self.period) if self.period else self.months


class SpendingTrendsRequest(MonthlyExpensesRequest):
    """Arguments for get_spending_trends."""

    months: int = Field(default=12, ge=1, le=120)


class ForecastRequest(BaseModel):
    """Arguments for get_spending_forecast."""

    model_config = REQUEST_CONFIG

    months: int = Field(default=3, ge=1, le=24)


class ExportRequest(DateRangeFilter):
    """Arguments for export_transactions."""

    format: Literal["json", "csv"] = "json"


class EmptyRequest(BaseModel):
    """Arguments for tools that take none."""

    model_config = REQUEST_CONFIG
