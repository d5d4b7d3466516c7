"""
Transaction model for the finance tracker.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, computed_field, field_validator

from finance_tracker_mcp.models.category import EntryType
from finance_tracker_mcp.utils.date_utils import parse_timestamp


class NewTransaction(BaseModel):
    """
    A transaction as supplied to the store, before an id is assigned.

    The amount is always a non-negative magnitude; the direction of the
    money flow is carried by ``type``.
    """

    description: str
    amount: float = Field(ge=0)
    category_id: str
    date: datetime
    type: EntryType

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> datetime:
        """Accept ISO strings and dates; store naive local datetimes."""
        return parse_timestamp(v)


class Transaction(NewTransaction):
    """A stored income or expense transaction."""

    model_config = {"frozen": True}

    id: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by the transaction type."""
        return -self.amount if self.type == "expense" else self.amount
