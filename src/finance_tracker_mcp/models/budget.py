"""
Budget model for the finance tracker.
"""

from pydantic import BaseModel, Field


class NewBudget(BaseModel):
    """A monthly spending ceiling for one category, before an id is assigned."""

    category_id: str
    amount: float = Field(ge=0)
    month: int = Field(ge=1, le=12)
    year: int


class Budget(NewBudget):
    """
    A stored budget.

    Several budgets may exist for the same category and month; storage does
    not enforce uniqueness.
    """

    model_config = {"frozen": True}

    id: str

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
