"""
Category model for the finance tracker.
"""

from typing import Literal

from pydantic import BaseModel

EntryType = Literal["income", "expense"]

# Display values used when a referenced category does not exist.
UNKNOWN_CATEGORY_NAME = "Unknown"
FALLBACK_COLOR = "#64748b"


class NewCategory(BaseModel):
    """
    A category as supplied to the store, before an id is assigned.

    Color and icon are opaque display tokens (e.g. "#f97316",
    "fas fa-utensils").
    """

    name: str
    color: str
    icon: str
    type: EntryType = "expense"


class Category(NewCategory):
    """A stored spending or income category."""

    model_config = {"frozen": True}

    id: str
