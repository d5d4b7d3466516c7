"""
Core functionality for the finance tracker.
"""

from finance_tracker_mcp.core.analytics import AnalyticsEngine
from finance_tracker_mcp.core.exceptions import (
    DecodeError,
    FinanceTrackerError,
    RecordNotFoundError,
    SnapshotNotFoundError,
)
from finance_tracker_mcp.core.snapshot import load_snapshot
from finance_tracker_mcp.core.storage import InMemoryStorage, Storage

__all__ = [
    "AnalyticsEngine",
    "InMemoryStorage",
    "Storage",
    "load_snapshot",
    "DecodeError",
    "FinanceTrackerError",
    "RecordNotFoundError",
    "SnapshotNotFoundError",
]
