"""
Custom exceptions for the finance tracker MCP server.
"""


class FinanceTrackerError(Exception):
    """Base exception for finance tracker errors."""
    pass


class RecordNotFoundError(FinanceTrackerError, LookupError):
    """Raised by the tools layer when a record id does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class SnapshotNotFoundError(FinanceTrackerError):
    """Raised when a snapshot file cannot be found."""
    pass


class DecodeError(FinanceTrackerError):
    """Raised when snapshot data cannot be decoded."""
    pass
