"""Data models for error records and aggregation."""

from .call_site import CallSite, TraceEntry
from .cause import CauseKind, SentinelError
from .error import ErrorList, ErrorRecord

__all__ = [
    # Location models
    "CallSite",
    "TraceEntry",
    # Cause models
    "CauseKind",
    "SentinelError",
    # Error models
    "ErrorRecord",
    "ErrorList",
]
