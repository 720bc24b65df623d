"""
errtrace: error records that accumulate a call-path trace as they propagate,
plus thread-safe aggregation of batch failures.
"""

from errtrace.calltrace import capture
from errtrace.models import (
    CallSite,
    CauseKind,
    ErrorList,
    ErrorRecord,
    SentinelError,
    TraceEntry,
)
from errtrace.utils.formatting import NO_ERRORS_MESSAGE
from errtrace.wrap import (
    DEFAULT_DEPTH,
    LIST_ADD_DEPTH,
    matches,
    new_aggregate_root,
    new_test_marker,
    wrap,
    wrap_to_depth,
)

__all__ = [
    # Entry points
    "wrap",
    "wrap_to_depth",
    "new_aggregate_root",
    "new_test_marker",
    "matches",
    "DEFAULT_DEPTH",
    "LIST_ADD_DEPTH",
    # Models
    "ErrorRecord",
    "ErrorList",
    "CallSite",
    "TraceEntry",
    "CauseKind",
    "SentinelError",
    # Stack capture
    "capture",
    # Rendering
    "NO_ERRORS_MESSAGE",
]
