"""
Utility modules for errtrace.
"""

from errtrace.utils.logging import (
    get_logger,
    setup_logging,
    JSONFormatter,
    log_error_record,
)
from errtrace.utils.formatting import (
    NO_ERRORS_MESSAGE,
    render_record,
    render_aggregate,
    render_trace,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "log_error_record",
    "NO_ERRORS_MESSAGE",
    "render_record",
    "render_aggregate",
    "render_trace",
]
