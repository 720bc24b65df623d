"""
Wrap and propagate entry points.

Every function boundary that forwards an error upward passes it through
``wrap``: a foreign exception becomes a new ``ErrorRecord`` seeded with one
trace entry, an existing record gains one more trace entry and comes back
as the same object. Callers rebind the result::

    try:
        write_block(path)
    except OSError as exc:
        raise wrap(exc)

Depth counts frames above the stack capture: 0 is the capture itself, 1
the parse step, 2 the caller of ``wrap``/``wrap_to_depth``.
"""

from typing import Optional

from errtrace.calltrace import capture
from errtrace.config import settings
from errtrace.models.cause import CauseKind, SentinelError
from errtrace.models.error import ErrorList, ErrorRecord
from errtrace.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DEPTH = 2
LIST_ADD_DEPTH = 3


def _parse(err: BaseException, depth: int) -> ErrorRecord:
    # +1 for this frame, so ``depth`` keeps its meaning for callers
    site = capture(depth + 1)

    if not isinstance(err, BaseException):
        raise TypeError(f"Expected an exception, got {type(err).__name__}")

    if isinstance(err, ErrorRecord):
        err.add_trace(site)
        if settings.log_wraps:
            logger.debug(
                f"Trace hop added: {site.operation}",
                extra={
                    "error_file": site.file,
                    "error_operation": site.operation,
                    "error_line": site.line,
                    "trace_length": len(err.hops),
                }
            )
        return err

    record = ErrorRecord(str(err), cause=err, kind=CauseKind.FOREIGN, site=site)
    record.add_trace(site)

    if settings.log_wraps:
        logger.debug(
            f"Foreign error wrapped: {type(err).__name__}: {err}",
            extra={
                "error_file": site.file,
                "error_operation": site.operation,
                "error_line": site.line,
            }
        )

    return record


def wrap(err: BaseException) -> ErrorRecord:
    """
    Wrap or propagate an error at the caller's call site.

    Args:
        err: Foreign exception or existing error record

    Returns:
        New record for a foreign error, or ``err`` itself with one more
        trace entry
    """
    return _parse(err, DEFAULT_DEPTH)


def wrap_to_depth(err: BaseException, depth: int) -> ErrorRecord:
    """
    Wrap or propagate an error, attributing it to an explicit stack depth.

    A wrong depth misattributes the location (or leaves it empty past the
    bottom of the stack); it is not validated.

    Args:
        err: Foreign exception or existing error record
        depth: Frames above the stack capture, 2 being the caller of this
            function

    Returns:
        New record for a foreign error, or ``err`` itself with one more
        trace entry
    """
    return _parse(err, depth)


def new_aggregate_root() -> ErrorRecord:
    """Create an empty aggregate root to collect batch failures."""
    sentinel = SentinelError(CauseKind.LIST)
    return ErrorRecord(
        str(sentinel),
        cause=sentinel,
        kind=CauseKind.LIST,
        error_list=ErrorList(),
    )


def new_test_marker() -> ErrorRecord:
    """Create a marker record usable as a match target in tests."""
    sentinel = SentinelError(CauseKind.TEST)
    return ErrorRecord(str(sentinel), cause=sentinel, kind=CauseKind.TEST)


def matches(err: Optional[BaseException], target: BaseException) -> bool:
    """
    Walk the cause chain of ``err`` looking for ``target``.

    A link matches when it is ``target`` itself or when it is an error
    record whose ``is_match`` accepts ``target``.

    Args:
        err: Error to inspect, may be None
        target: Error or marker to look for

    Returns:
        True if any link in the chain matches
    """
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if err is target:
            return True
        if isinstance(err, ErrorRecord):
            if err.is_match(target):
                return True
            err = err.unwrap()
        else:
            err = err.__cause__
    return False
