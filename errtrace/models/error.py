"""Error record and error list models."""

import threading
from typing import Iterator, List, Optional, Tuple

from errtrace.models.call_site import CallSite, TraceEntry
from errtrace.models.cause import CauseKind
from errtrace.utils.formatting import render_aggregate, render_record
from errtrace.utils.logging import get_logger

logger = get_logger(__name__)


class ErrorRecord(Exception):
    """
    Structured error carrying its origin and every propagation hop.

    A record is created once, on the first wrap of a foreign error. Every
    later wrap appends a trace entry to the same instance instead of
    nesting a new cause, so one logical failure keeps one growing trace.

    A record whose kind is ``CauseKind.LIST`` and which owns an
    ``ErrorList`` is an aggregate root: it renders its children instead of
    describing a single failure.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        kind: CauseKind = CauseKind.FOREIGN,
        site: Optional[CallSite] = None,
        error_list: Optional["ErrorList"] = None,
    ):
        """
        Initialize error record.

        Args:
            message: Human-readable summary
            cause: Wrapped foreign error or a sentinel
            kind: What the cause stands for
            site: Location of first capture
            error_list: Owned list, for aggregate roots only
        """
        super().__init__(message)
        site = site or CallSite()

        self._file = site.file
        self._operation = site.operation
        self._line = site.line
        self._message = message
        self._cause = cause
        self._kind = kind
        self._error_list = error_list
        self._hops: List[TraceEntry] = []

        if kind is CauseKind.FOREIGN and cause is not None:
            self.__cause__ = cause

    @property
    def file(self) -> str:
        return self._file

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def line(self) -> int:
        return self._line

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    @property
    def kind(self) -> CauseKind:
        return self._kind

    @property
    def error_list(self) -> Optional["ErrorList"]:
        return self._error_list

    @property
    def hops(self) -> Tuple[TraceEntry, ...]:
        """Recorded propagation hops, oldest first."""
        return tuple(self._hops)

    @property
    def trace(self) -> Tuple[str, ...]:
        """Formatted trace entries, oldest first."""
        return tuple(str(hop) for hop in self._hops)

    @property
    def is_aggregate_root(self) -> bool:
        return self._kind is CauseKind.LIST and self._error_list is not None

    def add_trace(self, site: CallSite) -> None:
        """
        Append one propagation hop.

        Not synchronized: concurrent wraps of the same record must be
        serialized by the caller.

        Args:
            site: Captured call site of the hop
        """
        self._hops.append(TraceEntry.from_site(site))

    def unwrap(self) -> Optional[BaseException]:
        """Return the wrapped cause."""
        return self._cause

    def is_match(self, target: BaseException) -> bool:
        """
        Check whether ``target`` is an error record.

        Only the type is compared; two records never differ here by kind
        or message.
        """
        return isinstance(target, ErrorRecord)

    def render(self) -> str:
        """Render the record (or the whole aggregate) for human reading."""
        if self.is_aggregate_root:
            return render_aggregate(self, self._error_list.records)
        return render_record(self)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"ErrorRecord(kind={self._kind.value}, operation={self._operation!r}, "
            f"message={self._message!r}, hops={len(self._hops)})"
        )


class ErrorList:
    """
    Thread-safe collection of error records owned by an aggregate root.

    ``add`` is the only mutation and may be called concurrently from
    several failing sub-operations.
    """

    def __init__(self):
        """Initialize empty error list."""
        self._lock = threading.Lock()
        self._records: List[ErrorRecord] = []

    def add(self, err: BaseException) -> ErrorRecord:
        """
        Wrap an error at the caller's site and append it.

        The call site is captured before the lock is taken, so only the
        append itself is serialized.

        Args:
            err: Any exception, including an existing error record

        Returns:
            The appended error record
        """
        from errtrace.wrap import LIST_ADD_DEPTH, wrap_to_depth

        record = wrap_to_depth(err, LIST_ADD_DEPTH)

        with self._lock:
            self._records.append(record)
            count = len(self._records)

        logger.debug(
            f"Error added to list: {record.message}",
            extra={
                "error_file": record.file,
                "error_operation": record.operation,
                "error_line": record.line,
                "list_size": count,
            }
        )

        return record

    @property
    def records(self) -> Tuple[ErrorRecord, ...]:
        """Snapshot of the records in append order."""
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(self.records)
