"""
Human-readable rendering of error records.

Records render as labelled line blocks; an aggregate root renders its own
header followed by one block per child record, in list order.
"""

import json
import os
from typing import TYPE_CHECKING, Iterable, Sequence

from errtrace.config import settings

if TYPE_CHECKING:
    from errtrace.models.error import ErrorRecord


NO_ERRORS_MESSAGE = "No errors in ErrorList"


def _path(file: str) -> str:
    if settings.short_paths and file:
        return os.path.basename(file)
    return file


def _quote(cause: object) -> str:
    return json.dumps(str(cause), ensure_ascii=False)


def render_trace(entries: Iterable[str]) -> str:
    """
    Render trace entries, one per line, inside brackets.
    
    Args:
        entries: Formatted trace entries, oldest first
        
    Returns:
        Trace block
    """
    lines = ["Trace: ["]
    lines.extend(entries)
    lines.append("]")
    return "\n".join(lines)


def _trace_of(record: "ErrorRecord") -> str:
    return render_trace(
        f"File: {_path(hop.file)}; Operation: {hop.operation}; Line: {hop.line};"
        for hop in record.hops
    )


def render_record(record: "ErrorRecord") -> str:
    """
    Render a single error record.
    
    Args:
        record: Record to render
        
    Returns:
        Block with location, message, cause and trace
    """
    return "\n".join([
        f"File: {_path(record.file)}",
        f"Operation: {record.operation}",
        f"Line: {record.line}",
        f"Message: {record.message}",
        f"Error: {_quote(record.cause)}",
        _trace_of(record),
    ])


def render_aggregate(root: "ErrorRecord", children: Sequence["ErrorRecord"]) -> str:
    """
    Render an aggregate root and its children.
    
    Args:
        root: Aggregate root record
        children: Snapshot of the root's error list
        
    Returns:
        Header block plus one block per child, or ``NO_ERRORS_MESSAGE``
        when nothing has been added yet
    """
    if not children:
        return NO_ERRORS_MESSAGE
    
    blocks = [
        "\n".join([
            f"File: {_path(root.file)}",
            f"Operation: {root.operation}",
            f"Message: {root.message}",
            f"Error: {_quote(root.cause)}",
            _trace_of(root),
        ]),
        "ErrorList: [",
    ]
    
    for child in children:
        blocks.append(render_record(child) + ",")
    
    blocks.append("]")
    return "\n".join(blocks)
