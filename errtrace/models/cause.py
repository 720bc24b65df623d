"""Cause kinds for error records."""

from enum import Enum


class CauseKind(str, Enum):
    """What the ``cause`` of an error record stands for."""

    FOREIGN = "foreign"  # A real error wrapped on first contact
    LIST = "list"  # Aggregate root holding an ErrorList
    TEST = "test"  # Marker record for matching in tests


SENTINEL_MESSAGES = {
    CauseKind.LIST: "Error List",
    CauseKind.TEST: "Test Error",
}


class SentinelError(Exception):
    """Stand-in cause for records that do not wrap a real error."""

    def __init__(self, kind: CauseKind):
        if kind not in SENTINEL_MESSAGES:
            raise ValueError(f"No sentinel for cause kind {kind!r}")
        self.kind = kind
        super().__init__(SENTINEL_MESSAGES[kind])
