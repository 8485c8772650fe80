"""Exceptions raised by the scheduling core."""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for scheduling errors."""


class InvalidRecordError(SchedulingError):
    """Raised when a stored or sourced record fails validation."""

    def __init__(self, kind: str, reason: str, record_id: str | None = None):
        self.kind = kind
        self.reason = reason
        self.record_id = record_id
        msg = f"Invalid {kind}"
        if record_id:
            msg += f" '{record_id}'"
        msg += f": {reason}"
        super().__init__(msg)


class SourceUnavailableError(SchedulingError):
    """Raised when a roster or template source cannot be read or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Source '{source}' unavailable: {reason}")
