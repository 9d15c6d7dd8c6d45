"""Exception hierarchy for the record editor.

Field validation problems are not exceptions: they are reported as an
error mapping (see record_editor.validation). Exceptions here cover the
backend transport and programming mistakes.
"""

from typing import Any


class RecordEditorError(Exception):
    """Base exception for all record editor errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(RecordEditorError):
    """The bank service could not be reached or answered with an error.

    Covers network failures, timeouts, non-2xx statuses and response
    bodies that do not parse into records.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class UnknownFieldError(RecordEditorError, KeyError):
    """Raised when setting a form field that does not exist."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Unknown form field: {field_name!r}")
        self.field_name = field_name

    def __str__(self) -> str:
        return self.message
