"""
Showcase Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions, each tagged with an ErrorKind.
Why:   Services translate SDK and driver failures into a small, explicit set
       of error kinds. One global handler (main.py) turns any of them into the
       same JSON shape, so clients only ever parse one error format.
How:   Each exception carries a message, a kind, an HTTP status and an
       optional context dict (logged, never returned).
Who:   Raised by services; labelled by routes; serialised by main.py.

Exception Hierarchy:
    ShowcaseError (base, internal_error)      → 500
    ├── MediaUploadError  (upload_failed)     → 500
    ├── RecordStoreError  (store_failed)      → 500
    └── MalformedSubmissionError (validation_failed) → 400

Response shape (every kind):
    {
        "message": "Error uploading data",       ← what the request was doing
        "error":   "Invalid image file",         ← raw failure text
        "kind":    "upload_failed"
    }
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional


class ErrorKind(str, Enum):
    """Machine-readable failure categories surfaced in the `kind` field."""

    UPLOAD_FAILED = "upload_failed"
    STORE_FAILED = "store_failed"
    VALIDATION_FAILED = "validation_failed"
    INTERNAL_ERROR = "internal_error"


class ShowcaseError(Exception):
    """
    Base exception for all Showcase application errors.

    Attributes:
        message:     Raw failure text (returned to the client as `error`)
        summary:     What the request was doing when it failed (returned as
                     `message`); set by routes through reported_as()
        context:     Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
        summary: Optional[str] = None,
    ):
        self.message = message
        self.context = context or {}
        self.summary = summary
        super().__init__(self.message)


class MediaUploadError(ShowcaseError):
    """
    Raised when the media-hosting service rejects a payload or the transfer fails.

    HTTP: 500. The public contract reports upstream upload failures as server
    errors. Already-uploaded images from the same request are left in place.
    """

    kind = ErrorKind.UPLOAD_FAILED

    def __init__(
        self,
        message: str = "Image upload failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class RecordStoreError(ShowcaseError):
    """
    Raised when the document database is unreachable or rejects an operation.

    Covers both "never connected" and driver-level failures (timeouts, write
    errors, lost connections).
    """

    kind = ErrorKind.STORE_FAILED

    def __init__(
        self,
        message: str = "Record store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedSubmissionError(ShowcaseError):
    """
    Raised when the request body cannot be turned into a submission.

    When: Unparseable multipart body, a file under an unknown field name,
          or more than one file for the same image field.
    HTTP: 400 Bad Request (the client can fix it)
    """

    kind = ErrorKind.VALIDATION_FAILED
    status_code = 400

    def __init__(
        self,
        message: str = "Malformed submission",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


@contextmanager
def reported_as(summary: str) -> Iterator[None]:
    """
    Label every failure raised inside the block with a request-level summary.

    ShowcaseErrors keep their kind; anything else becomes an internal_error
    carrying the original message text.

    Example:
        with reported_as("Error fetching data"):
            return await service.list_records()
    """
    try:
        yield
    except ShowcaseError as exc:
        exc.summary = summary
        raise
    except Exception as exc:
        raise ShowcaseError(
            message=str(exc) or type(exc).__name__,
            context={"error_type": type(exc).__name__},
            summary=summary,
        ) from exc
