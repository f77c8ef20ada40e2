"""
Structured error types for funky.

Absence and failure are values in funky, not exceptions: ``Absent()`` and
``Failure(reason)`` flow through every combinator untouched. Exceptions are
reserved for two things only:

- **Broken assertions:** ``get_value_or_fail`` was called on something that
  was not present/successful. This raises ``NotFoundError``.
- **Programming errors:** a handler that is not callable, or a value that is
  not a ``Maybe`` handed to ``maybe.matches``.

Every exception extends ``FunkyError`` so it carries a category, a structured
context and can be serialized for logging.

Manifesto:
    - **Two channels:** Reasons travel inside ``Failure``; faults are raised
    - **Distinguishable faults:** ``NotFoundError`` is never confused with a
      reason value, callers and tests can catch it specifically
    - **No lost context:** The reasons a failed trial carried are attached to
      the ``NotFoundError`` raised while extracting it

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────┐
        │                       FunkyError                         │
        │             (category, context, cause)                   │
        ├─────────────────────────────────────────────────────────┤
        │  NotFoundError       ShapeError         HandlerError     │
        │  (NOT_FOUND)         (SHAPE)            (HANDLER)        │
        │  + LookupError       + TypeError        + TypeError      │
        └─────────────────────────────────────────────────────────┘

        FailureReason.NOT_FOUND   reserved default failure reason

Examples:
    >>> error = NotFoundError("value is absent", operation="maybe.get_value_or_fail")
    >>> error.category
    <ErrorCategory.NOT_FOUND: 'NOT_FOUND'>
    >>> error.to_dict()["context"]
    {'operation': 'maybe.get_value_or_fail'}
    >>> isinstance(error, LookupError)
    True

Tags:
    error-handling, exception-hierarchy, error-context, funky
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for classification in logs."""

    NOT_FOUND = "NOT_FOUND"  # Asserted presence/success did not hold
    SHAPE = "SHAPE"          # Value is not of the expected container type
    HANDLER = "HANDLER"      # Handler argument is not callable
    INTERNAL = "INTERNAL"    # Bugs, unexpected state


class FailureReason(str, Enum):
    """
    Reserved failure reasons.

    Reasons are opaque caller values; funky itself only ever produces one:
    ``NOT_FOUND``, used when ``None`` is normalized into a trial and as the
    default argument of ``trial.failure()``.

    Examples:
        >>> FailureReason.NOT_FOUND == "NOT_FOUND"
        True
    """

    NOT_FOUND = "NOT_FOUND"


NOT_FOUND = FailureReason.NOT_FOUND


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a ``FunkyError``.

    Attributes:
        operation: Name of the operation that raised (e.g. ``trial.get_value_or_fail``)
        reasons: Failure reasons carried by the value being extracted, if any
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    reasons: list[Any] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.operation is not None:
            result["operation"] = self.operation
        if self.reasons is not None:
            result["reasons"] = [_reason_repr(r) for r in self.reasons]
        if self.metadata:
            result.update(self.metadata)
        return result


def _reason_repr(reason: Any) -> Any:
    if isinstance(reason, Enum):
        return reason.value
    if isinstance(reason, (str, int, float, bool)) or reason is None:
        return reason
    return repr(reason)


class FunkyError(Exception):
    """
    Base exception for all funky faults.

    Subclasses set ``default_category``. The message is kept on ``message``
    and the optional underlying exception on ``cause`` (also chained as
    ``__cause__`` for tracebacks).

    Examples:
        >>> error = FunkyError("unexpected state")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(operation="maybe.flatten").context.operation
        'maybe.flatten'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        reasons: list[Any] | None = None,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        if operation is not None:
            self.context.operation = operation
        if reasons is not None:
            self.context.reasons = list(reasons)
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FunkyError:
        """
        Add context to this error (fluent API).

        Usage:
            raise FunkyError("Failed").with_context(operation="trial.collect", index=3)
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class NotFoundError(FunkyError, LookupError):
    """
    A value asserted to be present (or successful) was not.

    Raised only by ``maybe.get_value_or_fail`` and ``trial.get_value_or_fail``.
    It is a ``LookupError`` so generic ``except LookupError`` handlers see it,
    but it never appears as a reason inside a ``Failure``.
    """

    default_category = ErrorCategory.NOT_FOUND


class ShapeError(FunkyError, TypeError):
    """A value that is not a ``Present``/``Absent`` was dispatched as a Maybe."""

    default_category = ErrorCategory.SHAPE


class HandlerError(FunkyError, TypeError):
    """A handler, mapper, predicate or folder argument is not callable."""

    default_category = ErrorCategory.HANDLER


def is_not_found(error: Exception) -> bool:
    """Check if an error is the fatal not-found signal."""
    return isinstance(error, NotFoundError)


def ensure_callable(handler: Any, operation: str, role: str = "handler") -> None:
    """Raise ``HandlerError`` unless ``handler`` is callable."""
    if not callable(handler):
        raise HandlerError(
            f"{operation} expects a callable {role}, got {type(handler).__name__}",
            operation=operation,
        ).with_context(role=role)


__all__ = [
    "ErrorCategory",
    "FailureReason",
    "NOT_FOUND",
    "ErrorContext",
    "FunkyError",
    "NotFoundError",
    "ShapeError",
    "HandlerError",
    "is_not_found",
    "ensure_callable",
]
