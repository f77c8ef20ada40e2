"""
Trial: the outcome of an operation that may fail with one or more reasons.

A trial is logically either a success carrying a value or a failure carrying
a sequence of reasons. Reasons are opaque caller values: symbolic codes,
strings, exceptions-as-values, anything.

Three variants implement the two outcomes:

- ``Success(value)``
- ``Failure(reason)``: the common single-reason failure
- ``Failures(reasons)``: zero, two or more reasons

``Failure(r)`` and ``Failures([r])`` are indistinguishable through every
operation: failure handlers always receive a list of reasons.

Normalization:
    Trial functions accept *raw* inputs as well as variants. ``normalize``
    maps every input to its canonical variant, and ``matches`` normalizes
    before it dispatches, so the rest of the module never looks at shapes.

    ::

        raw input                 canonical form
        ─────────────────────     ──────────────────────
        None                  ──> Failure(NOT_FOUND)
        Success(v)            ──> Success(v)
        Failure(r)            ──> Failure(r)
        Failures([])          ──> Failures([])
        Failures([r])         ──> Failure(r)
        Failures([r1, r2])    ──> Failures([r1, r2])
        anything else v       ──> Success(v)

Manifesto:
    - **Total normalization:** No raw input is unrepresentable
    - **One dispatch point:** ``matches`` is the only case split
    - **Short-circuit, never merge:** ``bind``/``map`` on a failure return the
      same reasons and never call the function
    - **Faults are not reasons:** ``get_value_or_fail`` raises ``NotFoundError``,
      it never produces a ``Failure``

Examples:
    >>> from funky.core import trial
    >>> trial.normalize(42)
    Success(42)
    >>> trial.normalize(None)
    Failure(<FailureReason.NOT_FOUND: 'NOT_FOUND'>)
    >>> trial.failures(["only"])
    Failure('only')
    >>> trial.map(trial.success(20), lambda x: x * 2 + 2)
    Success(42)
    >>> trial.bind(trial.failure("bad"), lambda x: trial.success(x + 1))
    Failure('bad')
    >>> trial.matches(trial.failures(["a", "b"]), lambda v: v, lambda rs: rs)
    ['a', 'b']

Guardrails:
    ❌ DON'T: Raise exceptions from binders to signal expected failures
    ✅ DO: Return ``failure(reason)`` from the binder

    ❌ DON'T: Compare ``Failures(...)`` built by hand against ``failure(r)``
    ✅ DO: Build multi-reason failures with ``failures()``, which normalizes

Tags:
    trial, result-pattern, error-handling, functional-programming, funky
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

from funky.core.errors import NOT_FOUND, NotFoundError, ensure_callable
from funky.core.logging import get_logger
from funky.core.maybe import Maybe


T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")  # reason type
V = TypeVar("V")  # handler return type

logger = get_logger(__name__)


class _TrialOps:
    """Fluent methods shared by all variants; each delegates to the module function."""

    __slots__ = ()

    def is_success(self) -> bool:
        return is_success(self)

    def is_failure(self) -> bool:
        return is_failure(self)

    def matches(
        self, on_success: Callable[[Any], V], on_failure: Callable[[list[Any]], V]
    ) -> V:
        return matches(self, on_success, on_failure)

    def bind(self, binder: Callable[[Any], Any]) -> Any:
        return bind(self, binder)

    def map(self, mapper: Callable[[Any], U]) -> Trial[U, Any]:
        return map(self, mapper)

    def to_maybe(self) -> Maybe[Any]:
        return to_maybe(self)

    def get_value_or_fail(self) -> Any:
        return get_value_or_fail(self)

    def get_value_or(self, default: Any) -> Any:
        return get_value_or(self, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return matches(
            self,
            lambda value: {"ok": True, "value": value},
            lambda reasons: {"ok": False, "reasons": reasons},
        )


@dataclass(frozen=True, slots=True)
class Success(_TrialOps, Generic[T]):
    """
    A successful outcome carrying ``value``.

    Examples:
        >>> Success(10).map(lambda x: x + 1)
        Success(11)
    """

    value: T

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True)
class Failure(_TrialOps, Generic[R]):
    """
    A failed outcome with a single ``reason``.

    Failure handlers see it as the one-element list ``[reason]``.
    """

    reason: R

    def __repr__(self) -> str:
        return f"Failure({self.reason!r})"


@dataclass(frozen=True, slots=True)
class Failures(_TrialOps, Generic[R]):
    """
    A failed outcome with any number of ``reasons``.

    ``reasons`` is frozen to a tuple on construction, so the value stays
    immutable (and hashable when the reasons are). An empty ``Failures`` is a
    valid failure without reasons.
    """

    reasons: tuple[R, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "reasons", tuple(self.reasons))

    def __repr__(self) -> str:
        return f"Failures({list(self.reasons)!r})"


# Type alias for Trial
Trial = Success[T] | Failure[R] | Failures[R]


# =============================================================================
# CONSTRUCTION, NORMALIZATION AND DISPATCH
# =============================================================================


def success(value: T) -> Trial[T, Any]:
    """Wrap ``value`` as ``Success``."""
    return Success(value)


def failure(reason: R = NOT_FOUND) -> Trial[Any, R]:
    """Single-reason failure; the reason defaults to ``NOT_FOUND``."""
    return Failure(reason)


def failures(reasons: Iterable[R]) -> Trial[Any, R]:
    """
    Failure with any number of reasons, normalized.

    Examples:
        >>> failures(["a", "b"])
        Failures(['a', 'b'])
        >>> failures(["a"])
        Failure('a')
        >>> failures([])
        Failures([])
    """
    return normalize(Failures(tuple(reasons)))


def normalize(raw: Any) -> Trial[Any, Any]:
    """
    Map any raw input to its canonical trial variant.

    Total: ``None`` becomes ``Failure(NOT_FOUND)``, variants stay as they are
    (except a one-reason ``Failures``, which becomes ``Failure``), and every
    other value becomes ``Success(value)``. Idempotent.
    """
    match raw:
        case None:
            logger.debug("trial_normalized_none", reason=NOT_FOUND.value)
            return Failure(NOT_FOUND)
        case Success() | Failure():
            return raw
        case Failures(reasons=(reason,)):
            return Failure(reason)
        case Failures():
            return raw
        case _:
            return Success(raw)


def is_trial(raw: Any) -> bool:
    """Always ``True``: every value is an accepted raw trial."""
    return True


def matches(
    raw: Any,
    on_success: Callable[[T], V],
    on_failure: Callable[[list[Any]], V],
) -> V:
    """
    Normalize ``raw`` and call exactly one handler.

    ``on_success`` receives the value; ``on_failure`` always receives a list of
    reasons (one element for ``Failure``, possibly empty for ``Failures([])``).

    Examples:
        >>> matches(None, lambda v: v, lambda rs: rs)
        [<FailureReason.NOT_FOUND: 'NOT_FOUND'>]
        >>> matches(42, lambda v: v, lambda rs: rs)
        42
        >>> matches(Failures([]), lambda v: v, lambda rs: rs)
        []

    Raises:
        HandlerError: if either handler is not callable
    """
    ensure_callable(on_success, "trial.matches", "on_success")
    ensure_callable(on_failure, "trial.matches", "on_failure")
    match normalize(raw):
        case Success(value):
            return on_success(value)
        case Failure(reason):
            return on_failure([reason])
        case Failures(reasons):
            return on_failure(list(reasons))


dispatch = matches


def is_success(raw: Any) -> bool:
    """Return whether ``raw`` normalizes to ``Success``."""
    return matches(raw, lambda _: True, lambda _: False)


def is_failure(raw: Any) -> bool:
    """Return whether ``raw`` normalizes to a failure."""
    return matches(raw, lambda _: False, lambda _: True)


is_ok = is_success
is_error = is_failure


# =============================================================================
# COMBINATORS
# =============================================================================


def bind(raw: Any, binder: Callable[[T], Any]) -> Any:
    """
    Apply ``binder`` to a success value and return its result as such.

    The binder's result is not wrapped: a binder returning a plain value
    yields that plain value, which the next trial operation normalizes as a
    raw input. On failure the original reasons are re-wrapped unchanged and
    ``binder`` is not called.

    Examples:
        >>> bind(Success(42), lambda x: failure("error2"))
        Failure('error2')
        >>> bind(Failure("error1"), lambda x: failure("error2"))
        Failure('error1')
    """
    ensure_callable(binder, "trial.bind", "binder")
    return matches(raw, binder, failures)


def map(raw: Any, mapper: Callable[[T], U]) -> Trial[U, Any]:
    """Apply ``mapper`` to a success value and wrap the result as ``Success``."""
    ensure_callable(mapper, "trial.map", "mapper")
    return matches(raw, lambda value: Success(mapper(value)), failures)


# =============================================================================
# EXTRACTION AND CONVERSION
# =============================================================================


def to_maybe(raw: Any) -> Maybe[Any]:
    """``Success(v) -> Present(v)``; any failure ``-> Absent()``, reasons discarded."""
    from funky.core.bridge import trial_to_maybe

    return trial_to_maybe(raw)


def get_value_or_fail(raw: Any) -> Any:
    """
    Return the success value or raise ``NotFoundError``.

    The reasons of the failure are kept on ``error.context.reasons``.

    Raises:
        NotFoundError: if ``raw`` normalizes to a failure
    """

    def _fail(reasons: list[Any]) -> Any:
        logger.debug(
            "trial_value_not_found",
            operation="trial.get_value_or_fail",
            reason_count=len(reasons),
        )
        raise NotFoundError(
            f"expected a success, got a failure with {len(reasons)} reason(s)",
            operation="trial.get_value_or_fail",
            reasons=reasons,
        )

    return matches(raw, lambda value: value, _fail)


def get_value_or(raw: Any, default: Any) -> Any:
    """Return the success value, or ``default`` on any failure."""
    return matches(raw, lambda value: value, lambda _: default)


def try_trial(f: Callable[[], T]) -> Trial[T, Exception]:
    """
    Call ``f`` and capture its outcome.

    Returns ``Success(f())``, or ``Failure(exc)`` when ``f`` raises an
    ``Exception``. The exception becomes an ordinary reason value, except
    ``NotFoundError``, which is re-raised: a fault is never a reason.

    Examples:
        >>> import json
        >>> try_trial(lambda: json.loads('{"a": 1}'))
        Success({'a': 1})
        >>> try_trial(lambda: json.loads('invalid')).is_failure()
        True
    """
    ensure_callable(f, "trial.try_trial", "function")
    try:
        return Success(f())
    except NotFoundError:
        raise
    except Exception as e:
        return Failure(e)


# =============================================================================
# BATCH HELPERS
# =============================================================================


def collect(raws: Iterable[Any]) -> Trial[list[Any], Any]:
    """
    Collect trials into a trial of a list (fail-fast).

    Returns ``Success([values...])`` when every input succeeds, otherwise the
    first failure, normalized, with its reasons unchanged.

    Examples:
        >>> collect([1, Success(2), 3])
        Success([1, 2, 3])
        >>> collect([Success(1), Failure("a"), Failure("b")])
        Failure('a')
    """
    values: list[Any] = []
    for raw in raws:
        current = normalize(raw)
        if is_failure(current):
            return current
        values.append(get_value_or_fail(current))
    return Success(values)


def partition(raws: Iterable[Any]) -> tuple[list[Any], list[Any]]:
    """
    Split trials into success values and failure reasons, both in input order.

    Examples:
        >>> partition([Success(1), Failure("a"), Failures(["b", "c"]), 4])
        ([1, 4], ['a', 'b', 'c'])
    """
    values: list[Any] = []
    reasons: list[Any] = []
    for raw in raws:
        matches(raw, values.append, reasons.extend)
    return values, reasons


__all__ = [
    "Trial",
    "Success",
    "Failure",
    "Failures",
    "success",
    "failure",
    "failures",
    "normalize",
    "is_trial",
    "matches",
    "dispatch",
    "is_success",
    "is_failure",
    "is_ok",
    "is_error",
    "bind",
    "map",
    "to_maybe",
    "get_value_or_fail",
    "get_value_or",
    "try_trial",
    "collect",
    "partition",
]
