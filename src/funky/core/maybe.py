"""
Maybe: a value that may be absent.

A ``Maybe[T]`` is either ``Present(value)`` or ``Absent()``. Absence is not an
error here: it is an expected outcome with its own combinator vocabulary, so
callers never need ``None`` sentinels to say "nothing there".

Every combinator in this module is written in terms of one case split,
``matches(maybe, on_present, on_absent)``. It is the only place that looks at
the variant, so the closed-world check (and the ``ShapeError`` for anything
that is not a Maybe) lives in exactly one spot.

Manifesto:
    - **Absence is a value:** ``Absent()`` flows through map/bind/filter untouched
    - **One dispatch point:** Every operation goes through ``matches``
    - **Immutable:** Frozen dataclasses; each combinator returns a new value
    - **Explicit escape hatch:** ``get_value_or_fail`` raises ``NotFoundError``
      and is the only operation that leaves the combinator style

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      Maybe[T]                                │
        │                    (Type Alias)                              │
        ├──────────────────┬──────────────────┬───────────────────────┤
        │   Present[T]     │     Absent       │   Functions           │
        │  • value: T      │   (no fields)    │                       │
        ├──────────────────┴──────────────────┼───────────────────────┤
        │  matches(m, on_present, on_absent)  │ • bind / map / filter │
        │           (single case split)       │ • exists / fold/count │
        │                                     │ • flatten/flatten_all │
        │                                     │ • list_first/single   │
        │                                     │ • to_trial            │
        └─────────────────────────────────────┴───────────────────────┘

Examples:
    Module-level functions:

    >>> from funky.core import maybe
    >>> maybe.map(maybe.present(41), lambda x: x + 1)
    Present(42)
    >>> maybe.fold(maybe.present(32), lambda acc, x: acc + x, 10)
    42
    >>> maybe.fold(maybe.absent(), lambda acc, x: acc + x, 10)
    10

    Fluent chaining:

    >>> maybe.present(42).filter(lambda x: x > 100)
    Absent()
    >>> maybe.list_first([3, 4]).map(str).get_value_or_fail()
    '3'

    Pattern matching:

    >>> match maybe.list_single([7]):
    ...     case Present(value):
    ...         print(value)
    ...     case Absent():
    ...         print("nothing")
    7

Guardrails:
    ❌ DON'T: Call get_value_or_fail() to test for presence
    ✅ DO: Use matches(), fold() or get_value_or() and keep absence a value

    ❌ DON'T: Expect flatten() to collapse more than one level
    ✅ DO: Use flatten_all() for arbitrarily nested Maybes

Tags:
    maybe, option, functional-programming, monadic, funky
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Sequence, TypeVar

from funky.core.errors import NotFoundError, ShapeError, ensure_callable
from funky.core.logging import get_logger

if TYPE_CHECKING:
    from funky.core.trial import Trial


T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")
A = TypeVar("A")

logger = get_logger(__name__)


class _MaybeOps:
    """Fluent methods shared by both variants; each delegates to the module function."""

    __slots__ = ()

    def is_present(self) -> bool:
        return is_present(self)

    def is_absent(self) -> bool:
        return is_absent(self)

    def matches(self, on_present: Callable[[Any], R], on_absent: Callable[[], R]) -> R:
        return matches(self, on_present, on_absent)

    def bind(self, binder: Callable[[Any], Maybe[U]]) -> Maybe[U]:
        return bind(self, binder)

    def map(self, mapper: Callable[[Any], U]) -> Maybe[U]:
        return map(self, mapper)

    def exists(self, predicate: Callable[[Any], bool]) -> bool:
        return exists(self, predicate)

    def filter(self, predicate: Callable[[Any], bool]) -> Maybe[Any]:
        return filter(self, predicate)

    def fold(self, folder: Callable[[A, Any], A], initial: A) -> A:
        return fold(self, folder, initial)

    def count(self) -> int:
        return count(self)

    def flatten(self) -> Maybe[Any]:
        return flatten(self)

    def flatten_all(self) -> Maybe[Any]:
        return flatten_all(self)

    def get_value_or_fail(self) -> Any:
        return get_value_or_fail(self)

    def get_value_or(self, default: Any) -> Any:
        return get_value_or(self, default)

    def to_trial(self, reason: Any) -> Trial[Any, Any]:
        return to_trial(self, reason)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return matches(
            self,
            lambda value: {"present": True, "value": value},
            lambda: {"present": False},
        )


@dataclass(frozen=True, slots=True)
class Present(_MaybeOps, Generic[T]):
    """
    A present value.

    Unlike ``Optional[T]``, ``Present`` always carries its payload, even when
    the payload is ``None`` or another Maybe. Equality is structural.

    Examples:
        >>> Present(42) == Present(42)
        True
        >>> Present(Present(1)).flatten()
        Present(1)
    """

    value: T

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


@dataclass(frozen=True, slots=True)
class Absent(_MaybeOps):
    """
    The absence of a value.

    ``Absent`` has no fields, so every instance compares equal to every other;
    ``absent()`` hands out a shared one.
    """

    def __repr__(self) -> str:
        return "Absent()"


# Type alias for Maybe
Maybe = Present[T] | Absent

_ABSENT = Absent()


# =============================================================================
# CONSTRUCTION AND DISPATCH
# =============================================================================


def present(value: T) -> Maybe[T]:
    """Wrap ``value`` as ``Present``."""
    return Present(value)


def absent() -> Maybe[Any]:
    """Return the canonical ``Absent`` value."""
    return _ABSENT


def is_optional_shape(value: Any) -> bool:
    """Return whether ``value`` is a Maybe at all (``Present`` or ``Absent``)."""
    return isinstance(value, (Present, Absent))


is_maybe = is_optional_shape


def is_present(value: Any) -> bool:
    """Return whether ``value`` is ``Present``; ``False`` for non-Maybe values."""
    return isinstance(value, Present)


def is_absent(value: Any) -> bool:
    """Return whether ``value`` is ``Absent``; ``False`` for non-Maybe values."""
    return isinstance(value, Absent)


def matches(
    maybe: Maybe[T],
    on_present: Callable[[T], R],
    on_absent: Callable[[], R],
) -> R:
    """
    Call exactly one handler depending on the variant.

    This is the single case split of the module: ``on_present`` receives the
    wrapped value, ``on_absent`` receives nothing.

    Examples:
        >>> matches(Present(2), lambda x: x * 10, lambda: 0)
        20
        >>> matches(Absent(), lambda x: x * 10, lambda: 0)
        0

    Raises:
        HandlerError: if either handler is not callable
        ShapeError: if ``maybe`` is neither ``Present`` nor ``Absent``
    """
    ensure_callable(on_present, "maybe.matches", "on_present")
    ensure_callable(on_absent, "maybe.matches", "on_absent")
    match maybe:
        case Present(value):
            return on_present(value)
        case Absent():
            return on_absent()
        case _:
            raise ShapeError(
                f"expected Present or Absent, got {type(maybe).__name__}",
                operation="maybe.matches",
            )


dispatch = matches


# =============================================================================
# COMBINATORS
# =============================================================================


def bind(maybe: Maybe[T], binder: Callable[[T], Maybe[U]]) -> Maybe[U]:
    """
    Apply ``binder`` to a present value and return its result as such.

    Unlike ``map``, the binder decides whether the result is present.

    Examples:
        >>> bind(Present(42), lambda x: Present(x + 1))
        Present(43)
        >>> bind(Present(42), lambda _: Absent())
        Absent()
        >>> bind(Absent(), lambda x: Present(x + 1))
        Absent()
    """
    ensure_callable(binder, "maybe.bind", "binder")
    return matches(maybe, binder, absent)


def map(maybe: Maybe[T], mapper: Callable[[T], U]) -> Maybe[U]:
    """Apply ``mapper`` to a present value and wrap the result as ``Present``."""
    ensure_callable(mapper, "maybe.map", "mapper")
    return matches(maybe, lambda value: Present(mapper(value)), absent)


def exists(maybe: Maybe[T], predicate: Callable[[T], bool]) -> bool:
    """Return ``predicate(value)`` for a present value, ``False`` when absent."""
    ensure_callable(predicate, "maybe.exists", "predicate")
    return matches(maybe, lambda value: bool(predicate(value)), lambda: False)


def filter(maybe: Maybe[T], predicate: Callable[[T], bool]) -> Maybe[T]:
    """Keep a present value only if ``predicate`` holds for it."""
    ensure_callable(predicate, "maybe.filter", "predicate")
    return matches(
        maybe,
        lambda value: maybe if predicate(value) else _ABSENT,
        absent,
    )


def fold(maybe: Maybe[T], folder: Callable[[A, T], A], initial: A) -> A:
    """Return ``folder(initial, value)`` when present, else ``initial`` unchanged."""
    ensure_callable(folder, "maybe.fold", "folder")
    return matches(maybe, lambda value: folder(initial, value), lambda: initial)


def count(maybe: Maybe[Any]) -> int:
    """Return 1 for ``Present``, 0 for ``Absent``."""
    return matches(maybe, lambda _: 1, lambda: 0)


def flatten(maybe: Maybe[Any]) -> Maybe[Any]:
    """
    Remove exactly one level of nesting.

    ``Present(Present(x))`` becomes ``Present(x)`` and ``Present(Absent())``
    becomes ``Absent()``. Deeper nesting keeps its inner layers; use
    ``flatten_all`` to collapse everything.

    Examples:
        >>> flatten(Present(42))
        Present(42)
        >>> flatten(Present(Present(Present(42))))
        Present(Present(42))
    """
    return matches(
        maybe,
        lambda value: value if is_optional_shape(value) else maybe,
        absent,
    )


def flatten_all(maybe: Maybe[Any]) -> Maybe[Any]:
    """
    Strip every nested ``Present`` until the payload is no longer a Maybe.

    An ``Absent`` at any depth makes the whole result ``Absent``.

    Examples:
        >>> flatten_all(Present(Present(Present(42))))
        Present(42)
        >>> flatten_all(Present(Present(Absent())))
        Absent()
    """
    current = maybe
    while True:
        inner = matches(current, lambda value: value, absent)
        if not is_optional_shape(inner):
            return current
        if is_absent(inner):
            return _ABSENT
        current = inner


# =============================================================================
# EXTRACTION AND CONVERSION
# =============================================================================


def get_value_or_fail(maybe: Maybe[T]) -> T:
    """
    Return the present value or raise ``NotFoundError``.

    Only for call sites that already established presence. The error is not
    a reason value and never ends up inside a ``Failure``.

    Raises:
        NotFoundError: if ``maybe`` is ``Absent``
    """

    def _fail() -> T:
        logger.debug("maybe_value_not_found", operation="maybe.get_value_or_fail")
        raise NotFoundError(
            "expected a present value, got Absent()",
            operation="maybe.get_value_or_fail",
        )

    return matches(maybe, lambda value: value, _fail)


def get_value_or(maybe: Maybe[T], default: T) -> T:
    """Return the present value, or ``default`` when absent."""
    return matches(maybe, lambda value: value, lambda: default)


def to_trial(maybe: Maybe[T], reason: Any) -> Trial[T, Any]:
    """
    Convert to a trial: ``Present(v) -> Success(v)``, ``Absent() -> Failure(reason)``.

    ``reason`` is required because absence carries no reason of its own.
    """
    from funky.core.bridge import maybe_to_trial

    return maybe_to_trial(maybe, reason)


to_result = to_trial


def from_nullable(value: T | None) -> Maybe[T]:
    """
    Convert a Python optional into a Maybe: ``None -> Absent()``, else ``Present``.

    Examples:
        >>> from_nullable({"a": 1}.get("a"))
        Present(1)
        >>> from_nullable({"a": 1}.get("b"))
        Absent()
    """
    if value is None:
        return _ABSENT
    return Present(value)


# =============================================================================
# LIST HELPERS
# =============================================================================


def list_first(items: Sequence[T]) -> Maybe[T]:
    """``Present`` of the first element, ``Absent`` for an empty sequence."""
    if len(items) == 0:
        return _ABSENT
    return Present(items[0])


def list_single(items: Sequence[T]) -> Maybe[T]:
    """``Present`` only if the sequence has exactly one element."""
    if len(items) == 1:
        return Present(items[0])
    return _ABSENT


__all__ = [
    "Maybe",
    "Present",
    "Absent",
    "present",
    "absent",
    "is_optional_shape",
    "is_maybe",
    "is_present",
    "is_absent",
    "matches",
    "dispatch",
    "bind",
    "map",
    "exists",
    "filter",
    "fold",
    "count",
    "flatten",
    "flatten_all",
    "get_value_or_fail",
    "get_value_or",
    "to_trial",
    "to_result",
    "from_nullable",
    "list_first",
    "list_single",
]
