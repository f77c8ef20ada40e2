"""
Conversions between Maybe and Trial.

::

    Maybe                      Trial
    ─────────────────          ──────────────────────────────
    Present(v)        ──────>  Success(v)
    Absent()          ──────>  Failure(reason)   (reason supplied by caller)

    Present(v)        <──────  Success(v)
    Absent()          <──────  Failure(...) / Failures(...)  (reasons dropped)

Both directions are pure and total. Going from Trial to Maybe is lossy: the
reasons of a failure are discarded. Going the other way needs a reason from
the caller because absence has none.

``maybe.to_trial`` and ``trial.to_maybe`` delegate here.
"""

from __future__ import annotations

from typing import Any, TypeVar

from funky.core import maybe as _maybe
from funky.core import trial as _trial

T = TypeVar("T")


def maybe_to_trial(value: _maybe.Maybe[T], reason: Any) -> _trial.Trial[T, Any]:
    """``Present(v) -> Success(v)``; ``Absent() -> Failure(reason)``."""
    return _maybe.matches(value, _trial.success, lambda: _trial.failure(reason))


def trial_to_maybe(raw: Any) -> _maybe.Maybe[Any]:
    """``Success(v) -> Present(v)``; any failure ``-> Absent()``."""
    return _trial.matches(raw, _maybe.present, lambda _: _maybe.absent())


__all__ = ["maybe_to_trial", "trial_to_maybe"]
