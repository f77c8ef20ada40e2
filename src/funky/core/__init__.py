"""funky core -- Maybe and Trial containers with a fixed set of combinators.

Architecture::

    errors.py      FunkyError, NotFoundError, FailureReason.NOT_FOUND
    settings.py    FunkySettings (FUNKY_* environment variables)
    logging.py     structlog configuration (configure_logging / get_logger)
    maybe.py       Maybe[T] = Present(value) | Absent()
    trial.py       Trial[T, R] = Success(value) | Failure(reason) | Failures(reasons)
    bridge.py      Maybe <-> Trial conversions

Both container modules define free functions named after the operations
(``maybe.map``, ``trial.bind``, ...), so import the modules rather than the
functions::

    from funky.core import maybe, trial

    trial.bind(maybe.list_first(rows).to_trial("empty"), parse_row)
"""

from funky.core import bridge, maybe, trial
from funky.core.errors import (
    NOT_FOUND,
    ErrorCategory,
    ErrorContext,
    FailureReason,
    FunkyError,
    HandlerError,
    NotFoundError,
    ShapeError,
    is_not_found,
)
from funky.core.maybe import Absent, Maybe, Present, absent, present
from funky.core.trial import Failure, Failures, Success, Trial, failure, failures, success

__all__ = [
    # Modules
    "maybe",
    "trial",
    "bridge",
    # Maybe
    "Maybe",
    "Present",
    "Absent",
    "present",
    "absent",
    # Trial
    "Trial",
    "Success",
    "Failure",
    "Failures",
    "success",
    "failure",
    "failures",
    # Errors
    "NOT_FOUND",
    "FailureReason",
    "ErrorCategory",
    "ErrorContext",
    "FunkyError",
    "NotFoundError",
    "ShapeError",
    "HandlerError",
    "is_not_found",
]
