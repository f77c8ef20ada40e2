"""Tests for funky.core.trial module."""

import pytest
from structlog.testing import capture_logs

from funky.core import maybe, trial
from funky.core.errors import NOT_FOUND, FailureReason, HandlerError, NotFoundError
from funky.core.maybe import Absent, Present
from funky.core.trial import Failure, Failures, Success


# Raw inputs covering every row of the normalization table
RAW_INPUTS = [
    None,
    42,
    "text",
    [1, 2],
    Present(1),
    Success(42),
    Success(None),
    Failure("bad"),
    Failures([]),
    Failures(["only"]),
    Failures(["a", "b"]),
]


class TestConstruction:
    """Test success/failure/failures."""

    def test_success(self):
        result = trial.success(42)
        assert result == Success(42)
        assert result.value == 42

    def test_failure_default_reason(self):
        assert trial.failure() == Failure(NOT_FOUND)
        assert trial.failure().reason is FailureReason.NOT_FOUND

    def test_failure_with_reason(self):
        assert trial.failure("Invalid arg") == Failure("Invalid arg")

    def test_failures_many(self):
        result = trial.failures(["Invalid arg", "Nil dereferenced"])
        assert result == Failures(["Invalid arg", "Nil dereferenced"])

    def test_failures_single_collapses(self):
        """A one-element list collapses to the single-reason form."""
        assert trial.failures(["Invalid arg"]) == Failure("Invalid arg")

    def test_failures_empty(self):
        assert trial.failures([]) == Failures([])

    def test_failures_accepts_any_iterable(self):
        assert trial.failures(r for r in ("a", "b")) == Failures(("a", "b"))

    def test_failures_stores_tuple(self):
        """reasons are frozen so the value cannot be mutated through the list."""
        reasons = ["a", "b"]
        result = trial.failures(reasons)
        reasons.append("c")
        assert result.reasons == ("a", "b")

    def test_variants_are_immutable(self):
        with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
            trial.success(1).value = 2

    def test_repr(self):
        assert repr(trial.success(1)) == "Success(1)"
        assert repr(trial.failure("x")) == "Failure('x')"
        assert repr(trial.failures(["x", "y"])) == "Failures(['x', 'y'])"


class TestNormalize:
    """Test the canonicalization table."""

    def test_none_becomes_default_failure(self):
        assert trial.normalize(None) == trial.failure(NOT_FOUND)
        assert trial.normalize(None) == trial.failure()

    def test_bare_value_becomes_success(self):
        assert trial.normalize(42) == trial.success(42)

    def test_success_unchanged(self):
        s = Success(42)
        assert trial.normalize(s) is s

    def test_failure_unchanged(self):
        f = Failure("bad")
        assert trial.normalize(f) is f

    def test_empty_failures_unchanged(self):
        assert trial.normalize(trial.failures([])) == trial.failures([])

    def test_single_failures_collapses(self):
        assert trial.normalize(Failures(["r"])) == trial.failure("r")

    def test_multiple_failures_unchanged(self):
        f = Failures(["a", "b"])
        assert trial.normalize(f) is f

    def test_falsy_values_are_successes(self):
        """Only None is treated as absent; other falsy values succeed."""
        for value in (0, "", [], False):
            assert trial.normalize(value) == Success(value)

    def test_maybe_is_a_bare_value(self):
        assert trial.normalize(Absent()) == Success(Absent())

    @pytest.mark.parametrize("raw", RAW_INPUTS, ids=repr)
    def test_idempotent(self, raw):
        once = trial.normalize(raw)
        assert trial.normalize(once) == once

    @pytest.mark.parametrize("raw", RAW_INPUTS, ids=repr)
    def test_canonical_form_is_a_variant(self, raw):
        assert isinstance(trial.normalize(raw), (Success, Failure, Failures))

    def test_none_normalization_is_logged(self):
        with capture_logs() as logs:
            trial.normalize(None)
        assert logs[0]["event"] == "trial_normalized_none"
        assert logs[0]["reason"] == "NOT_FOUND"

    def test_is_trial_total(self):
        for raw in RAW_INPUTS:
            assert trial.is_trial(raw) is True


class TestMatches:
    """Test the single dispatch primitive."""

    def test_nil(self):
        assert trial.matches(None, lambda v: v, lambda rs: rs) == [NOT_FOUND]

    def test_bare_value(self):
        assert trial.matches(42, lambda v: v, lambda rs: rs) == 42

    def test_success(self):
        assert trial.matches(Success(42), lambda v: v, lambda rs: rs) == 42

    def test_single_failure_as_list(self):
        """A single reason always reaches the handler as a one-element list."""
        assert trial.matches(Failure("enoent"), lambda v: v, lambda rs: rs) == ["enoent"]

    def test_empty_failures(self):
        assert trial.matches(Failures([]), lambda v: v, lambda rs: rs) == []

    def test_many_failures(self):
        result = trial.matches(
            Failures(["invalid_arg", "nil_dereferenced"]), lambda v: v, lambda rs: rs
        )
        assert result == ["invalid_arg", "nil_dereferenced"]

    def test_single_reason_forms_are_equivalent(self):
        def on_failure(reasons):
            return ("failed", reasons)

        single = trial.matches(Failure("r"), lambda v: v, on_failure)
        listed = trial.matches(Failures(["r"]), lambda v: v, on_failure)
        assert single == listed == ("failed", ["r"])

    def test_only_one_handler_called(self, counter):
        trial.matches(Success(1), lambda v: v, counter)
        assert counter.count == 0

    def test_dispatch_alias(self):
        assert trial.dispatch is trial.matches

    def test_non_callable_handler_raises(self):
        with pytest.raises(HandlerError):
            trial.matches(1, lambda v: v, "nope")


class TestPredicates:
    """Test is_success / is_failure."""

    def test_is_success(self):
        assert trial.is_success(Success(42)) is True
        assert trial.is_success(42) is True
        assert trial.is_success(Failure("x")) is False
        assert trial.is_success(None) is False

    def test_is_failure(self):
        assert trial.is_failure(Success(42)) is False
        assert trial.is_failure(Failure(NOT_FOUND)) is True
        assert trial.is_failure(Failures([])) is True

    def test_aliases(self):
        assert trial.is_ok is trial.is_success
        assert trial.is_error is trial.is_failure

    def test_methods(self):
        assert Success(1).is_success()
        assert Failures(["a", "b"]).is_failure()


class TestBind:
    """Test bind."""

    def test_success_delegates(self):
        assert trial.bind(Success(42), lambda x: trial.success(x + 1)) == Success(43)

    def test_success_binder_can_fail(self):
        assert trial.bind(Success(42), lambda _: trial.failure("error2")) == Failure("error2")

    def test_failure_short_circuits(self, counter):
        """bind on a failure keeps the reason and never calls the binder."""
        assert trial.bind(trial.failure("error1"), counter) == trial.failure("error1")
        assert counter.count == 0

    def test_failure_short_circuits_for_any_reason(self, counter):
        for reason in ("x", 0, None, ValueError("boom"), NOT_FOUND):
            assert trial.bind(trial.failure(reason), counter) == trial.failure(reason)
        assert counter.count == 0

    def test_multiple_reasons_propagate_verbatim(self, counter):
        original = trial.failures(["a", "b", "c"])
        assert trial.bind(original, counter) == original
        assert counter.count == 0

    def test_empty_failures_propagate(self):
        assert trial.bind(Failures([]), lambda x: Success(x)) == Failures([])

    def test_bind_accepts_raw_input(self):
        assert trial.bind(20, lambda x: Success(x + 22)) == Success(42)
        assert trial.bind(None, lambda x: Success(x)) == trial.failure()

    def test_binder_plain_value_is_returned_unwrapped(self):
        """A binder returning a raw value yields that value; the next op normalizes it."""
        result = trial.bind(Success(1), lambda x: 5)
        assert result == 5
        assert trial.map(result, lambda x: x + 1) == Success(6)
        assert trial.bind(Success(1), lambda x: None) is None
        assert trial.is_failure(trial.bind(Success(1), lambda x: None))

    def test_chain_stops_at_first_failure(self):
        """Reasons are never accumulated across a chain."""
        result = (
            Success(1)
            .bind(lambda x: trial.failure("first"))
            .bind(lambda x: trial.failure("second"))
        )
        assert result == Failure("first")


class TestMap:
    """Test map."""

    def test_success(self):
        assert trial.map(Success(42), lambda x: x + 1) == Success(43)

    def test_failure(self, counter):
        assert trial.map(Failure("error1"), counter) == Failure("error1")
        assert counter.count == 0

    def test_multiple_failures(self):
        assert trial.map(Failures(["a", "b"]), lambda x: x) == Failures(["a", "b"])

    def test_map_wraps_none(self):
        """map wraps whatever the mapper returns, including None."""
        assert trial.map(Success(1), lambda _: None) == Success(None)

    def test_map_chain(self):
        result = Success(10).map(lambda x: x * 2).map(lambda x: x + 5).map(str)
        assert result == Success("25")


class TestExtraction:
    """Test get_value_or_fail / get_value_or / to_dict."""

    def test_get_value_or_fail_success(self):
        assert trial.get_value_or_fail(Success(42)) == 42

    def test_get_value_or_fail_bare_value(self):
        assert trial.get_value_or_fail(42) == 42

    def test_get_value_or_fail_failure_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            trial.get_value_or_fail(trial.failure())
        assert exc_info.value.context.operation == "trial.get_value_or_fail"

    def test_not_found_keeps_reasons(self):
        with pytest.raises(NotFoundError) as exc_info:
            trial.failures(["a", "b"]).get_value_or_fail()
        assert exc_info.value.context.reasons == ["a", "b"]

    def test_not_found_from_none(self):
        with pytest.raises(NotFoundError):
            trial.get_value_or_fail(None)

    def test_not_found_is_not_a_reason(self):
        """The fatal signal is raised, never returned inside a Failure."""
        result = trial.bind(Success(1), lambda _: trial.failure("legit"))
        assert result.reason == "legit"
        with pytest.raises(NotFoundError):
            result.get_value_or_fail()

    def test_not_found_is_logged(self):
        with capture_logs() as logs:
            with pytest.raises(NotFoundError):
                trial.get_value_or_fail(Failures([]))
        assert logs[-1]["event"] == "trial_value_not_found"
        assert logs[-1]["reason_count"] == 0

    def test_get_value_or(self):
        assert trial.get_value_or(Success(1), 99) == 1
        assert trial.get_value_or(Failure("x"), 99) == 99

    def test_to_dict(self):
        assert Success(42).to_dict() == {"ok": True, "value": 42}
        assert Failure("x").to_dict() == {"ok": False, "reasons": ["x"]}
        assert Failures([]).to_dict() == {"ok": False, "reasons": []}


class TestTryTrial:
    """Test try_trial."""

    def test_success(self):
        assert trial.try_trial(lambda: 1 + 1) == Success(2)

    def test_exception_becomes_reason(self):
        result = trial.try_trial(lambda: int("not a number"))
        assert result.is_failure()
        assert isinstance(result.reason, ValueError)

    def test_not_found_error_is_reraised(self):
        """The fatal extraction error never becomes a reason value."""
        with pytest.raises(NotFoundError):
            trial.try_trial(lambda: maybe.absent().get_value_or_fail())
        with pytest.raises(NotFoundError):
            trial.try_trial(lambda: trial.get_value_or_fail(Failure("x")))

    def test_lookup_error_still_captured(self):
        result = trial.try_trial(lambda: {}["missing"])
        assert isinstance(result.reason, KeyError)


class TestBatchHelpers:
    """Test collect and partition."""

    def test_collect_all_success(self):
        assert trial.collect([Success(1), 2, Success(3)]) == Success([1, 2, 3])

    def test_collect_empty(self):
        assert trial.collect([]) == Success([])

    def test_collect_first_failure_wins(self):
        result = trial.collect([Success(1), Failure("a"), Failure("b")])
        assert result == Failure("a")

    def test_collect_keeps_multiple_reasons(self):
        result = trial.collect([Success(1), Failures(["a", "b"])])
        assert result == Failures(["a", "b"])

    def test_collect_none_is_failure(self):
        assert trial.collect([1, None]) == trial.failure()

    def test_partition(self):
        values, reasons = trial.partition(
            [Success(1), Failure("a"), Failures(["b", "c"]), 4, Failures([])]
        )
        assert values == [1, 4]
        assert reasons == ["a", "b", "c"]
