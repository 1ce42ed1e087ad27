"""
Test Outcome and Aggregate result model
"""
import pytest
from seriesflow.core.execution import Diagnostics
from seriesflow.core.results import Aggregate, Outcome
from seriesflow.core.types import DUPLICATED_CALL_MESSAGE, ResultState


class TestOutcome:
    """Test the Outcome completion state machine"""

    def test_initial_state_is_unknown(self):
        outcome = Outcome("a")
        assert outcome.state == ResultState.UNKNOWN
        assert outcome.succeeded is False
        assert outcome.failed is False
        assert outcome.message is None
        assert outcome.settled is False

    def test_success_signal(self):
        outcome = Outcome("a")
        assert outcome.settle(None, "value") == ResultState.SUCCESS
        assert outcome.succeeded is True
        assert outcome.failed is False
        assert outcome.message == "value"

    def test_failure_signal(self):
        outcome = Outcome("a")
        assert outcome.settle("boom") == ResultState.FAILURE
        assert outcome.failed is True
        assert outcome.succeeded is False
        assert outcome.message == "boom"

    def test_falsy_error_counts_as_success(self):
        """Only a truthy error marks a failure"""
        outcome = Outcome("a")
        outcome.settle("", "value")
        assert outcome.state == ResultState.SUCCESS

    def test_first_failure_wins(self):
        """Signals after a failure are dropped, success or failure"""
        outcome = Outcome("a")
        outcome.settle("first")
        outcome.settle(None, "later success")
        outcome.settle("later failure")
        assert outcome.state == ResultState.FAILURE
        assert outcome.message == "first"
        assert outcome.signals == 3

    def test_second_success_is_invalid(self):
        """Two successes leave both flags set with a fixed message"""
        outcome = Outcome("a")
        outcome.settle(None, "one")
        outcome.settle(None, "two")
        assert outcome.state == ResultState.INVALID
        assert outcome.succeeded is True
        assert outcome.failed is True
        assert outcome.message == DUPLICATED_CALL_MESSAGE

    def test_error_after_success_becomes_failure(self):
        outcome = Outcome("a")
        outcome.settle(None, "one")
        outcome.settle("late error")
        assert outcome.state == ResultState.FAILURE
        assert outcome.succeeded is False
        assert outcome.message == "late error"

    def test_signal_after_invalid_is_dropped(self):
        outcome = Outcome("a")
        outcome.settle(None, "one")
        outcome.settle(None, "two")
        outcome.settle("three")
        assert outcome.state == ResultState.INVALID
        assert outcome.message == DUPLICATED_CALL_MESSAGE

    def test_contract_violations_reported_to_diagnostics(self):
        diagnostics = Diagnostics()
        outcome = Outcome("a", ("group", "a"), diagnostics)
        outcome.settle(None, "one")
        assert diagnostics.events == []

        outcome.settle(None, "two")
        outcome.settle("three")

        warnings = diagnostics.get_warnings()
        assert len(warnings) == 2
        assert warnings[0]["path"] == ("group", "a")
        assert warnings[0]["state"] == ResultState.INVALID
        assert "already settled" in warnings[1]["message"]
        # Contract violations are warnings, not errors
        assert diagnostics.errors == 0

    def test_invalid_value(self):
        outcome = Outcome.invalid_value("x", "not a unit")
        assert outcome.failed is True
        assert outcome.succeeded is False
        assert "invalid value" in outcome.message
        assert "'not a unit'" in outcome.message

    def test_default_path_is_key(self):
        assert Outcome("a").path == ("a",)


class TestAggregate:
    """Test Aggregate composition rules"""

    def _outcome(self, key, error=None, value=None):
        outcome = Outcome(key)
        outcome.settle(error, value)
        return outcome

    def test_empty_aggregate_is_unknown(self):
        aggregate = Aggregate("root")
        assert aggregate.state == ResultState.UNKNOWN
        assert aggregate.succeeded is False
        assert aggregate.failed is False
        assert len(aggregate) == 0

    def test_success_child(self):
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("a", value="a"))
        assert aggregate.state == ResultState.SUCCESS

    def test_failure_clears_success(self):
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("a", value="a"))
        aggregate.add(self._outcome("b", error="b"))
        assert aggregate.failed is True
        assert aggregate.succeeded is False

    def test_later_success_does_not_clear_failure(self):
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("a", error="a"))
        aggregate.add(self._outcome("b", value="b"))
        assert aggregate.state == ResultState.FAILURE

    def test_unknown_child_keeps_state(self):
        aggregate = Aggregate("root")
        aggregate.add(Aggregate("empty"))
        assert aggregate.state == ResultState.UNKNOWN
        assert "empty" in aggregate

    def test_invalid_child_fails_aggregate(self):
        outcome = self._outcome("a", value="one")
        outcome.settle(None, "two")
        aggregate = Aggregate("root")
        aggregate.add(outcome)
        assert aggregate.failed is True
        assert aggregate.succeeded is False

    def test_add_overwrites_by_key_and_keeps_completion_order(self):
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("b", value="b"))
        aggregate.add(self._outcome("a", value="a"))
        aggregate.add(self._outcome("b", value="b2"))
        assert list(aggregate.results) == ["b", "a"]
        assert aggregate["b"].message == "b2"
        assert aggregate.get("missing") is None

    def test_count_walks_subtree(self):
        nested = Aggregate("nested")
        nested.add(self._outcome("x", error="x"))
        nested.add(self._outcome("y", value="y"))
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("a", value="a"))
        aggregate.add(nested)
        aggregate.add(Outcome("pending"))

        counts = aggregate.count()
        assert counts == {
            ResultState.SUCCESS: 2,
            ResultState.FAILURE: 1,
            ResultState.INVALID: 0,
            ResultState.UNKNOWN: 1,
        }

    def test_str_renders_tree(self):
        aggregate = Aggregate("root")
        aggregate.add(self._outcome("a", value="hello"))
        rendered = str(aggregate)
        assert "root" in rendered
        assert "a: hello" in rendered
