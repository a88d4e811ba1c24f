"""Tests for quipservice.http.retry_state - per-path retry budgets."""

from __future__ import annotations

import pytest

from quipservice.http.retry_state import MAX_503_RETRIES, RetryState

WAIT_MS = 1000


class TestRateLimitBudget:
    """next_429_wait grants a flat wait until the budget is used."""

    def test_default_budget_is_three(self):
        """Default ceiling grants 3 waits then None."""
        state = RetryState()

        waits = [state.next_429_wait("/url", WAIT_MS) for _ in range(4)]

        assert waits == [WAIT_MS, WAIT_MS, WAIT_MS, None]

    def test_configurable_budget(self):
        """Ceiling of 2 grants 2 waits then None."""
        state = RetryState(max_429_retries=2)

        w1 = state.next_429_wait("/url", WAIT_MS)
        w2 = state.next_429_wait("/url", WAIT_MS)
        w3 = state.next_429_wait("/url", WAIT_MS)

        assert w1 == WAIT_MS
        assert w2 == WAIT_MS
        assert w3 is None

    def test_zero_budget_never_retries(self):
        state = RetryState(max_429_retries=0)

        assert state.next_429_wait("/url", WAIT_MS) is None
        assert state.count_429("/url") == 0

    def test_wait_is_flat(self):
        """The wait does not grow with the attempt number."""
        state = RetryState(max_429_retries=5)

        waits = [state.next_429_wait("/url", 250) for _ in range(5)]

        assert waits == [250] * 5

    def test_exhausted_budget_is_not_incremented(self):
        """Denied requests leave the counter at the ceiling."""
        state = RetryState(max_429_retries=1)

        state.next_429_wait("/url", WAIT_MS)
        state.next_429_wait("/url", WAIT_MS)
        state.next_429_wait("/url", WAIT_MS)

        assert state.count_429("/url") == 1

    def test_paths_are_independent(self):
        state = RetryState(max_429_retries=1)

        assert state.next_429_wait("/a", WAIT_MS) == WAIT_MS
        assert state.next_429_wait("/a", WAIT_MS) is None
        assert state.next_429_wait("/b", WAIT_MS) == WAIT_MS


class TestServiceUnavailableBudget:
    """check_503 allows ten retries per path."""

    def test_ten_retries_then_denied(self):
        state = RetryState()

        checks = [state.check_503("/url") for _ in range(MAX_503_RETRIES + 1)]

        assert checks == [True] * MAX_503_RETRIES + [False]

    def test_counter_keeps_growing_after_exhaustion(self):
        """Exhausted paths stay exhausted on later calls."""
        state = RetryState()
        for _ in range(MAX_503_RETRIES + 1):
            state.check_503("/url")

        assert state.check_503("/url") is False
        assert state.count_503("/url") == MAX_503_RETRIES + 2

    def test_independent_from_429_counter(self):
        """A path can sit in both tables with unrelated counts."""
        state = RetryState(max_429_retries=1)

        state.next_429_wait("/url", WAIT_MS)
        state.check_503("/url")
        state.check_503("/url")

        assert state.count_429("/url") == 1
        assert state.count_503("/url") == 2
        assert state.next_429_wait("/url", WAIT_MS) is None
        assert state.check_503("/url") is True


class TestReset:
    def test_reset_single_path(self):
        state = RetryState(max_429_retries=1)
        state.next_429_wait("/a", WAIT_MS)
        state.next_429_wait("/b", WAIT_MS)
        state.check_503("/a")

        state.reset("/a")

        assert state.count_429("/a") == 0
        assert state.count_503("/a") == 0
        assert state.count_429("/b") == 1

    def test_reset_all(self):
        state = RetryState(max_429_retries=1)
        state.next_429_wait("/a", WAIT_MS)
        state.check_503("/b")

        state.reset()

        assert state.next_429_wait("/a", WAIT_MS) == WAIT_MS
        assert state.count_503("/b") == 0


class TestInputValidation:
    def test_negative_429_budget(self):
        with pytest.raises(ValueError, match="max_429_retries must be a non-negative integer"):
            RetryState(max_429_retries=-1)

    def test_float_429_budget(self):
        with pytest.raises(ValueError, match="max_429_retries must be a non-negative integer"):
            RetryState(max_429_retries=2.5)

    def test_negative_503_budget(self):
        with pytest.raises(ValueError, match="max_503_retries must be a non-negative integer"):
            RetryState(max_503_retries=-3)
