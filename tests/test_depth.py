"""Tests for the traversal depth bound."""

import pytest

from depq._graph import DEFAULT_MAX_DEPTH, DepthLimitExceededError, check_max_depth


class TestCheckMaxDepth:
    def test_below_explicit_bound_continues(self) -> None:
        assert check_max_depth(2, 3, DEFAULT_MAX_DEPTH) is True

    def test_at_explicit_bound_stops(self) -> None:
        assert check_max_depth(3, 3, DEFAULT_MAX_DEPTH) is False

    def test_explicit_bound_overrides_default(self) -> None:
        # an explicit bound above the default never raises
        assert check_max_depth(50, 200, 10) is True

    def test_zero_bound_stops_immediately(self) -> None:
        assert check_max_depth(1, 0) is False

    def test_below_default_continues(self) -> None:
        assert check_max_depth(DEFAULT_MAX_DEPTH - 1, None) is True

    def test_default_bound_raises(self) -> None:
        with pytest.raises(DepthLimitExceededError, match="max depth exceeded: 5") as excinfo:
            check_max_depth(5, None, 5)
        assert excinfo.value.limit == 5
