"""Tests for BoundedHistory."""

import pytest

from bank_ledger.ledger.history import BoundedHistory


class TestBoundedHistory:
    """Tests for the capped, newest-first list."""

    def test_prepend_orders_newest_first(self):
        """Test new items go to the front."""
        history = BoundedHistory(3)
        for item in ("a", "b", "c"):
            history.prepend(item)
        assert history.to_list() == ["c", "b", "a"]

    def test_prepend_evicts_oldest(self):
        """Test the tail item is dropped and returned when full."""
        history = BoundedHistory(2, ["b", "a"])
        assert history.prepend("c") == "a"
        assert history.to_list() == ["c", "b"]

    def test_prepend_below_cap_evicts_nothing(self):
        """Test nothing is returned while there is room."""
        assert BoundedHistory(2).prepend("a") is None

    def test_reset_keeps_front_items(self):
        """Test reset truncates to the newest items."""
        history = BoundedHistory(2)
        history.reset(["c", "b", "a"])
        assert history.to_list() == ["c", "b"]

    def test_replace(self):
        """Test replace swaps the first match and returns it."""
        history = BoundedHistory(3, [1, 2, 3])
        assert history.replace(lambda x: x == 2, lambda x: x * 10) == 20
        assert history.to_list() == [1, 20, 3]
        assert history.replace(lambda x: x == 99, lambda x: x) is None

    def test_map_and_find(self):
        """Test map rebuilds every item and find returns the first match."""
        history = BoundedHistory(3, [1, 2, 3])
        history.map(lambda x: x + 1)
        assert history.to_list() == [2, 3, 4]
        assert history.find(lambda x: x > 2) == 3
        assert history.find(lambda x: x > 10) is None

    def test_clear_and_len(self):
        """Test clear empties the history."""
        history = BoundedHistory(3, [1, 2])
        assert len(history) == 2
        history.clear()
        assert len(history) == 0

    def test_limit_must_be_positive(self):
        """Test a zero limit is rejected."""
        with pytest.raises(ValueError):
            BoundedHistory(0)
