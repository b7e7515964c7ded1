"""
Unit tests for the greedy change engine.
"""

import random

import pytest

from vending_machine.core.denominations import DenominationTable
from vending_machine.core.exceptions import ExactChangeImpossibleError, InvalidAmountError
from vending_machine.core.value_objects import CashBreakdown
from vending_machine.domain.change_engine import make_change


class TestMakeChange:
    """Tests for make_change."""

    def test_zero_amount_is_empty(self, table):
        """Test zero change succeeds with nothing to give, whatever the pool."""
        assert make_change(0, {}, table) == {}
        assert make_change(0, {500: 3}, table) == {}

    def test_single_unit(self, table):
        """Test 500 change with 500 units available."""
        assert make_change(500, {500: 10}, table) == {500: 1}

    def test_prefers_larger_units(self, table):
        """Test larger units are used first."""
        change = make_change(1700, {1000: 5, 500: 5, 200: 5, 100: 5}, table)
        assert change == {1000: 1, 500: 1, 200: 1}

    def test_bounded_by_availability(self, table):
        """Test falls back to smaller units when larger ones run out."""
        change = make_change(2000, {1000: 1, 500: 1, 100: 10}, table)
        assert change == {1000: 1, 500: 1, 100: 5}

    def test_only_larger_unit_available(self, table):
        """Test a lone 100 RUB note cannot make 30 RUB of change."""
        pool = {10000: 1}
        with pytest.raises(ExactChangeImpossibleError) as exc_info:
            make_change(3000, pool, table)
        assert exc_info.value.amount == 3000
        assert pool == {10000: 1}

    def test_pool_not_mutated(self, table):
        """Test the pool is only read."""
        pool = {1000: 2, 500: 1}
        make_change(1500, pool, table)
        assert pool == {1000: 2, 500: 1}

    def test_accepts_cash_breakdown_pool(self, table):
        """Test a CashBreakdown works as the pool."""
        pool = CashBreakdown({5000: 1, 500: 2})
        assert make_change(5500, pool, table) == {5000: 1, 500: 1}

    def test_negative_amount_raises(self, table):
        """Test negative change is a contract violation."""
        with pytest.raises(InvalidAmountError):
            make_change(-100, {}, table)


class TestGreedyLimitation:
    """The engine is greedy and does not backtrack."""

    def test_greedy_succeeds_when_path_exists(self):
        """Test 4 + 1 + 1 is found for 6."""
        table = DenominationTable([4, 3, 1])
        assert make_change(6, {4: 1, 3: 1, 1: 2}, table) == {4: 1, 1: 2}

    def test_greedy_misses_non_greedy_combination(self):
        """Test 6 from {4: 1, 3: 2} fails although 3 + 3 is exact."""
        table = DenominationTable([4, 3, 1])
        with pytest.raises(ExactChangeImpossibleError) as exc_info:
            make_change(6, {4: 1, 3: 2}, table)
        assert exc_info.value.remaining == 2

    def test_greedy_misses_with_real_denominations(self, table):
        """Test 6 RUB from 5 RUB + three 2 RUB coins fails although 2+2+2 works."""
        with pytest.raises(ExactChangeImpossibleError):
            make_change(600, {500: 1, 200: 3}, table)


class TestChangeProperties:
    """Breakdowns sum exactly to the target and never exceed the pool."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_pools(self, table, seed):
        """Test the exactness and availability properties on random pools."""
        rng = random.Random(seed)
        for _ in range(50):
            pool = {denomination: rng.randint(0, 3) for denomination in table}
            amount = rng.randrange(0, 300000, 100)
            try:
                change = make_change(amount, pool, table)
            except ExactChangeImpossibleError:
                continue
            assert change.total == amount
            for denomination, count in change.items():
                assert count <= pool[denomination]
