# [TESTER] v1

from __future__ import annotations

import pytest

from simpledex.errors import (
    InsufficientAmount1Error,
    InsufficientReserve0Error,
    InsufficientReserve1Error,
    NonProportionalRemovalError,
    ZeroAmountError,
)
from simpledex.kernels.lp_math import check_proportional_removal, optimal_liquidity


def test_optimal_liquidity_empty_pool_takes_everything() -> None:
    res = optimal_liquidity(reserve0=0, reserve1=0, amount0_desired=100, amount1_desired=200)
    assert (res.amount0_used, res.amount1_used, res.amount1_unused) == (100, 200, 0)
    assert (res.new_reserve0, res.new_reserve1) == (100, 200)


def test_optimal_liquidity_exact_ratio() -> None:
    res = optimal_liquidity(reserve0=100, reserve1=200, amount0_desired=50, amount1_desired=100)
    assert (res.amount0_used, res.amount1_used, res.amount1_unused) == (50, 100, 0)


def test_optimal_liquidity_leaves_excess_asset1_with_caller() -> None:
    res = optimal_liquidity(reserve0=100, reserve1=200, amount0_desired=50, amount1_desired=150)
    assert (res.amount0_used, res.amount1_used, res.amount1_unused) == (50, 100, 50)
    assert (res.new_reserve0, res.new_reserve1) == (150, 300)


def test_optimal_liquidity_truncates_derived_amount() -> None:
    # 7 * 200 / 300 = 4.66.. -> 4
    res = optimal_liquidity(reserve0=300, reserve1=200, amount0_desired=7, amount1_desired=10)
    assert res.amount1_used == 4


def test_optimal_liquidity_rejects_insufficient_amount1() -> None:
    with pytest.raises(InsufficientAmount1Error, match="Excess token1"):
        optimal_liquidity(reserve0=100, reserve1=200, amount0_desired=50, amount1_desired=50)


def test_optimal_liquidity_accepts_amount0_worth_less_than_one_unit() -> None:
    # 1 * 1 / 1000 truncates to 0: asset0 goes in alone.
    res = optimal_liquidity(reserve0=1_000, reserve1=1, amount0_desired=1, amount1_desired=5)
    assert (res.amount0_used, res.amount1_used, res.amount1_unused) == (1, 0, 5)
    assert (res.new_reserve0, res.new_reserve1) == (1_001, 1)


@pytest.mark.parametrize("amounts", [(0, 10), (10, 0), (0, 0)])
def test_optimal_liquidity_rejects_zero(amounts: tuple) -> None:
    with pytest.raises(ZeroAmountError):
        optimal_liquidity(reserve0=100, reserve1=200, amount0_desired=amounts[0], amount1_desired=amounts[1])


def test_optimal_liquidity_rejects_one_sided_reserves() -> None:
    with pytest.raises(ValueError, match="one-sided"):
        optimal_liquidity(reserve0=100, reserve1=0, amount0_desired=1, amount1_desired=1)


def test_optimal_liquidity_rejects_non_int() -> None:
    with pytest.raises(TypeError):
        optimal_liquidity(reserve0=100, reserve1=200, amount0_desired=1.0, amount1_desired=2)


@pytest.mark.parametrize(
    "amounts, exc",
    [
        ((0, 0), ZeroAmountError),
        ((0, 100), ZeroAmountError),
        ((150, 100), InsufficientReserve0Error),
        ((150, 300), InsufficientReserve0Error),
        ((50, 300), InsufficientReserve1Error),
        ((50, 50), NonProportionalRemovalError),
        ((51, 100), NonProportionalRemovalError),
    ],
)
def test_check_proportional_removal_reports_first_failure(amounts: tuple, exc: type) -> None:
    with pytest.raises(exc):
        check_proportional_removal(reserve0=100, reserve1=200, amount0=amounts[0], amount1=amounts[1])


@pytest.mark.parametrize("amounts", [(50, 100), (1, 2), (100, 200)])
def test_check_proportional_removal_accepts_exact_ratio(amounts: tuple) -> None:
    check_proportional_removal(reserve0=100, reserve1=200, amount0=amounts[0], amount1=amounts[1])


def test_check_proportional_removal_rejects_negative() -> None:
    with pytest.raises(ValueError):
        check_proportional_removal(reserve0=100, reserve1=200, amount0=-50, amount1=-100)
