"""
Liquidity math kernel.

Pure functions with explicit rounding rules for the two liquidity operations:
- ratio-preserving deposits (asset0 is the anchor; asset1 is derived from it),
- exactly proportional withdrawals (checked by cross-multiplication).

Rule violations raise the named pool errors from `simpledex.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import (
    InsufficientAmount1Error,
    InsufficientReserve0Error,
    InsufficientReserve1Error,
    NonProportionalRemovalError,
    ZeroAmountError,
)


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_reserves(reserve0: int, reserve1: int) -> None:
    _require_int("reserve0", reserve0)
    _require_int("reserve1", reserve1)
    if reserve0 < 0 or reserve1 < 0:
        raise ValueError("reserves must be non-negative")


@dataclass(frozen=True)
class OptimalLiquidityResult:
    amount0_used: int
    amount1_used: int
    amount1_unused: int
    new_reserve0: int
    new_reserve1: int


def optimal_liquidity(
    *,
    reserve0: int,
    reserve1: int,
    amount0_desired: int,
    amount1_desired: int,
) -> OptimalLiquidityResult:
    """
    Compute the ratio-preserving amounts a deposit actually uses.

    Empty pool: everything is used and sets the initial price.
    Otherwise `amount1_used = floor(amount0_desired * reserve1 / reserve0)`; the
    surplus of asset1 is reported in `amount1_unused` and never taken.
    """
    _require_reserves(reserve0, reserve1)
    _require_int("amount0_desired", amount0_desired)
    _require_int("amount1_desired", amount1_desired)
    if amount0_desired < 0 or amount1_desired < 0:
        raise ValueError("desired amounts must be non-negative")
    if amount0_desired == 0 or amount1_desired == 0:
        raise ZeroAmountError()

    if reserve0 == 0 and reserve1 == 0:
        return OptimalLiquidityResult(
            amount0_used=amount0_desired,
            amount1_used=amount1_desired,
            amount1_unused=0,
            new_reserve0=amount0_desired,
            new_reserve1=amount1_desired,
        )
    if reserve0 == 0 or reserve1 == 0:
        raise ValueError("one-sided reserves: pool is corrupt")

    optimal_amount1 = (amount0_desired * reserve1) // reserve0
    if optimal_amount1 > amount1_desired:
        raise InsufficientAmount1Error()

    return OptimalLiquidityResult(
        amount0_used=amount0_desired,
        amount1_used=optimal_amount1,
        amount1_unused=amount1_desired - optimal_amount1,
        new_reserve0=reserve0 + amount0_desired,
        new_reserve1=reserve1 + optimal_amount1,
    )


def check_proportional_removal(*, reserve0: int, reserve1: int, amount0: int, amount1: int) -> None:
    """
    Validate a withdrawal of `(amount0, amount1)` against the current reserves.

    Checks run in a fixed order and the first failure is raised:
    zero amount, reserve0 bound, reserve1 bound, exact proportionality
    (`amount0 * reserve1 == amount1 * reserve0`).
    """
    _require_reserves(reserve0, reserve1)
    _require_int("amount0", amount0)
    _require_int("amount1", amount1)
    if amount0 < 0 or amount1 < 0:
        raise ValueError("amounts must be non-negative")

    if amount0 == 0 or amount1 == 0:
        raise ZeroAmountError()
    if amount0 > reserve0:
        raise InsufficientReserve0Error()
    if amount1 > reserve1:
        raise InsufficientReserve1Error()
    if amount0 * reserve1 != amount1 * reserve0:
        raise NonProportionalRemovalError()
