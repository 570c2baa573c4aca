"""
CPMM swap kernel.

Semantics:
- The fee is charged on the *input* side by truncating multiplication:
  `amount_in_with_fee = floor(amount_in * fee_numerator / fee_denominator)`.
- Pricing uses the fee-adjusted input against the constant-product curve:
  `amount_out = floor(amount_in_with_fee * reserve_out / (reserve_in + amount_in_with_fee))`.
- The full `amount_in` (fee included) is credited to the input reserve, so the
  fee stays in the pool and `k` never decreases.

Products are computed at full precision before the division; Python ints never
overflow, so range checks belong to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass


FEE_NUMERATOR = 97
FEE_DENOMINATOR = 100


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_fee(fee_numerator: int, fee_denominator: int) -> None:
    _require_int("fee_numerator", fee_numerator)
    _require_int("fee_denominator", fee_denominator)
    if fee_denominator <= 0:
        raise ValueError("fee_denominator must be positive")
    if not (0 <= fee_numerator <= fee_denominator):
        raise ValueError(f"fee_numerator must be in [0, {fee_denominator}]")


@dataclass(frozen=True)
class SwapExactInResult:
    amount_in: int
    amount_in_with_fee: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int

    @property
    def fee_retained(self) -> int:
        return self.amount_in - self.amount_in_with_fee


def apply_fee(
    *,
    amount: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """
    Compute `floor(amount * fee_numerator / fee_denominator)`.
    """
    _require_int("amount", amount)
    _require_fee(fee_numerator, fee_denominator)
    if amount < 0:
        raise ValueError("amount must be non-negative")
    return (amount * fee_numerator) // fee_denominator


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    A zero `amount_out` is returned as-is; whether to accept it is a pool policy.
    Raises ValueError on invalid inputs (non-positive input, empty reserves).
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
    ):
        _require_int(name, v)
    _require_fee(fee_numerator, fee_denominator)

    if reserve_in < 0 or reserve_out < 0:
        raise ValueError("reserves must be non-negative")
    if reserve_in == 0 or reserve_out == 0:
        raise ValueError("cannot swap against an empty reserve")
    if amount_in <= 0:
        raise ValueError("amount_in must be positive")

    k_before = reserve_in * reserve_out

    amount_in_with_fee = apply_fee(
        amount=amount_in,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
    )
    denominator = reserve_in + amount_in_with_fee
    amount_out = (amount_in_with_fee * reserve_out) // denominator

    # amount_in_with_fee / denominator < 1, so the output reserve is never drained.
    if amount_out >= reserve_out:
        raise AssertionError("amount_out drains reserve_out")

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out
    k_after = new_reserve_in * new_reserve_out

    return SwapExactInResult(
        amount_in=amount_in,
        amount_in_with_fee=amount_in_with_fee,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
