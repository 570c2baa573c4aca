# [TESTER] v1

from __future__ import annotations

import pytest

from simpledex.kernels.cpmm_swap import FEE_DENOMINATOR, FEE_NUMERATOR, apply_fee, swap_exact_in


def test_default_fee_is_three_percent() -> None:
    assert (FEE_NUMERATOR, FEE_DENOMINATOR) == (97, 100)
    assert apply_fee(amount=100) == 97
    # Truncating: 10 * 97 / 100 = 9.7 -> 9
    assert apply_fee(amount=10) == 9
    assert apply_fee(amount=1) == 0


def test_swap_exact_in_matches_reference_scenario() -> None:
    res = swap_exact_in(reserve_in=100, reserve_out=200, amount_in=10)

    assert res.amount_in_with_fee == 9
    assert res.amount_out == 16  # floor(9 * 200 / 109)
    assert (res.new_reserve_in, res.new_reserve_out) == (110, 184)
    assert res.k_before == 20_000
    assert res.k_after == 20_240
    assert res.fee_retained == 1


def test_swap_exact_in_credits_full_input_including_fee() -> None:
    res = swap_exact_in(reserve_in=200, reserve_out=100, amount_in=20)

    assert res.amount_in_with_fee == 19
    assert res.amount_out == 8  # floor(19 * 100 / 219)
    assert res.new_reserve_in == 220
    assert res.new_reserve_out == 92


def test_swap_exact_in_keeps_full_precision_on_large_values() -> None:
    e18 = 10**18
    res = swap_exact_in(reserve_in=100 * e18, reserve_out=200 * e18, amount_in=100 * e18)

    expected_with_fee = (100 * e18 * 97) // 100
    assert res.amount_in_with_fee == expected_with_fee
    assert res.amount_out == (expected_with_fee * 200 * e18) // (100 * e18 + expected_with_fee)
    assert res.k_after > res.k_before


def test_swap_exact_in_returns_zero_output_for_dust() -> None:
    res = swap_exact_in(reserve_in=100, reserve_out=200, amount_in=1)
    assert res.amount_in_with_fee == 0
    assert res.amount_out == 0
    assert res.new_reserve_in == 101


def test_swap_exact_in_never_drains_output_reserve() -> None:
    res = swap_exact_in(reserve_in=1, reserve_out=1_000, amount_in=10**30)
    assert 0 < res.amount_out < 1_000


def test_swap_exact_in_custom_fee() -> None:
    res = swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=100, fee_numerator=1, fee_denominator=1)
    assert res.amount_in_with_fee == 100
    assert res.amount_out == 90  # floor(100_000 / 1_100)


@pytest.mark.parametrize(
    "kwargs, exc, match",
    [
        ({"reserve_in": 0, "reserve_out": 200, "amount_in": 10}, ValueError, "empty reserve"),
        ({"reserve_in": 100, "reserve_out": 0, "amount_in": 10}, ValueError, "empty reserve"),
        ({"reserve_in": -1, "reserve_out": 200, "amount_in": 10}, ValueError, "non-negative"),
        ({"reserve_in": 100, "reserve_out": 200, "amount_in": 0}, ValueError, "positive"),
        ({"reserve_in": 100, "reserve_out": 200, "amount_in": 10.0}, TypeError, "amount_in"),
        ({"reserve_in": 100, "reserve_out": 200, "amount_in": True}, TypeError, "amount_in"),
        (
            {"reserve_in": 100, "reserve_out": 200, "amount_in": 10, "fee_numerator": 101},
            ValueError,
            "fee_numerator",
        ),
        (
            {"reserve_in": 100, "reserve_out": 200, "amount_in": 10, "fee_denominator": 0},
            ValueError,
            "fee_denominator",
        ),
    ],
)
def test_swap_exact_in_rejects_invalid_inputs(kwargs: dict, exc: type, match: str) -> None:
    with pytest.raises(exc, match=match):
        swap_exact_in(**kwargs)
