# [TESTER] v1

from __future__ import annotations

import pytest

from simpledex.state import PoolState, compute_pool_id
from simpledex.state.canonical import canonical_json_bytes


def _state(**overrides) -> PoolState:
    fields = {
        "pool_id": compute_pool_id("TKN0", "TKN1", 97, 100),
        "asset0": "TKN0",
        "asset1": "TKN1",
        "reserve0": 100,
        "reserve1": 200,
        "fee_numerator": 97,
        "fee_denominator": 100,
    }
    fields.update(overrides)
    return PoolState(**fields)


def test_compute_pool_id_is_deterministic_and_order_sensitive() -> None:
    a = compute_pool_id("TKN0", "TKN1", 97, 100)
    assert a == compute_pool_id("TKN0", "TKN1", 97, 100)
    assert a.startswith("0x") and len(a) == 66
    assert a != compute_pool_id("TKN1", "TKN0", 97, 100)
    assert a != compute_pool_id("TKN0", "TKN1", 997, 1000)


def test_compute_pool_id_rejects_identical_assets() -> None:
    with pytest.raises(ValueError, match="differ"):
        compute_pool_id("TKN0", "TKN0", 97, 100)


def test_pool_state_dict_round_trip() -> None:
    state = _state()
    d = state.to_dict()
    assert d["version"] == 1
    assert PoolState.from_dict(d) == state


def test_pool_state_digest_depends_on_reserves_only_through_content() -> None:
    assert _state().state_digest() == _state().state_digest()
    assert _state().state_digest() != _state(reserve0=110, reserve1=184).state_digest()


def test_pool_state_constant_product() -> None:
    assert _state().constant_product() == 20_000
    assert _state(reserve0=0, reserve1=0).constant_product() == 0


@pytest.mark.parametrize(
    "overrides, exc",
    [
        ({"asset1": "TKN0"}, ValueError),
        ({"reserve0": -1}, ValueError),
        ({"reserve0": 0}, ValueError),
        ({"reserve1": 0}, ValueError),
        ({"reserve0": 1.0}, TypeError),
        ({"fee_numerator": 101}, ValueError),
    ],
)
def test_pool_state_validates_invariants(overrides: dict, exc: type) -> None:
    with pytest.raises(exc):
        _state(**overrides)


def test_pool_state_from_dict_rejects_missing_fields_and_versions() -> None:
    d = _state().to_dict()
    del d["reserve1"]
    with pytest.raises(ValueError, match="reserve1"):
        PoolState.from_dict(d)

    d = _state().to_dict()
    d["version"] = 2
    with pytest.raises(ValueError, match="version"):
        PoolState.from_dict(d)


def test_canonical_json_is_key_order_independent_and_rejects_floats() -> None:
    assert canonical_json_bytes({"b": 1, "a": 2}) == b'{"a":2,"b":1}'
    with pytest.raises(TypeError):
        canonical_json_bytes({"a": 1.5})
