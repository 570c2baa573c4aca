"""
Pool configuration.

`PoolConfig` is immutable and validated on construction. It can be built in
code, from a mapping, or from a YAML file:

    fee_numerator: 97
    fee_denominator: 100
    reject_zero_output: true
    max_amount: 115792089237316195423570985008687907853269984665640564039457584007913129639935
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..kernels.cpmm_swap import FEE_DENOMINATOR, FEE_NUMERATOR


UINT256_MAX = 2**256 - 1


@dataclass(frozen=True)
class PoolConfig:
    """Runtime config for a pool."""

    # Swap input is priced at fee_numerator / fee_denominator of its face value.
    fee_numerator: int = FEE_NUMERATOR
    fee_denominator: int = FEE_DENOMINATOR
    # Reject swaps whose output truncates to zero (they would still grow the input reserve).
    reject_zero_output: bool = True
    # Upper bound for any amount and any reserve (the source domain is uint256).
    max_amount: int = UINT256_MAX

    def __post_init__(self) -> None:
        for name in ("fee_numerator", "fee_denominator", "max_amount"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not isinstance(self.reject_zero_output, bool):
            raise TypeError("reject_zero_output must be a bool")
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive: {self.fee_denominator}")
        if not (0 < self.fee_numerator <= self.fee_denominator):
            raise ValueError(
                f"fee_numerator must be in (0, {self.fee_denominator}]: {self.fee_numerator}"
            )
        if self.max_amount <= 0:
            raise ValueError(f"max_amount must be positive: {self.max_amount}")

    @property
    def fee_bps(self) -> int:
        """Fee in basis points, rounded down (300 for the default 3%)."""
        return ((self.fee_denominator - self.fee_numerator) * 10_000) // self.fee_denominator


def pool_config_from_mapping(obj: Mapping[str, Any]) -> PoolConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("pool config must be a mapping")
    known = {f.name for f in fields(PoolConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown pool config keys: {', '.join(map(str, unknown))}")
    return PoolConfig(**dict(obj))


def load_pool_config(path: Union[str, Path]) -> PoolConfig:
    """Load a `PoolConfig` from a YAML file. An empty file yields the defaults."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return PoolConfig()
    return pool_config_from_mapping(obj)
