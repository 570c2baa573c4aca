"""
Pool snapshots and pool identifiers.
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from .balances import Amount, AssetId
from .canonical import CANONICAL_ENCODING_VERSION, canonical_json_bytes, sha256_hex


def compute_pool_id(asset0: AssetId, asset1: AssetId, fee_numerator: int, fee_denominator: int) -> str:
    """
    Deterministically compute a pool_id for the given pool parameters.

        pool_id = H("SimpleDexPool" || asset0 || asset1 || fee_numerator || "/" || fee_denominator)

    Asset order matters: (a, b) and (b, a) are different pools.
    """
    if asset0 == asset1:
        raise ValueError(f"Pool assets must differ: {asset0!r}")
    pool_id_data = (
        b"SimpleDexPool"
        + asset0.encode("utf-8")
        + asset1.encode("utf-8")
        + str(int(fee_numerator)).encode("utf-8")
        + b"/"
        + str(int(fee_denominator)).encode("utf-8")
    )
    return "0x" + hashlib.sha256(pool_id_data).hexdigest()


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a two-asset pool.

    Attributes:
        pool_id: Pool identifier (also the pool's holder address on the ledger)
        asset0: First asset identifier
        asset1: Second asset identifier
        reserve0: Reserve amount for asset0
        reserve1: Reserve amount for asset1
        fee_numerator: Share of the swap input that is priced (97 for a 3% fee)
        fee_denominator: Fee denominator (100)
    """
    pool_id: str
    asset0: AssetId
    asset1: AssetId
    reserve0: Amount
    reserve1: Amount
    fee_numerator: int
    fee_denominator: int

    def __post_init__(self) -> None:
        if self.asset0 == self.asset1:
            raise ValueError(f"Pool assets must differ: {self.asset0!r}")
        for name in ("reserve0", "reserve1", "fee_numerator", "fee_denominator"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve0}, {self.reserve1})"
            )
        if (self.reserve0 == 0) != (self.reserve1 == 0):
            raise ValueError(
                f"Reserves must be both zero or both positive: ({self.reserve0}, {self.reserve1})"
            )
        if self.fee_denominator <= 0 or not (0 <= self.fee_numerator <= self.fee_denominator):
            raise ValueError(f"invalid fee: {self.fee_numerator}/{self.fee_denominator}")

    def constant_product(self) -> int:
        """k = reserve0 * reserve1"""
        return self.reserve0 * self.reserve1

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["version"] = CANONICAL_ENCODING_VERSION
        return d

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "PoolState":
        if not isinstance(obj, Mapping):
            raise TypeError("pool state must be a mapping")
        version = obj.get("version", CANONICAL_ENCODING_VERSION)
        if version != CANONICAL_ENCODING_VERSION:
            raise ValueError(f"unsupported pool state version: {version!r}")
        try:
            return cls(
                pool_id=obj["pool_id"],
                asset0=obj["asset0"],
                asset1=obj["asset1"],
                reserve0=obj["reserve0"],
                reserve1=obj["reserve1"],
                fee_numerator=obj["fee_numerator"],
                fee_denominator=obj["fee_denominator"],
            )
        except KeyError as exc:
            raise ValueError(f"pool state is missing field {exc.args[0]!r}") from exc

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.to_dict())

    def state_digest(self) -> str:
        """sha256 over the canonical JSON encoding (0x-prefixed hex)."""
        return sha256_hex(self.canonical_bytes())

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:16]}..., "
            f"assets=({self.asset0}, {self.asset1}), "
            f"reserves=({self.reserve0}, {self.reserve1}), "
            f"fee={self.fee_numerator}/{self.fee_denominator})"
        )
