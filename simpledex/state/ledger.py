"""
Ledger collaborator for pools.

A pool never moves assets itself; it asks a `Ledger` to pull the input side
from a holder and to pay the output side back. Any host (contract runtime,
exchange backend, simulator) can plug in by implementing the two methods of
the protocol.

`InMemoryLedger` is the reference implementation used by tests and the demo
tool. It follows ERC20 `approve` / `transferFrom` semantics: a pool may only
pull what the holder has approved for it.
"""

from __future__ import annotations

import logging
from typing import Dict, Protocol, Tuple, runtime_checkable

from ..errors import InsufficientAllowanceError, InsufficientBalanceError
from .balances import Amount, AssetId, BalanceTable, Holder

logger = logging.getLogger(__name__)


@runtime_checkable
class Ledger(Protocol):
    """Transfer interface a pool needs from its host."""

    def transfer_in(self, asset_id: AssetId, from_holder: Holder, amount: Amount) -> None: ...

    def transfer_out(self, asset_id: AssetId, to_holder: Holder, amount: Amount) -> None: ...


def _require_amount(amount: Amount) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError("amount must be an int")
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {amount}")


class InMemoryLedger:
    """
    Balance + allowance book for a single pool holder.

    `pool_holder` is the address the pool's reserves are held under; it is
    normally the pool's `pool_id`.
    """

    def __init__(self, pool_holder: Holder) -> None:
        if not isinstance(pool_holder, str) or not pool_holder:
            raise ValueError("pool_holder must be a non-empty string")
        self.pool_holder = pool_holder
        self.balances = BalanceTable()
        self._allowances: Dict[Tuple[Holder, AssetId], Amount] = {}

    def mint(self, holder: Holder, asset_id: AssetId, amount: Amount) -> None:
        """Credit `amount` of `asset_id` to `holder` out of thin air."""
        _require_amount(amount)
        self.balances.add(holder, asset_id, amount)

    def balance_of(self, holder: Holder, asset_id: AssetId) -> Amount:
        return self.balances.get(holder, asset_id)

    def approve(self, holder: Holder, asset_id: AssetId, amount: Amount) -> None:
        """Set how much of `asset_id` the pool may pull from `holder` (replaces any prior value)."""
        _require_amount(amount)
        if amount == 0:
            self._allowances.pop((holder, asset_id), None)
        else:
            self._allowances[(holder, asset_id)] = amount

    def allowance(self, holder: Holder, asset_id: AssetId) -> Amount:
        return self._allowances.get((holder, asset_id), 0)

    def transfer_in(self, asset_id: AssetId, from_holder: Holder, amount: Amount) -> None:
        _require_amount(amount)
        allowed = self.allowance(from_holder, asset_id)
        if allowed < amount:
            raise InsufficientAllowanceError(
                f"Insufficient allowance: {from_holder} approved {allowed} {asset_id}, needs {amount}"
            )
        available = self.balances.get(from_holder, asset_id)
        if available < amount:
            raise InsufficientBalanceError(
                f"Insufficient balance: {from_holder} holds {available} {asset_id}, needs {amount}"
            )
        self.balances.subtract(from_holder, asset_id, amount)
        self.balances.add(self.pool_holder, asset_id, amount)
        self.approve(from_holder, asset_id, allowed - amount)
        logger.debug("transfer_in %s %s from %s", amount, asset_id, from_holder)

    def transfer_out(self, asset_id: AssetId, to_holder: Holder, amount: Amount) -> None:
        _require_amount(amount)
        available = self.balances.get(self.pool_holder, asset_id)
        if available < amount:
            raise InsufficientBalanceError(
                f"Insufficient pool balance: {available} {asset_id}, needs {amount}"
            )
        self.balances.subtract(self.pool_holder, asset_id, amount)
        self.balances.add(to_holder, asset_id, amount)
        logger.debug("transfer_out %s %s to %s", amount, asset_id, to_holder)

    def __repr__(self) -> str:
        return f"InMemoryLedger(pool_holder={self.pool_holder!r}, {self.balances!r})"
