"""
Multi-asset balance tracking.

Implements BalanceTable[Holder, AssetId] -> Amount
"""

from typing import Dict, Tuple


# Type aliases
Holder = str  # account or pool address
AssetId = str  # asset identifier (token address, symbol, ...)
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Balance table mapping (holder, asset) -> amount.

    Zero balances are not stored. Callers that need a stable order must sort
    the keys themselves.
    """

    def __init__(self):
        self._balances: Dict[Tuple[Holder, AssetId], Amount] = {}

    def get(self, holder: Holder, asset: AssetId) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset), 0)

    def set(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((holder, asset), None)
        else:
            self._balances[(holder, asset)] = amount

    def add(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, asset, new_balance)

    def subtract(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, asset, -delta)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
