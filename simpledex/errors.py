"""Exception types for the SimpleDEX pool core.

Every rejection is reported by raising one of these. Each class carries a
stable ``code`` (the condition name) and a default message matching the revert
reason of the on-chain contract the pool reproduces.

Pool state and ledger balances are unchanged whenever one of these escapes a
pool operation.
"""

from __future__ import annotations

from typing import Optional


class DexError(Exception):
    """Base class for all SimpleDEX failures."""

    code: str = "DexError"
    default_message: str = "dex error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class PoolError(DexError):
    """Raised when a pool operation's precondition is not satisfied."""

    code = "PoolError"
    default_message = "pool error"


class ZeroAmountError(PoolError):
    code = "ZeroAmount"
    default_message = "Zero amount"


class InsufficientAmount0Error(PoolError):
    code = "InsufficientAmount0"
    default_message = "Insufficient token0"


class InsufficientAmount1Error(PoolError):
    # The contract reverts with "Excess token1" although the condition is that
    # amount1 is too small for the current ratio.
    code = "InsufficientAmount1"
    default_message = "Excess token1"


class InsufficientReserve0Error(PoolError):
    code = "InsufficientReserve0"
    default_message = "Insufficient reserve0"


class InsufficientReserve1Error(PoolError):
    code = "InsufficientReserve1"
    default_message = "Insufficient reserve1"


class NonProportionalRemovalError(PoolError):
    code = "NonProportionalRemoval"
    default_message = "Must remove proportionally"


class InsufficientLiquidityError(PoolError):
    code = "InsufficientLiquidity"
    default_message = "Insufficient liquidity"


class InvalidAmountError(PoolError):
    code = "InvalidAmount"
    default_message = "Invalid amount"


class AmountOverflowError(PoolError):
    """Raised when an amount or a resulting reserve exceeds the configured domain."""

    code = "AmountOverflow"
    default_message = "Amount overflow"


class InvariantViolationError(PoolError):
    """Raised when a computed post-state would break a pool invariant."""

    code = "InvariantViolation"
    default_message = "Invariant violation"


class LedgerError(DexError):
    """Raised by a ledger when a transfer cannot be honored."""

    code = "LedgerError"
    default_message = "ledger error"


class InsufficientBalanceError(LedgerError):
    code = "InsufficientBalance"
    default_message = "Insufficient balance"


class InsufficientAllowanceError(LedgerError):
    code = "InsufficientAllowance"
    default_message = "Insufficient allowance"
