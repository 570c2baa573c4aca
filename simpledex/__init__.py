"""SimpleDEX: a two-asset constant-product pool core.

Public API:
- `Pool(asset0_id, asset1_id, config=..., ledger=...)`
- `Pool.add_liquidity / remove_liquidity / swap` (raise `DexError` subclasses on rejection)
- `InMemoryLedger` reference ledger, `PoolConfig`, `PoolState` snapshots
"""

from .core import (
    EventKind,
    LiquidityAdded,
    LiquidityRemoved,
    Pool,
    PoolConfig,
    Swap,
    load_pool_config,
)
from .errors import (
    AmountOverflowError,
    DexError,
    InsufficientAllowanceError,
    InsufficientAmount0Error,
    InsufficientAmount1Error,
    InsufficientBalanceError,
    InsufficientLiquidityError,
    InsufficientReserve0Error,
    InsufficientReserve1Error,
    InvalidAmountError,
    InvariantViolationError,
    LedgerError,
    NonProportionalRemovalError,
    PoolError,
    ZeroAmountError,
)
from .state import InMemoryLedger, Ledger, PoolState

__version__ = "0.1.0"

__all__ = [
    "Pool",
    "PoolConfig",
    "PoolState",
    "Ledger",
    "InMemoryLedger",
    "load_pool_config",
    "EventKind",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "DexError",
    "PoolError",
    "LedgerError",
    "ZeroAmountError",
    "InsufficientAmount0Error",
    "InsufficientAmount1Error",
    "InsufficientReserve0Error",
    "InsufficientReserve1Error",
    "NonProportionalRemovalError",
    "InsufficientLiquidityError",
    "InvalidAmountError",
    "AmountOverflowError",
    "InvariantViolationError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
]
