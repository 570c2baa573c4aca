"""
State management for SimpleDEX pools
"""

from .balances import BalanceTable
from .ledger import InMemoryLedger, Ledger
from .pools import PoolState, compute_pool_id

__all__ = [
    "BalanceTable",
    "InMemoryLedger",
    "Ledger",
    "PoolState",
    "compute_pool_id",
]
