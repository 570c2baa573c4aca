"""
Core pool logic
"""

from .config import PoolConfig, UINT256_MAX, load_pool_config, pool_config_from_mapping
from .events import EventKind, EventLog, LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from .pool import Pool

__all__ = [
    "Pool",
    "PoolConfig",
    "UINT256_MAX",
    "load_pool_config",
    "pool_config_from_mapping",
    "EventKind",
    "EventLog",
    "LiquidityAdded",
    "LiquidityRemoved",
    "PoolEvent",
    "Swap",
]
