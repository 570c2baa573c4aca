"""Pool events and the per-pool event log.

Events are frozen dataclasses. A pool appends one event per committed
operation to its `EventLog`, which keeps the ordered history and forwards each
event to the registered subscribers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable, List, Union


@unique
class EventKind(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAP = "Swap"


@dataclass(frozen=True)
class LiquidityAdded:
    provider: str
    used0: int
    used1: int

    kind = EventKind.LIQUIDITY_ADDED


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: str
    amount0: int
    amount1: int

    kind = EventKind.LIQUIDITY_REMOVED


@dataclass(frozen=True)
class Swap:
    trader: str
    amount_in: int
    amount_out: int
    in_is_asset0: bool

    kind = EventKind.SWAP


PoolEvent = Union[LiquidityAdded, LiquidityRemoved, Swap]
Subscriber = Callable[[PoolEvent], None]


class EventLog:
    """Ordered, append-only record of pool events with subscriber fan-out."""

    def __init__(self) -> None:
        self._events: List[PoolEvent] = []
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def emit(self, event: PoolEvent) -> None:
        # Record first so the history is complete even if a subscriber raises.
        self._events.append(event)
        for callback in list(self._subscribers):
            callback(event)

    def events(self) -> List[PoolEvent]:
        return list(self._events)

    def of_kind(self, kind: EventKind) -> List[PoolEvent]:
        return [e for e in self._events if e.kind is kind]

    def last(self) -> PoolEvent:
        if not self._events:
            raise LookupError("no events recorded")
        return self._events[-1]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
