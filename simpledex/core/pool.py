"""
Two-asset constant-product pool.

`Pool` is the imperative shell around the pure kernels:
- stage: compute every derived value from the current reserves,
- validate: run all preconditions (fail-closed, first failure raised),
- transfer: move assets through the optional `Ledger`,
- commit: assign both reserves in one step, then emit the event.

A failure at any stage leaves the reserves untouched. Ledger legs that were
already executed are compensated before the error propagates.

Each pool serializes its operations with a re-entrant lock, so a pool may be
shared between threads and subscribers may read it while an event is being
dispatched.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Tuple

from ..errors import (
    AmountOverflowError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvariantViolationError,
    PoolError,
)
from ..kernels.cpmm_swap import SwapExactInResult, swap_exact_in
from ..kernels.lp_math import OptimalLiquidityResult, check_proportional_removal, optimal_liquidity
from ..state.balances import Amount, AssetId, Holder
from ..state.ledger import Ledger
from ..state.pools import PoolState, compute_pool_id
from .config import PoolConfig
from .events import EventLog, LiquidityAdded, LiquidityRemoved, Swap

logger = logging.getLogger(__name__)


def _require_asset_id(name: str, value: AssetId) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{name} must be valid Unicode (no lone surrogates): {value!r}") from exc


class Pool:
    """
    Liquidity pool over `asset0_id` / `asset1_id`.

    Without a ledger the pool only keeps the books (reserves + events); with
    one, every committed operation is backed by the corresponding transfers.
    """

    def __init__(
        self,
        asset0_id: AssetId,
        asset1_id: AssetId,
        *,
        config: Optional[PoolConfig] = None,
        ledger: Optional[Ledger] = None,
        pool_id: Optional[str] = None,
    ) -> None:
        _require_asset_id("asset0_id", asset0_id)
        _require_asset_id("asset1_id", asset1_id)
        if asset0_id == asset1_id:
            raise ValueError(f"Pool assets must differ: {asset0_id!r}")
        if ledger is not None and not isinstance(ledger, Ledger):
            raise TypeError("ledger must implement transfer_in/transfer_out")

        self._asset0_id = asset0_id
        self._asset1_id = asset1_id
        self._config = config if config is not None else PoolConfig()
        self._pool_id = pool_id or compute_pool_id(
            asset0_id, asset1_id, self._config.fee_numerator, self._config.fee_denominator
        )
        self._ledger = ledger
        self._reserve0: Amount = 0
        self._reserve1: Amount = 0
        self._events = EventLog()
        self._lock = threading.RLock()

        logger.debug("created pool %s (%s, %s)", self._pool_id, asset0_id, asset1_id)

    @classmethod
    def from_state(
        cls,
        state: PoolState,
        *,
        config: Optional[PoolConfig] = None,
        ledger: Optional[Ledger] = None,
    ) -> "Pool":
        """Restore a pool from a snapshot. The config's fee must match the snapshot's."""
        if config is None:
            config = PoolConfig(fee_numerator=state.fee_numerator, fee_denominator=state.fee_denominator)
        elif (config.fee_numerator, config.fee_denominator) != (state.fee_numerator, state.fee_denominator):
            raise ValueError(
                f"config fee {config.fee_numerator}/{config.fee_denominator} does not match "
                f"snapshot fee {state.fee_numerator}/{state.fee_denominator}"
            )
        pool = cls(state.asset0, state.asset1, config=config, ledger=ledger, pool_id=state.pool_id)
        pool._check_reserves(state.reserve0, state.reserve1)
        pool._reserve0 = state.reserve0
        pool._reserve1 = state.reserve1
        return pool

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def asset0_id(self) -> AssetId:
        return self._asset0_id

    @property
    def asset1_id(self) -> AssetId:
        return self._asset1_id

    @property
    def pool_id(self) -> str:
        return self._pool_id

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def ledger(self) -> Optional[Ledger]:
        return self._ledger

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def reserve0(self) -> Amount:
        return self._reserve0

    @property
    def reserve1(self) -> Amount:
        return self._reserve1

    def reserves(self) -> Tuple[Amount, Amount]:
        """Both reserves read atomically."""
        with self._lock:
            return self._reserve0, self._reserve1

    def constant_product(self) -> int:
        with self._lock:
            return self._reserve0 * self._reserve1

    def snapshot(self) -> PoolState:
        with self._lock:
            return PoolState(
                pool_id=self._pool_id,
                asset0=self._asset0_id,
                asset1=self._asset1_id,
                reserve0=self._reserve0,
                reserve1=self._reserve1,
                fee_numerator=self._config.fee_numerator,
                fee_denominator=self._config.fee_denominator,
            )

    # ------------------------------------------------------------------
    # Quotes (no state change, no ledger calls)
    # ------------------------------------------------------------------

    def quote_add_liquidity(self, amount0: Amount, amount1: Amount) -> OptimalLiquidityResult:
        with self._operation("quote_add_liquidity"):
            return self._plan_add(amount0, amount1)

    def quote_swap(self, amount_in: Amount, in_is_asset0: bool) -> SwapExactInResult:
        with self._operation("quote_swap"):
            return self._plan_swap(amount_in, in_is_asset0)

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def add_liquidity(self, amount0: Amount, amount1: Amount, *, sender: Holder) -> Tuple[Amount, Amount]:
        """
        Deposit both assets at the current ratio.

        The first deposit sets the price and is taken as-is. Later deposits take
        all of `amount0` and only `floor(amount0 * reserve1 / reserve0)` of asset1;
        the rest of `amount1` is left with the sender.

        Returns:
            (used0, used1) actually pulled into the pool
        """
        with self._operation("add_liquidity"):
            plan = self._plan_add(amount0, amount1)
            used0, used1 = plan.amount0_used, plan.amount1_used

            if self._ledger is not None:
                self._ledger.transfer_in(self._asset0_id, sender, used0)
                try:
                    self._ledger.transfer_in(self._asset1_id, sender, used1)
                except Exception:
                    logger.warning(
                        "add_liquidity on %s: asset1 leg failed, returning %s %s to %s",
                        self._pool_id, used0, self._asset0_id, sender,
                    )
                    self._compensate(
                        "add_liquidity", lambda: self._ledger.transfer_out(self._asset0_id, sender, used0)
                    )
                    raise

            self._reserve0, self._reserve1 = plan.new_reserve0, plan.new_reserve1
            logger.debug(
                "add_liquidity %s by %s: used=(%s, %s) reserves=(%s, %s)",
                self._pool_id, sender, used0, used1, self._reserve0, self._reserve1,
            )
            self._events.emit(LiquidityAdded(provider=sender, used0=used0, used1=used1))
            return used0, used1

    def remove_liquidity(self, amount0: Amount, amount1: Amount, *, sender: Holder) -> None:
        """
        Withdraw `(amount0, amount1)`, which must match the current reserve ratio exactly.

        Shares are not tracked: any sender may withdraw.
        """
        with self._operation("remove_liquidity"):
            reserve0, reserve1 = self._reserve0, self._reserve1
            check_proportional_removal(reserve0=reserve0, reserve1=reserve1, amount0=amount0, amount1=amount1)
            new_reserve0 = reserve0 - amount0
            new_reserve1 = reserve1 - amount1

            if self._ledger is not None:
                self._ledger.transfer_out(self._asset0_id, sender, amount0)
                try:
                    self._ledger.transfer_out(self._asset1_id, sender, amount1)
                except Exception:
                    logger.warning(
                        "remove_liquidity on %s: asset1 leg failed, pulling %s %s back from %s",
                        self._pool_id, amount0, self._asset0_id, sender,
                    )
                    self._compensate(
                        "remove_liquidity", lambda: self._ledger.transfer_in(self._asset0_id, sender, amount0)
                    )
                    raise

            self._reserve0, self._reserve1 = new_reserve0, new_reserve1
            logger.debug(
                "remove_liquidity %s by %s: amounts=(%s, %s) reserves=(%s, %s)",
                self._pool_id, sender, amount0, amount1, self._reserve0, self._reserve1,
            )
            self._events.emit(LiquidityRemoved(provider=sender, amount0=amount0, amount1=amount1))

    def swap(self, amount_in: Amount, in_is_asset0: bool, *, sender: Holder) -> Amount:
        """
        Sell `amount_in` of one asset for the other.

        The full input (fee included) is added to the input reserve; only the
        fee-adjusted input is priced on the curve.

        Returns:
            amount_out paid to the sender
        """
        with self._operation("swap"):
            quote = self._plan_swap(amount_in, in_is_asset0)
            amount_out = quote.amount_out
            asset_in, asset_out = self._oriented_assets(in_is_asset0)

            if self._ledger is not None:
                self._ledger.transfer_in(asset_in, sender, amount_in)
                try:
                    self._ledger.transfer_out(asset_out, sender, amount_out)
                except Exception:
                    logger.warning(
                        "swap on %s: output leg failed, refunding %s %s to %s",
                        self._pool_id, amount_in, asset_in, sender,
                    )
                    self._compensate("swap", lambda: self._ledger.transfer_out(asset_in, sender, amount_in))
                    raise

            if in_is_asset0:
                self._reserve0, self._reserve1 = quote.new_reserve_in, quote.new_reserve_out
            else:
                self._reserve0, self._reserve1 = quote.new_reserve_out, quote.new_reserve_in
            logger.debug(
                "swap %s by %s: in=%s %s out=%s %s reserves=(%s, %s)",
                self._pool_id, sender, amount_in, asset_in, amount_out, asset_out,
                self._reserve0, self._reserve1,
            )
            self._events.emit(
                Swap(trader=sender, amount_in=amount_in, amount_out=amount_out, in_is_asset0=in_is_asset0)
            )
            return amount_out

    # ------------------------------------------------------------------
    # Staging helpers (caller holds the lock)
    # ------------------------------------------------------------------

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except PoolError as exc:
                logger.debug("%s rejected on %s: %s", name, self._pool_id, exc.code)
                raise

    def _compensate(self, name: str, undo: Callable[[], None]) -> None:
        """
        Run the ledger leg that reverses an already executed transfer.

        A failure here is logged and not raised, so the caller re-raises the
        ledger error that triggered the compensation. After such a failure the
        pool's ledger balance no longer matches its reserves.
        """
        try:
            undo()
        except Exception:
            logger.exception(
                "%s on %s: compensating transfer failed; ledger balance and reserves disagree",
                name, self._pool_id,
            )

    def _oriented_assets(self, in_is_asset0: bool) -> Tuple[AssetId, AssetId]:
        if in_is_asset0:
            return self._asset0_id, self._asset1_id
        return self._asset1_id, self._asset0_id

    def _check_amount(self, name: str, amount: Amount) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError(f"{name} must be an int")
        if amount < 0:
            raise ValueError(f"{name} must be non-negative: {amount}")
        if amount > self._config.max_amount:
            raise AmountOverflowError(f"{name} exceeds max_amount: {amount}")

    def _check_reserves(self, reserve0: Amount, reserve1: Amount) -> None:
        if reserve0 > self._config.max_amount or reserve1 > self._config.max_amount:
            raise AmountOverflowError(f"reserves would exceed max_amount: ({reserve0}, {reserve1})")

    def _plan_add(self, amount0: Amount, amount1: Amount) -> OptimalLiquidityResult:
        self._check_amount("amount0", amount0)
        self._check_amount("amount1", amount1)
        plan = optimal_liquidity(
            reserve0=self._reserve0,
            reserve1=self._reserve1,
            amount0_desired=amount0,
            amount1_desired=amount1,
        )
        self._check_reserves(plan.new_reserve0, plan.new_reserve1)
        return plan

    def _plan_swap(self, amount_in: Amount, in_is_asset0: bool) -> SwapExactInResult:
        if not isinstance(in_is_asset0, bool):
            raise TypeError("in_is_asset0 must be a bool")
        self._check_amount("amount_in", amount_in)
        if amount_in == 0:
            raise InvalidAmountError()
        if self._reserve0 == 0 or self._reserve1 == 0:
            raise InsufficientLiquidityError()

        if in_is_asset0:
            reserve_in, reserve_out = self._reserve0, self._reserve1
        else:
            reserve_in, reserve_out = self._reserve1, self._reserve0

        quote = swap_exact_in(
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            amount_in=amount_in,
            fee_numerator=self._config.fee_numerator,
            fee_denominator=self._config.fee_denominator,
        )
        if quote.amount_out == 0 and self._config.reject_zero_output:
            raise InvalidAmountError("Invalid amount: output rounds to zero")
        if quote.new_reserve_in > self._config.max_amount:
            raise AmountOverflowError(f"reserve would exceed max_amount: {quote.new_reserve_in}")
        if quote.k_after < quote.k_before:
            raise InvariantViolationError(
                f"Invariant violation: k_after ({quote.k_after}) < k_before ({quote.k_before})"
            )
        return quote

    def __repr__(self) -> str:
        return (
            f"Pool(pool_id={self._pool_id[:16]}..., "
            f"assets=({self._asset0_id}, {self._asset1_id}), "
            f"reserves=({self._reserve0}, {self._reserve1}))"
        )
