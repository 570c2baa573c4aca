#!/usr/bin/env python3
"""
Offline demo: seed a pool, run swaps, withdraw, and print reserves after each step.

Example:
    python tools/simpledex_demo.py --liquidity 100 200 --swap 10:0 --swap 5:1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from simpledex import DexError, InMemoryLedger, Pool, PoolConfig, load_pool_config
from simpledex.state import compute_pool_id

logger = logging.getLogger("simpledex.demo")


def _parse_swap(text: str) -> Tuple[int, bool]:
    """`AMOUNT:SIDE` where SIDE is 0 (sell asset0) or 1 (sell asset1)."""
    try:
        amount_s, side_s = text.split(":", 1)
        amount = int(amount_s)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected AMOUNT:SIDE, got {text!r}") from exc
    if side_s not in ("0", "1"):
        raise argparse.ArgumentTypeError(f"SIDE must be 0 or 1, got {side_s!r}")
    return amount, side_s == "0"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("--config", type=Path, default=None, help="YAML pool config (defaults: 3%% fee, uint256 bounds)")
    p.add_argument("--asset0", default="TKN0")
    p.add_argument("--asset1", default="TKN1")
    p.add_argument("--liquidity", nargs=2, type=int, metavar=("AMOUNT0", "AMOUNT1"), default=[100, 200])
    p.add_argument("--swap", action="append", type=_parse_swap, default=[], metavar="AMOUNT:SIDE")
    p.add_argument("--remove", nargs=2, type=int, metavar=("AMOUNT0", "AMOUNT1"), default=None)
    p.add_argument("--mint", type=int, default=1_000_000, help="starting balance of each asset for the trader")
    p.add_argument("--json", action="store_true", help="print the final pool snapshot as JSON")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def run(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_pool_config(args.config) if args.config is not None else PoolConfig()
    logger.debug("pool config: %s", config)
    trader = "demo-trader"

    ledger = InMemoryLedger(
        compute_pool_id(args.asset0, args.asset1, config.fee_numerator, config.fee_denominator)
    )
    pool = Pool(args.asset0, args.asset1, config=config, ledger=ledger)
    ledger.mint(trader, args.asset0, args.mint)
    ledger.mint(trader, args.asset1, args.mint)

    def _approve_all() -> None:
        ledger.approve(trader, args.asset0, ledger.balance_of(trader, args.asset0))
        ledger.approve(trader, args.asset1, ledger.balance_of(trader, args.asset1))

    try:
        _approve_all()
        used0, used1 = pool.add_liquidity(args.liquidity[0], args.liquidity[1], sender=trader)
        print(f"[demo] pool_id={pool.pool_id}")
        print(f"[demo] add_liquidity used=({used0}, {used1}) reserves=({pool.reserve0}, {pool.reserve1})")

        for amount_in, in_is_asset0 in args.swap:
            _approve_all()
            k_before = pool.constant_product()
            amount_out = pool.swap(amount_in, in_is_asset0, sender=trader)
            side = args.asset0 if in_is_asset0 else args.asset1
            print(
                f"[demo] swap in={amount_in} {side} out={amount_out} "
                f"reserves=({pool.reserve0}, {pool.reserve1}) k: {k_before} -> {pool.constant_product()}"
            )

        if args.remove is not None:
            pool.remove_liquidity(args.remove[0], args.remove[1], sender=trader)
            print(f"[demo] remove_liquidity reserves=({pool.reserve0}, {pool.reserve1})")
    except DexError as exc:
        print(f"[demo] FAIL ({exc.code}): {exc}")
        return 1

    print(
        f"[demo] trader balances: {args.asset0}={ledger.balance_of(trader, args.asset0)} "
        f"{args.asset1}={ledger.balance_of(trader, args.asset1)}"
    )
    if args.json:
        print(json.dumps(pool.snapshot().to_dict(), sort_keys=True))
    print(f"[demo] OK: {len(pool.events)} events")
    return 0


def main() -> int:
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
