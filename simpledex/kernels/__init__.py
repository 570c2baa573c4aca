"""
Pricing and liquidity kernels.

These modules are designed to be:
- deterministic (integer-only, arbitrary precision),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results).

They never touch pool state or a ledger; `simpledex.core.pool` composes them.
"""
