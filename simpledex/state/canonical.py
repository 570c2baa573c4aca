"""
Deterministic canonical encoding primitives.

Used to serialize pool snapshots so that equal states always produce equal
bytes (and therefore equal digests), independent of dict insertion order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


CANONICAL_ENCODING_VERSION = 1


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()
