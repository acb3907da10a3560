#!/usr/bin/env python3
"""
Utility Functions
Value conversions shared by the node clients and the beacon state
"""

import re
from typing import Any

DECIMAL_RE = re.compile(r"[0-9]+")


def hex_to_int(value: Any) -> int:
    """Convert a JSON-RPC quantity ("0x1a", "26" or 26) to int"""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"Unsupported int value type: {type(value)}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v.startswith("0x"):
            return int(v, 16)
        return int(v)
    raise TypeError(f"Unsupported int value type: {type(value)}")


def parse_spec_value(value: Any) -> Any:
    """Decimal strings from the beacon API become ints; everything else is kept"""
    if isinstance(value, str) and DECIMAL_RE.fullmatch(value):
        return int(value)
    return value


def join_url(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")
