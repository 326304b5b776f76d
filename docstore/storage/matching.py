"""Loose (type-coercing) equality used for every key/value match.

Rules, applied in order:

1. ``None`` equals only ``None``.
2. If either side is a ``bool``, the truthiness of both sides is compared.
3. Numbers and numeric strings (``" 1"``, ``"1.0"``, ``"-2e3"``) compare
   numerically when both sides are numeric.
4. Two strings compare exactly.
5. A number against a non-numeric string compares the number's string form.
6. Anything else falls back to ``==``.
"""
import re
from typing import Any, Mapping, Optional, Union

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")


def _as_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _INTEGER.match(value):
        return int(value)
    if isinstance(value, str) and _NUMERIC.match(value):
        return float(value)
    return None


def _number_text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def loosely_equal(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, bool) or isinstance(b, bool):
        return bool(a) == bool(b)

    na, nb = _as_number(a), _as_number(b)
    if na is not None and nb is not None:
        return na == nb
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if na is not None and isinstance(b, str):
        return _number_text(a) == b
    if nb is not None and isinstance(a, str):
        return a == _number_text(b)
    return a == b


def matches(item: Any, key: str, value: Any) -> bool:
    """True when ``item`` is a mapping holding a non-null ``key`` loosely equal to ``value``."""
    if not isinstance(item, Mapping):
        return False
    found = item.get(key)
    return found is not None and loosely_equal(found, value)
