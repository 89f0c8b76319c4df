"""Dynamic field values and the comparison rules shared by filtering and sorting.

A field value is any JSON-like value: ``None``, ``bool``, a number, ``str``,
a list of values or a ``str``-keyed mapping of values. Numbers of every width
are normalized to ``float`` before they are compared, so ``5`` and ``5.0`` are
equal and order identically. Integers too wide for a double keep their exact
value. Values that are not both numeric fall back to a canonical string
rendering, which makes equality deliberately loose
(``True == "true"``).
"""

from __future__ import annotations

import math
import numbers
from typing import Any, TypeAlias

import orjson
from pydantic import JsonValue


Value: TypeAlias = JsonValue

# Integral floats beyond this magnitude render in exponent form.
_INTEGRAL_RENDER_LIMIT = 1e21
_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def to_number(value: Any) -> float | None:
    """Return the normalized float for numeric values, ``None`` otherwise.

    ``bool`` is an ``int`` subclass in Python but is never treated as a number.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def render(value: Any) -> str:
    """Render a value to its canonical string form.

    Scalars render the way they read in JSON (``true``, ``null``), integral
    numbers drop the fractional part so ``5`` and ``5.0`` render alike, and
    containers render as compact JSON with sorted keys.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    number = to_number(value)
    if number is not None:
        return _render_number(number)
    if isinstance(value, (list, tuple, dict)):
        try:
            encoded = orjson.dumps(value, option=orjson.OPT_SORT_KEYS, default=str)
        except orjson.JSONEncodeError:
            encoded = orjson.dumps(_wide_ints_as_fragments(value), option=orjson.OPT_SORT_KEYS, default=str)
        return encoded.decode("utf-8")
    return str(value)


def _wide_ints_as_fragments(value: Any) -> Any:
    # orjson only encodes integers in the 64-bit range.
    if isinstance(value, dict):
        return {key: _wide_ints_as_fragments(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_wide_ints_as_fragments(item) for item in value]
    if isinstance(value, int) and not isinstance(value, bool) and not _INT64_MIN <= value <= _UINT64_MAX:
        return orjson.Fragment(str(value))
    return value


def _render_number(number: float) -> str:
    if math.isfinite(number) and number.is_integer() and abs(number) < _INTEGRAL_RENDER_LIMIT:
        return str(int(number))
    return repr(number)


def values_equal(left: Any, right: Any) -> bool:
    """Loose equality: null-aware, numeric when both sides are numbers, else by rendering."""
    if left is None or right is None:
        return left is None and right is None

    pair = _numeric_pair(left, right)
    if pair is not None:
        return pair[0] == pair[1]

    return render(left) == render(right)


def compare_values(left: Any, right: Any) -> int:
    """Three-way comparison returning -1, 0 or 1.

    ``None`` sorts before every non-null value and equals itself. Two numbers
    compare numerically; anything else compares by canonical rendering, code
    point by code point.
    """
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1

    pair = _numeric_pair(left, right)
    if pair is not None:
        return _sign(*pair)

    return _sign(render(left), render(right))


def _numeric_pair(left: Any, right: Any) -> tuple[Any, Any] | None:
    left_number = to_number(left)
    right_number = to_number(right)
    if left_number is not None and right_number is not None:
        return left_number, right_number
    # Integers too wide for a double keep their exact value; Python compares
    # them against floats without converting.
    if left_number is None and _is_wide_int(left):
        left_number = left
    if right_number is None and _is_wide_int(right):
        right_number = right
    if left_number is None or right_number is None:
        return None
    return left_number, right_number


def _is_wide_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and to_number(value) is None


def _sign(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def iter_scalars(value: Any):
    """Yield every scalar reachable from ``value``, descending into lists and mapping values."""
    if isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_scalars(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_scalars(item)
    else:
        yield value
