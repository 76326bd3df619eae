"""Comparison rules behind ``expect_identical`` and ``expect_equal``."""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

# Square root of double precision machine epsilon.
DEFAULT_TOLERANCE = math.sqrt(2.220446049250313e-16)


@dataclass(frozen=True, slots=True)
class Comparison:
    """Outcome of comparing two values."""

    equal: bool
    message: str | None = None

    def __bool__(self) -> bool:
        return self.equal


_SAME = Comparison(True)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_nan(value: Any) -> bool:
    # Self-inequality rather than math.isnan(): ints past float range overflow.
    return value != value


def compare_identical(actual: Any, expected: Any) -> Comparison:
    """Exact comparison: same type and same value, recursively.

    Floats must be equal to the bit (NaN is identical to NaN), so values that
    tolerance-based equality accepts are rejected here.
    """
    if type(actual) is not type(expected):
        return Comparison(
            False, f"Types not compatible: {_type_name(actual)} is not {_type_name(expected)}"
        )

    if isinstance(actual, float):
        if actual == expected or (math.isnan(actual) and math.isnan(expected)):
            return _SAME
        return Comparison(False, f"{actual!r} is not {expected!r} (difference: {actual - expected:.7g})")

    if isinstance(actual, (list, tuple)):
        if len(actual) != len(expected):
            return Comparison(False, f"Lengths ({len(actual)}, {len(expected)}) differ")
        for i, (a, e) in enumerate(zip(actual, expected)):
            inner = compare_identical(a, e)
            if not inner:
                return Comparison(False, f"Component {i}: {inner.message}")
        return _SAME

    if isinstance(actual, dict):
        if list(actual) != list(expected):
            return Comparison(False, f"Keys differ: {list(actual)!r} vs {list(expected)!r}")
        for key in actual:
            inner = compare_identical(actual[key], expected[key])
            if not inner:
                return Comparison(False, f"Component {key!r}: {inner.message}")
        return _SAME

    if bool(actual == expected):
        return _SAME
    return Comparison(False, f"{_truncate_repr(actual)} is not {_truncate_repr(expected)}")


def _truncate_repr(value: Any, max_len: int = 60) -> str:
    s = repr(value)
    return s if len(s) <= max_len else s[: max_len - 3] + "..."


def _compare_numeric(actual: Sequence[Any], expected: Sequence[Any], tolerance: float) -> Comparison:
    """Mean relative (or absolute) difference over the elements that differ."""
    nan_actual = [_is_nan(v) for v in actual]
    nan_expected = [_is_nan(v) for v in expected]
    if nan_actual != nan_expected:
        return Comparison(
            False,
            f"'is.NaN' value mismatch: {sum(nan_actual)} in current {sum(nan_expected)} in target",
        )

    # Exact comparison first, so equal big ints never go through float().
    pairs = [(t, c) for t, c, missing in zip(expected, actual, nan_expected) if not missing and t != c]
    if not pairs:
        return _SAME

    n = len(pairs)
    total_diff = sum(_abs_difference(t, c) for t, c in pairs)
    total_target = sum(abs(t) for t, _ in pairs)
    if _is_finite(total_target) and total_target > tolerance * n:
        what, xy = "relative", _ratio(total_diff, total_target)
    else:
        what, xy = "absolute", _ratio(total_diff, n)

    if math.isnan(xy) or xy > tolerance:
        return Comparison(False, f"Mean {what} difference: {xy:.7g}")
    return _SAME


def _abs_difference(target: Any, current: Any) -> Any:
    try:
        return abs(target - current)
    except OverflowError:
        return math.inf


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return True


def _ratio(numerator: Any, denominator: Any) -> float:
    """``numerator / denominator`` as a float; exact for ints of any size."""
    try:
        return float(numerator / denominator)
    except OverflowError:
        return math.inf


def compare_equal(actual: Any, expected: Any, tolerance: float = DEFAULT_TOLERANCE) -> Comparison:
    """Tolerance-based comparison.

    Numbers (and sequences of numbers) pass when their mean relative
    difference is at most ``tolerance``. The difference is taken relative to
    the expected magnitude, falling back to absolute when that magnitude is
    not larger than the tolerance. Other values are compared recursively and
    finally by ``==``.
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    if _is_real(actual) and _is_real(expected):
        return _compare_numeric([actual], [expected], tolerance)

    if _is_sequence(actual) and _is_sequence(expected):
        if len(actual) != len(expected):
            return Comparison(False, f"Lengths ({len(actual)}, {len(expected)}) differ")
        if all(_is_real(v) for v in actual) and all(_is_real(v) for v in expected):
            return _compare_numeric(actual, expected, tolerance)
        messages = []
        for i, (a, e) in enumerate(zip(actual, expected)):
            inner = compare_equal(a, e, tolerance)
            if not inner:
                messages.append(f"Component {i}: {inner.message}")
        return Comparison(False, "; ".join(messages)) if messages else _SAME

    if isinstance(actual, Mapping) and isinstance(expected, Mapping):
        missing = [k for k in expected if k not in actual]
        extra = [k for k in actual if k not in expected]
        if missing or extra:
            return Comparison(False, f"Keys differ: missing {missing!r}, unexpected {extra!r}")
        messages = []
        for key in expected:
            inner = compare_equal(actual[key], expected[key], tolerance)
            if not inner:
                messages.append(f"Component {key!r}: {inner.message}")
        return Comparison(False, "; ".join(messages)) if messages else _SAME

    if isinstance(actual, str) and isinstance(expected, str):
        if actual == expected:
            return _SAME
        return Comparison(False, f"1 string mismatch: {_truncate_repr(actual)} vs {_truncate_repr(expected)}")

    if _is_real(actual) != _is_real(expected) or isinstance(actual, str) != isinstance(expected, str):
        return Comparison(
            False, f"Types not compatible: {_type_name(actual)} is not {_type_name(expected)}"
        )

    if bool(actual == expected):
        return _SAME
    return Comparison(False, f"{_truncate_repr(actual)} is not equal to {_truncate_repr(expected)}")
