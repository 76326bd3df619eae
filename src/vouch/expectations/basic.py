"""Value expectations: identity, tolerance equality, patterns, types."""

from __future__ import annotations

import re
from typing import Any

from vouch.expectations.base import ExpectationResult, build_result, report
from vouch.expectations.compare import DEFAULT_TOLERANCE, compare_equal, compare_identical


def expect_identical(actual: Any, expected: Any) -> ExpectationResult:
    """Expect ``actual`` to be exactly ``expected``: same type, same value, no tolerance."""
    comparison = compare_identical(actual, expected)
    return report(
        build_result(
            "expect_identical",
            comparison.equal,
            actual,
            expected,
            f"actual not identical to expected.\n{comparison.message}",
        )
    )


def expect_equal(actual: Any, expected: Any, tolerance: float = DEFAULT_TOLERANCE) -> ExpectationResult:
    """Expect ``actual`` to equal ``expected`` within a numeric tolerance.

    Parameters
    ----------
    actual : Any
        Value produced by the code under test.
    expected : Any
        Reference value.
    tolerance : float
        Largest accepted mean relative difference (absolute when the
        expected magnitude is below the tolerance). Defaults to the square
        root of machine epsilon, about 1.5e-8.

    Returns
    -------
    ExpectationResult
        The recorded result; the diagnostic names the relative difference.
    """
    comparison = compare_equal(actual, expected, tolerance)
    return report(
        build_result(
            "expect_equal",
            comparison.equal,
            actual,
            expected,
            f"actual not equal to expected.\n{comparison.message}",
        )
    )


def expect_match(
    actual: Any,
    pattern: str,
    *,
    fixed: bool = False,
    ignore_case: bool = False,
) -> ExpectationResult:
    """Expect ``str(actual)`` to contain ``pattern`` (a regex unless ``fixed``)."""
    text = str(actual)
    if fixed:
        needle = pattern.lower() if ignore_case else pattern
        haystack = text.lower() if ignore_case else text
        passed = needle in haystack
    else:
        flags = re.IGNORECASE if ignore_case else 0
        passed = re.search(pattern, text, flags) is not None
    return report(
        build_result(
            "expect_match",
            passed,
            text,
            pattern,
            f"actual does not match {pattern!r}.\nActual value: {text!r}",
        )
    )


def expect_true(value: Any) -> ExpectationResult:
    return report(build_result("expect_true", value is True, value, True, f"actual is {value!r}, not True"))


def expect_false(value: Any) -> ExpectationResult:
    return report(build_result("expect_false", value is False, value, False, f"actual is {value!r}, not False"))


def expect_none(value: Any) -> ExpectationResult:
    return report(build_result("expect_none", value is None, value, None, f"actual is {value!r}, not None"))


def expect_is(value: Any, cls: type | tuple[type, ...]) -> ExpectationResult:
    """Expect ``value`` to be an instance of ``cls``."""
    passed = isinstance(value, cls)
    return report(
        build_result(
            "expect_is",
            passed,
            value,
            cls,
            f"actual inherits from {type(value).__name__!r}, not {cls!r}",
        )
    )


def expect_length(value: Any, n: int) -> ExpectationResult:
    try:
        length = len(value)
    except TypeError:
        length = None
    return report(
        build_result(
            "expect_length",
            length == n,
            value,
            n,
            f"actual has length {length}, not length {n}" if length is not None else "actual has no length",
        )
    )


def succeed(message: str = "success") -> ExpectationResult:
    return report(build_result("succeed", True, message, message, description="succeed()"))


def fail(message: str = "failure") -> ExpectationResult:
    """Record an unconditional failure with ``message``."""
    return report(build_result("fail", False, message, message, message, description=f"fail({message!r})"))
