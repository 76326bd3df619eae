"""Expectation library: ``expect_*`` functions and their result types."""

from .base import ExpectationFailedError, ExpectationResult, SourceLocation
from .basic import (
    expect_equal,
    expect_false,
    expect_identical,
    expect_is,
    expect_length,
    expect_match,
    expect_none,
    expect_true,
    fail,
    succeed,
)
from .compare import DEFAULT_TOLERANCE, Comparison, compare_equal, compare_identical
from .signals import expect_error, expect_no_error, expect_output, expect_warning

__all__ = [
    "ExpectationResult",
    "ExpectationFailedError",
    "SourceLocation",
    "Comparison",
    "DEFAULT_TOLERANCE",
    "compare_equal",
    "compare_identical",
    "expect_equal",
    "expect_identical",
    "expect_match",
    "expect_true",
    "expect_false",
    "expect_none",
    "expect_is",
    "expect_length",
    "expect_error",
    "expect_no_error",
    "expect_warning",
    "expect_output",
    "succeed",
    "fail",
]
