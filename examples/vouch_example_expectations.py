"""Demonstrates expectations: failures are recorded and the test keeps going.

Run with:
    vouch test examples/vouch_example_expectations.py
"""

import math

from vouch import context, expect_equal, expect_error, expect_identical, expect_match, test_that

context("Arithmetic and strings")


def mean(values: list[float]) -> float:
    if not values:
        raise ValueError("mean of empty list")
    return sum(values) / len(values)


@test_that("mean tolerates floating point noise")
def _():
    expect_equal(mean([0.1, 0.2, 0.3]), 0.2)
    expect_equal(math.sqrt(2) ** 2, 2)


@test_that("identity is stricter than tolerance")
def _():
    expect_equal(10, 10 + 1e-7)
    expect_identical(10, 10 + 1e-7)  # fails: recorded, test continues
    expect_identical(mean([2, 4]), 3.0)


@test_that("empty input is rejected")
def _():
    expect_error(mean, [], exc=ValueError, match="empty")


@test_that("greeting mentions the user")
def _():
    greeting = f"Hello, {'Alice'}!"
    expect_match(greeting, r"^Hello, \w+!$")
    expect_match(greeting, "alice", ignore_case=True)


def vouch_plain_asserts_also_count():
    """Prefixed functions are tests too; a bare assert fails them."""
    assert mean([1, 2, 3]) == 2
