"""Demonstrates checking what code prints.

Run with:
    vouch test examples/vouch_example_captured_output.py

Show test output live as well:
    vouch test examples/vouch_example_captured_output.py -s
"""

import warnings

from vouch import expect_equal, expect_output, expect_warning, test_that


class Greeter:
    def __init__(self, prefix: str = "Hello"):
        self.prefix = prefix

    def greet(self, name: str) -> str:
        message = f"{self.prefix}, {name}!"
        print(message)
        return message

    def greet_many(self, names: list[str]) -> list[str]:
        return [self.greet(name) for name in names]

    def shout(self, name: str) -> str:
        warnings.warn("shout() is deprecated, use greet()", DeprecationWarning)
        return self.greet(name.upper())


@test_that("greet prints the greeting")
def _():
    out = expect_output(Greeter().greet, "World", match=r"Hello, World!")
    expect_equal(out, "Hello, World!\n")


@test_that("greet_many prints one line per name")
def _():
    out = expect_output(Greeter("Hi").greet_many, ["Alice", "Bob"])
    expect_equal(out.splitlines(), ["Hi, Alice!", "Hi, Bob!"])


@test_that("shout is deprecated")
def _():
    expect_warning(Greeter().shout, "bob", category=DeprecationWarning, match="deprecated")


@test_that("uncaptured prints show up under the failure")
def _():
    print("debug: about to compare")
    expect_equal(Greeter().prefix, "Hi")
