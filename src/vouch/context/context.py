from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from vouch.expectations.base import ExpectationResult


TEST_CONTEXT: ContextVar[TestContext | None] = ContextVar("test_context", default=None)


@dataclass(frozen=True, slots=True)
class TestContext:
    """Execution context for a single running test.

    Attributes
    ----------
    test_description
        Human readable description of the running test.
    context_label
        Label of the context (test file) the test belongs to.
    module_path
        File the test was collected from.
    fail_fast
        When True, the first failed expectation raises and ends the test.
    collected_expectation_results
        Expectation results recorded while the test runs, in call order.
    """

    __test__ = False

    test_description: str | None = None
    context_label: str | None = None
    module_path: Path | None = None
    fail_fast: bool = False
    collected_expectation_results: list[ExpectationResult] = field(default_factory=list)


def get_test_context() -> TestContext | None:
    """Return the context of the running test, if any."""
    return TEST_CONTEXT.get()


@contextmanager
def test_context_scope(ctx: TestContext) -> Iterator[None]:
    token = TEST_CONTEXT.set(ctx)
    try:
        yield
    finally:
        TEST_CONTEXT.reset(token)


test_context_scope.__test__ = False  # type: ignore[attr-defined]
