"""Reporter protocol for vouch run output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from vouch.testing.definitions import ContextDefinition
    from vouch.testing.results import ContextResult, RunResult, TestResult


class Reporter(Protocol):
    """Interface every reporter implements.

    Hooks are async so reporters that write files or talk to services can
    await I/O. Console reporters simply don't await anything. Hooks fire in
    execution order: collection, then per context ``on_context_start``, one
    ``on_test_complete`` per test and ``on_context_complete``, then the run
    hooks.
    """

    async def on_no_tests_found(self) -> None:
        """Called when collection finds no tests."""
        ...

    async def on_collection_complete(self, contexts: list[ContextDefinition]) -> None:
        """Called once before the first test runs."""
        ...

    async def on_context_start(self, context: ContextDefinition) -> None:
        ...

    async def on_test_complete(self, result: TestResult) -> None:
        """Called after each test reaches a terminal state."""
        ...

    async def on_context_complete(self, result: ContextResult) -> None:
        ...

    async def on_run_complete(self, run_result: RunResult) -> None:
        """Called after all tests complete."""
        ...

    async def on_run_stopped_early(self, failure_count: int) -> None:
        """Called when the run stops early due to the maxfail limit."""
        ...
