"""Shared fixtures for unit tests."""

import textwrap
from pathlib import Path

import pytest

from vouch.reports.base import Reporter


class NullReporter(Reporter):
    """Silent reporter that remembers the hooks it received."""

    def __init__(self) -> None:
        self.events: list[str] = []
        self.test_results = []
        self.stopped_early_with: int | None = None

    async def on_no_tests_found(self) -> None:
        self.events.append("no_tests")

    async def on_collection_complete(self, contexts) -> None:
        self.events.append("collected")

    async def on_context_start(self, context) -> None:
        self.events.append(f"start:{context.label}")

    async def on_test_complete(self, result) -> None:
        self.events.append("test")
        self.test_results.append(result)

    async def on_context_complete(self, result) -> None:
        self.events.append(f"end:{result.label}")

    async def on_run_complete(self, run_result) -> None:
        self.events.append("done")

    async def on_run_stopped_early(self, failure_count: int) -> None:
        self.events.append("stopped")
        self.stopped_early_with = failure_count


@pytest.fixture
def null_reporter() -> NullReporter:
    """Provide a silent reporter for tests."""
    return NullReporter()


@pytest.fixture
def write_test_file(tmp_path: Path):
    """Write a dedented vouch test file into tmp_path and return its path."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return _write
