"""Compact console reporter: one symbol per test, then an indexed failure list."""

from __future__ import annotations

from rich.console import Console
from rich.rule import Rule

from vouch.testing.definitions import ContextDefinition
from vouch.testing.results import ContextResult, RunResult, TestResult, TestStatus

FAILURE_LABELS = "123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

_SYMBOLS = {
    TestStatus.PASSED: (".", "green"),
    TestStatus.SKIPPED: ("S", "blue"),
    TestStatus.XFAILED: ("x", "yellow"),
    TestStatus.XPASSED: ("X", "yellow"),
}


def failure_label(index: int) -> str:
    """Symbol for the failure numbered ``index`` (1-based), cycling 1-9, a-z, A-Z."""
    return FAILURE_LABELS[(index - 1) % len(FAILURE_LABELS)]


def status_symbol(result: TestResult) -> str:
    if result.status.is_failure and result.failure_index is not None:
        return failure_label(result.failure_index)
    symbol, _ = _SYMBOLS.get(result.status, ("?", ""))
    return symbol


class SummaryReporter:
    """Prints ``<context label>: <symbols>`` per context and a summary at the end."""

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity
        self._symbols: list[str] = []

    @property
    def symbols(self) -> str:
        """Every progress symbol printed so far, in execution order."""
        return "".join(self._symbols)

    async def on_no_tests_found(self) -> None:
        self.console.print("[yellow]No tests found.[/yellow]")

    async def on_collection_complete(self, contexts: list[ContextDefinition]) -> None:
        if self.verbosity < 0:
            return
        count = sum(len(ctx.tests) for ctx in contexts)
        self.console.print(f"[bold]Collected {count} test(s) in {len(contexts)} context(s)[/bold]\n")

    async def on_context_start(self, context: ContextDefinition) -> None:
        self.console.print(f"{context.label}: ", end="", markup=False, highlight=False)

    async def on_test_complete(self, result: TestResult) -> None:
        symbol = status_symbol(result)
        self._symbols.append(symbol)
        style = "red" if result.status.is_failure else _SYMBOLS.get(result.status, ("", ""))[1]
        self.console.print(symbol, style=style or None, end="", markup=False, highlight=False)

    async def on_context_complete(self, result: ContextResult) -> None:
        if result.skip_reason is not None and not result.tests:
            self.console.print(f"[blue]skipped[/blue] ({result.skip_reason})", highlight=False)
            return
        self.console.print()
        if self.verbosity > 0:
            for test in result.tests:
                self.console.print(
                    f"  {status_symbol(test)} {test.description} [{test.duration_ms:.0f}ms]",
                    markup=False,
                    highlight=False,
                )

    async def on_run_stopped_early(self, failure_count: int) -> None:
        self.console.print(f"\n[yellow]Stopped early after {failure_count} failure(s)[/yellow]")

    async def on_run_complete(self, run_result: RunResult) -> None:
        self.console.print()
        if self.verbosity >= 0:
            self._print_skipped(run_result)
        self._print_failures(run_result)

        self.console.print(Rule("DONE", characters="═", align="left"))
        parts = [
            f"FAIL {run_result.failed}",
            f"ERROR {run_result.errors}",
            f"SKIP {run_result.skipped}",
            f"PASS {run_result.passed}",
        ]
        if run_result.xfailed or run_result.xpassed:
            parts.append(f"XFAIL {run_result.xfailed}")
            parts.append(f"XPASS {run_result.xpassed}")
        style = "green" if run_result.ok else "red"
        self.console.print(f"[ {' | '.join(parts)} ]", style=style, markup=False, highlight=False)
        self.console.print(
            f"{run_result.expectations} expectation(s) in {run_result.total_duration_ms / 1000:.2f}s",
            highlight=False,
        )

    def _print_skipped(self, run_result: RunResult) -> None:
        skipped = [t for t in run_result.tests if t.status == TestStatus.SKIPPED]
        skipped_contexts = [c for c in run_result.contexts if c.skip_reason and not c.tests]
        if not skipped and not skipped_contexts:
            return
        self.console.print(Rule("Skipped", characters="═", align="left"))
        number = 0
        for ctx in skipped_contexts:
            number += 1
            self.console.print(f"{number}. {ctx.label} - {ctx.skip_reason}", markup=False, highlight=False)
        for test in skipped:
            number += 1
            where = f"{test.definition.module_path.name}#{test.definition.line}"
            self.console.print(
                f"{number}. {test.description} ({where}) - {test.skip_reason}",
                markup=False,
                highlight=False,
            )
        self.console.print()

    def _print_failures(self, run_result: RunResult) -> None:
        if not run_result.failures:
            return
        by_index = {t.failure_index: t for t in run_result.tests if t.failure_index is not None}
        self.console.print(Rule("Failed", characters="═", align="left"))
        for entry in run_result.failures:
            self.console.print(entry.header, style="bold red", markup=False, highlight=False)
            self.console.print(entry.message, markup=False, highlight=False)
            test = by_index.get(entry.index)
            if test is not None and test.stdout and self.verbosity >= 0:
                self.console.print("Captured stdout:", style="dim")
                self.console.print(test.stdout.rstrip(), markup=False, highlight=False)
            self.console.print()


__all__ = ["FAILURE_LABELS", "SummaryReporter", "failure_label", "status_symbol"]
