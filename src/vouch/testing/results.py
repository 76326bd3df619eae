"""Result types produced by the runner: tests, contexts and whole runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from vouch.errors import InvalidTransitionError
from vouch.expectations.base import ExpectationResult, SourceLocation
from vouch.testing.definitions import ContextDefinition, TestDefinition

logger = logging.getLogger(__name__)


class TestStatus(Enum):
    """Lifecycle of a single test: pending -> running -> a terminal state."""

    __test__ = False

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"
    XFAILED = "xfailed"
    XPASSED = "xpassed"

    @property
    def is_terminal(self) -> bool:
        return self not in (TestStatus.PENDING, TestStatus.RUNNING)

    @property
    def is_failure(self) -> bool:
        return self in (TestStatus.FAILED, TestStatus.ERROR)


_ALLOWED = {
    TestStatus.PENDING: {TestStatus.RUNNING},
    TestStatus.RUNNING: {
        TestStatus.PASSED,
        TestStatus.FAILED,
        TestStatus.ERROR,
        TestStatus.SKIPPED,
        TestStatus.XFAILED,
        TestStatus.XPASSED,
    },
}


@dataclass
class TestResult:
    """Outcome of one test and the expectations it recorded."""

    __test__ = False

    definition: TestDefinition
    status: TestStatus = TestStatus.PENDING
    expectations: list[ExpectationResult] = field(default_factory=list)
    error: BaseException | None = None
    skip_reason: str | None = None
    location: SourceLocation | None = None
    duration_ms: float = 0
    stdout: str = ""
    stderr: str = ""
    failure_index: int | None = None

    def transition(self, status: TestStatus) -> None:
        """Move to ``status``, refusing re-entry and skipped steps."""
        if status not in _ALLOWED.get(self.status, set()):
            raise InvalidTransitionError(self.definition.full_name, self.status.value, status.value)
        logger.debug("%s: %s -> %s", self.definition.full_name, self.status.value, status.value)
        self.status = status

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def failed_expectations(self) -> list[ExpectationResult]:
        return [e for e in self.expectations if not e.passed]


@dataclass
class ContextResult:
    """Ordered test results for one context."""

    label: str
    module_path: Path
    tests: list[TestResult] = field(default_factory=list)
    skip_reason: str | None = None

    @classmethod
    def from_definition(cls, definition: ContextDefinition) -> ContextResult:
        return cls(
            label=definition.label,
            module_path=definition.module_path,
            skip_reason=definition.skip_reason,
        )

    def count(self, status: TestStatus) -> int:
        return sum(1 for t in self.tests if t.status == status)


@dataclass
class FailureEntry:
    """One numbered entry of the failure index."""

    index: int
    kind: str
    context_label: str
    location: SourceLocation | None
    description: str
    message: str

    @property
    def header(self) -> str:
        where = str(self.location) if self.location else "?"
        return f"{self.index}. {self.kind}({where}): {self.description} ----"


@dataclass
class RunResult:
    """Aggregated results for a complete run."""

    contexts: list[ContextResult] = field(default_factory=list)
    failures: list[FailureEntry] = field(default_factory=list)
    total_duration_ms: float = 0
    stopped_early: bool = False

    @property
    def tests(self) -> list[TestResult]:
        return [t for ctx in self.contexts for t in ctx.tests]

    def count(self, status: TestStatus) -> int:
        return sum(ctx.count(status) for ctx in self.contexts)

    @property
    def total(self) -> int:
        return len(self.tests)

    @property
    def passed(self) -> int:
        return self.count(TestStatus.PASSED)

    @property
    def failed(self) -> int:
        return self.count(TestStatus.FAILED)

    @property
    def errors(self) -> int:
        return self.count(TestStatus.ERROR)

    @property
    def skipped(self) -> int:
        return self.count(TestStatus.SKIPPED)

    @property
    def xfailed(self) -> int:
        return self.count(TestStatus.XFAILED)

    @property
    def xpassed(self) -> int:
        return self.count(TestStatus.XPASSED)

    @property
    def expectations(self) -> int:
        return sum(len(t.expectations) for t in self.tests)

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.errors == 0


__all__ = ["ContextResult", "FailureEntry", "RunResult", "TestResult", "TestStatus"]
