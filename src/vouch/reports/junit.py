"""JUnit XML reporter: one testsuite per context, one testcase per test."""

from __future__ import annotations

import logging
from pathlib import Path

from junitparser import Error, Failure, JUnitXml, Skipped, TestCase, TestSuite

from vouch.testing.definitions import ContextDefinition
from vouch.testing.results import ContextResult, RunResult, TestResult, TestStatus

logger = logging.getLogger(__name__)

DEFAULT_JUNIT_PATH = ".vouch/junit.xml"


class JUnitReporter:
    """Writes a JUnit XML file when the run completes."""

    def __init__(self, path: str | Path = DEFAULT_JUNIT_PATH) -> None:
        self.path = Path(path)

    async def on_no_tests_found(self) -> None:
        pass

    async def on_collection_complete(self, contexts: list[ContextDefinition]) -> None:
        pass

    async def on_context_start(self, context: ContextDefinition) -> None:
        pass

    async def on_test_complete(self, result: TestResult) -> None:
        pass

    async def on_context_complete(self, result: ContextResult) -> None:
        pass

    async def on_run_stopped_early(self, failure_count: int) -> None:
        pass

    async def on_run_complete(self, run_result: RunResult) -> None:
        self.write(run_result)

    def build(self, run_result: RunResult) -> JUnitXml:
        messages = {entry.index: entry.message for entry in run_result.failures}
        xml = JUnitXml("vouch")
        for context in run_result.contexts:
            suite = TestSuite(context.label)
            for test in context.tests:
                suite.add_testcase(self._testcase(test, messages))
            # add_testcase recomputes statistics, so set time afterwards
            suite.time = sum(t.duration_ms for t in context.tests) / 1000
            xml.append(suite)
        return xml

    def write(self, run_result: RunResult) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.build(run_result).write(str(self.path), pretty=True)
        logger.info("Wrote JUnit report to %s", self.path)
        return self.path

    def _testcase(self, test: TestResult, messages: dict[int, str]) -> TestCase:
        case = TestCase(test.description, classname=test.definition.context_label, time=test.duration_ms / 1000)
        message = messages.get(test.failure_index or 0, "")
        if test.status == TestStatus.FAILED:
            case.result = [Failure(message.splitlines()[0] if message else "failure")]
            case.result[0].text = message
        elif test.status == TestStatus.ERROR:
            case.result = [Error(message.splitlines()[0] if message else "error")]
            case.result[0].text = message
        elif test.status in (TestStatus.SKIPPED, TestStatus.XFAILED):
            case.result = [Skipped(test.skip_reason or test.definition.xfail_reason or "")]
        if test.stdout:
            case.system_out = test.stdout
        if test.stderr:
            case.system_err = test.stderr
        return case


__all__ = ["DEFAULT_JUNIT_PATH", "JUnitReporter"]
