"""Expectation result types and the hand-off to the running test."""

from __future__ import annotations

import inspect
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, SerializationInfo, field_serializer

from vouch.context import get_test_context

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


def _truncate(value: Any, max_len: int = 30) -> str:
    """Truncate a repr string if too long."""
    s = repr(value)
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


class SourceLocation(BaseModel):
    """File and line an expectation or error originated from."""

    path: str
    line: int

    def __str__(self) -> str:
        return f"{Path(self.path).name}#{self.line}"


def locate_caller() -> SourceLocation | None:
    """Return the first stack frame outside the vouch package."""
    frame = inspect.currentframe()
    if frame is None:
        logger.warning("No frame available to locate expectation caller")
        return None

    frame = frame.f_back
    while frame:
        filename = frame.f_code.co_filename
        try:
            inside = Path(filename).resolve().is_relative_to(_PACKAGE_DIR)
        except (OSError, ValueError):
            inside = False
        if not inside and not frame.f_globals.get("__name__", "").startswith("pydantic"):
            return SourceLocation(path=filename, line=frame.f_lineno)
        frame = frame.f_back
    return None


class ExpectationResult(BaseModel):
    """Result of evaluating one expectation.

    Attributes:
    ----------
    expectation_name: str
        Name of the ``expect_*`` function that produced the result
    description: str
        The expectation call rendered as text
    passed: bool
        Whether the expectation passed
    actual: str
        repr of the actual value
    expected: str
        repr of the expected value (or pattern, or signal class)
    message: str | None
        Diagnostic naming the discrepancy, set on failure
    location: SourceLocation | None
        Where the expectation was called from
    """

    expectation_name: str
    description: str
    passed: bool
    actual: str
    expected: str
    message: str | None = None
    location: SourceLocation | None = None

    @field_serializer("actual", "expected")
    def _truncate_values(self, v: str, info: SerializationInfo) -> str:
        """Truncate actual and expected to 50 characters when asked to."""
        ctx = info.context or {}
        if ctx.get("truncate"):
            max_len = 50
            if len(v) <= max_len:
                return v
            return v[:max_len] + "..."
        return v

    def __repr__(self) -> str:
        return self.model_dump_json(
            indent=2,
            exclude_none=True,
            context={"truncate": True},
        )

    def __bool__(self) -> bool:
        return self.passed


class ExpectationFailedError(AssertionError):
    """AssertionError with the failed ExpectationResult attached."""

    def __init__(self, result: ExpectationResult):
        self.result = result
        message = f"{result.description} failed"
        if result.message:
            message += f": {result.message}"
        super().__init__(message)


def build_result(
    name: str,
    passed: bool,
    actual: Any,
    expected: Any,
    message: str | None = None,
    description: str | None = None,
) -> ExpectationResult:
    return ExpectationResult(
        expectation_name=name,
        description=description or f"{name}({_truncate(actual)}, {_truncate(expected)})",
        passed=passed,
        actual=repr(actual),
        expected=repr(expected),
        message=None if passed else message,
        location=locate_caller(),
    )


def report(result: ExpectationResult) -> ExpectationResult:
    """Hand a result to the running test, or raise on failure outside of one."""
    ctx = get_test_context()
    if ctx is None:
        if not result.passed:
            raise ExpectationFailedError(result)
        return result

    ctx.collected_expectation_results.append(result)
    if not result.passed and ctx.fail_fast:
        raise ExpectationFailedError(result)
    return result
