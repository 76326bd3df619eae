"""Declaring, collecting and running tests.

Tests live in files named ``vouch_*.py``; each file is one context.
"""

from .definitions import ContextDefinition, TestDefinition, context, test_that
from .discovery import collect, collect_file
from .results import ContextResult, FailureEntry, RunResult, TestResult, TestStatus
from .runner import Runner
from .tags import tag


__all__ = [
    "ContextDefinition",
    "TestDefinition",
    "context",
    "test_that",
    "tag",
    "collect",
    "collect_file",
    "Runner",
    "RunResult",
    "ContextResult",
    "TestResult",
    "TestStatus",
    "FailureEntry",
]
