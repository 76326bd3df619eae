"""vouch - expectation-style unit testing for Python packages."""

from .expectations import (
    ExpectationFailedError,
    ExpectationResult,
    expect_equal,
    expect_error,
    expect_false,
    expect_identical,
    expect_is,
    expect_length,
    expect_match,
    expect_no_error,
    expect_none,
    expect_output,
    expect_true,
    expect_warning,
    fail,
    succeed,
)
from .scoped import envvars, reproducible_environment, sys_path, temporary_directory, test_path, working_directory
from .skipping import (
    SkipTest,
    skip,
    skip_if,
    skip_if_not,
    skip_if_not_installed,
    skip_if_offline,
    skip_on_ci,
    skip_on_os,
    skip_on_release,
)
from .testing import Runner, collect, context, tag, test_that
from .version import __version__


__all__ = [
    # Declaring tests
    "context",
    "test_that",
    "tag",
    # Expectations
    "ExpectationResult",
    "ExpectationFailedError",
    "expect_equal",
    "expect_identical",
    "expect_match",
    "expect_true",
    "expect_false",
    "expect_none",
    "expect_is",
    "expect_length",
    "expect_error",
    "expect_no_error",
    "expect_warning",
    "expect_output",
    "succeed",
    "fail",
    # Skipping
    "SkipTest",
    "skip",
    "skip_if",
    "skip_if_not",
    "skip_on_os",
    "skip_on_ci",
    "skip_on_release",
    "skip_if_not_installed",
    "skip_if_offline",
    # Cleanup helpers
    "envvars",
    "working_directory",
    "temporary_directory",
    "sys_path",
    "reproducible_environment",
    "test_path",
    # Running
    "collect",
    "Runner",
    "__version__",
]
