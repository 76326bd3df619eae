"""Scoped changes to process-wide state.

The runner never undoes what a test changes outside its own function
scope: environment variables, the working directory, ``sys.path``, files.
These context managers make that cleanup a one-liner::

    @test_that("reads config from $APP_HOME")
    def _():
        with temporary_directory() as home, envvars(APP_HOME=str(home)):
            expect_equal(load_config().home, home)
"""

from __future__ import annotations

import locale
import logging
import os
import sys
import tempfile
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from vouch.context import get_test_context

logger = logging.getLogger(__name__)

REPRODUCIBLE_ENV = {
    "LANGUAGE": "en",
    "LC_COLLATE": "C",
    "TZ": "UTC",
}


def _tzset() -> None:
    if hasattr(time, "tzset"):
        time.tzset()


@contextmanager
def envvars(**values: str | None) -> Iterator[None]:
    """Set (or, for None, unset) environment variables for the block."""
    previous = {name: os.environ.get(name) for name in values}
    try:
        for name, value in values.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
        yield
    finally:
        for name, value in previous.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value


@contextmanager
def working_directory(path: str | os.PathLike[str]) -> Iterator[Path]:
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)


@contextmanager
def temporary_directory(prefix: str = "vouch-") -> Iterator[Path]:
    """Create a directory that is removed with its contents afterwards."""
    with tempfile.TemporaryDirectory(prefix=prefix) as name:
        yield Path(name)


@contextmanager
def sys_path(*entries: str | os.PathLike[str]) -> Iterator[None]:
    """Prepend ``entries`` to ``sys.path`` for the block."""
    saved = list(sys.path)
    sys.path[:0] = [str(entry) for entry in entries]
    try:
        yield
    finally:
        sys.path[:] = saved


@contextmanager
def reproducible_environment() -> Iterator[None]:
    """Force English messages, C collation and UTC for the block.

    Sorting and formatting then behave the same on every machine.
    """
    previous_collate = locale.setlocale(locale.LC_COLLATE)
    try:
        with envvars(**REPRODUCIBLE_ENV):
            _tzset()
            locale.setlocale(locale.LC_COLLATE, "C")
            logger.debug("Reproducible environment active: %s", REPRODUCIBLE_ENV)
            yield
    finally:
        # envvars has put TZ back by now; re-read it.
        locale.setlocale(locale.LC_COLLATE, previous_collate)
        _tzset()


def test_path(*parts: str) -> Path:
    """Path relative to the running test file's directory (or the cwd outside a test)."""
    ctx = get_test_context()
    base = ctx.module_path.parent if ctx is not None and ctx.module_path else Path.cwd()
    return base.joinpath(*parts)


test_path.__test__ = False  # type: ignore[attr-defined]

__all__ = [
    "envvars",
    "reproducible_environment",
    "sys_path",
    "temporary_directory",
    "test_path",
    "working_directory",
]
