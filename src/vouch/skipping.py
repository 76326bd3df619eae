"""Skip signals for ending a test early without failing it."""

from __future__ import annotations

import importlib.util
import os
import socket
import sys


class SkipTest(BaseException):
    """Raised to end the running test as skipped.

    Derives from BaseException so ``except Exception`` blocks in code under
    test do not swallow it.
    """

    __test__ = False

    def __init__(self, reason: str = "skipped") -> None:
        self.reason = reason
        super().__init__(reason)


_TRUTHY = {"1", "true", "yes", "on"}

_OS_NAMES = {
    "windows": "win32",
    "mac": "darwin",
    "linux": "linux",
}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def skip(reason: str = "skipped") -> None:
    raise SkipTest(reason)


def skip_if(condition: object, reason: str = "condition was true") -> None:
    if condition:
        raise SkipTest(reason)


def skip_if_not(condition: object, reason: str = "condition was false") -> None:
    if not condition:
        raise SkipTest(reason)


def skip_on_os(*names: str) -> None:
    """Skip on any of the named platforms: ``windows``, ``mac`` or ``linux``."""
    for name in names:
        if name not in _OS_NAMES:
            raise ValueError(f"Unknown OS name {name!r}; expected one of {sorted(_OS_NAMES)}")
        if sys.platform.startswith(_OS_NAMES[name]):
            raise SkipTest(f"On {name}")


def skip_on_ci() -> None:
    """Skip when running under continuous integration (``CI`` is set)."""
    if _env_flag("CI"):
        raise SkipTest("On CI")


def skip_on_release() -> None:
    """Skip during release checks.

    Tests only run when ``VOUCH_NOT_RELEASE`` is truthy, which developers set
    locally and in CI. Use it for slow or network-dependent tests.
    """
    if not _env_flag("VOUCH_NOT_RELEASE"):
        raise SkipTest("On release check")


def skip_if_not_installed(module: str) -> None:
    try:
        spec = importlib.util.find_spec(module)
    except ModuleNotFoundError:
        spec = None
    if spec is None:
        raise SkipTest(f"{module} cannot be imported")


def skip_if_offline(host: str = "pypi.org", port: int = 443, timeout: float = 2.0) -> None:
    """Skip unless a TCP connection to ``host`` can be opened."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except OSError:
        raise SkipTest("offline") from None


__all__ = [
    "SkipTest",
    "skip",
    "skip_if",
    "skip_if_not",
    "skip_on_os",
    "skip_on_ci",
    "skip_on_release",
    "skip_if_not_installed",
    "skip_if_offline",
]
