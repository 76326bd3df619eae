"""Per-test stdout/stderr capture.

The runner installs one :class:`OutputCapture` for the whole run and opens a
fresh :class:`OutputBuffer` around every test; ``expect_output`` opens a
nested buffer around the call it inspects. Only Python-level writes are
seen; subprocesses and C extensions writing to fd 1/2 bypass it.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TextIO


@dataclass
class OutputBuffer:
    """What one test (or one ``expect_output`` call) wrote."""

    stdout: io.StringIO = field(default_factory=io.StringIO)
    stderr: io.StringIO = field(default_factory=io.StringIO)
    _disabled: bool = field(default=False, repr=False)

    def getvalue(self) -> tuple[str, str]:
        return self.stdout.getvalue(), self.stderr.getvalue()

    def readouterr(self) -> tuple[str, str]:
        """Return ``(stdout, stderr)`` and empty the buffer."""
        captured = self.getvalue()
        for stream in (self.stdout, self.stderr):
            stream.seek(0)
            stream.truncate()
        return captured

    @contextmanager
    def disabled(self) -> Iterator[None]:
        """Send output straight to the terminal while the block runs."""
        self._disabled = True
        try:
            yield
        finally:
            self._disabled = False

    def stream(self, name: str) -> io.StringIO | None:
        if self._disabled:
            return None
        return self.stdout if name == "stdout" else self.stderr


class _RoutedStream(io.TextIOBase):
    """Installed as ``sys.stdout``/``sys.stderr``; writes go wherever ``route`` says."""

    def __init__(self, terminal: TextIO, route: Callable[[], io.StringIO | None], tee: bool) -> None:
        self._terminal = terminal
        self._route = route
        self._tee = tee

    def write(self, s: str) -> int:
        target = self._route()
        if target is None:
            self._terminal.write(s)
            return len(s)
        target.write(s)
        if self._tee:
            self._terminal.write(s)
        return len(s)

    def flush(self) -> None:
        # A closed or detached terminal stream must not fail the test.
        try:
            self._terminal.flush()
        except (OSError, ValueError):
            pass

    @property
    def encoding(self) -> str:
        return getattr(self._terminal, "encoding", None) or "utf-8"

    def fileno(self) -> int:
        return self._terminal.fileno()

    def isatty(self) -> bool:
        return self._terminal.isatty()


class OutputCapture:
    """Owns the replaced ``sys`` streams and the currently open buffer.

    With ``tee=True`` (``vouch test -s``) captured output is also echoed to
    the terminal.
    """

    def __init__(self, tee: bool = False) -> None:
        self.tee = tee
        self._active: ContextVar[OutputBuffer | None] = ContextVar("vouch_output_buffer", default=None)
        self._saved: tuple[TextIO, TextIO] | None = None

    def install(self) -> None:
        self._saved = (sys.stdout, sys.stderr)
        sys.stdout = _RoutedStream(sys.stdout, lambda: self._route("stdout"), self.tee)
        sys.stderr = _RoutedStream(sys.stderr, lambda: self._route("stderr"), self.tee)

    def uninstall(self) -> None:
        if self._saved is not None:
            sys.stdout, sys.stderr = self._saved
            self._saved = None

    def _route(self, name: str) -> io.StringIO | None:
        buf = self._active.get()
        return buf.stream(name) if buf is not None else None

    @contextmanager
    def buffer(self) -> Iterator[OutputBuffer]:
        """Open a fresh buffer; output written inside the block lands only there."""
        buf = OutputBuffer()
        token = self._active.set(buf)
        try:
            yield buf
        finally:
            self._active.reset(token)


_installed: ContextVar[OutputCapture | None] = ContextVar("vouch_output_capture", default=None)


def get_current_capture() -> OutputCapture | None:
    return _installed.get()


@contextmanager
def output_capture(tee: bool = False) -> Iterator[OutputCapture]:
    """Install capture for the block, restoring the real streams afterwards."""
    capture = OutputCapture(tee=tee)
    capture.install()
    token = _installed.set(capture)
    try:
        yield capture
    finally:
        _installed.reset(token)
        capture.uninstall()


@contextmanager
def captured_output() -> Iterator[OutputBuffer]:
    """Capture into a private buffer, reusing the run's capture when one is installed."""
    capture = get_current_capture()
    if capture is not None:
        with capture.buffer() as buf:
            yield buf
        return

    with output_capture() as capture, capture.buffer() as buf:
        yield buf
