"""Signal-occurred expectations: errors, warnings and printed output.

Each function calls ``fn(*args, **kwargs)`` and checks what it signalled.
The captured exception, warning list or output is returned so further
expectations can inspect it. An exception that an expectation was not
asked about propagates unchanged and aborts the test as an error.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Callable
from typing import Any

from vouch.context import captured_output
from vouch.expectations.base import build_result, report


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _matches(pattern: str | None, text: str) -> bool:
    return pattern is None or re.search(pattern, text) is not None


def expect_error(
    fn: Callable[..., Any],
    *args: Any,
    exc: type[BaseException] | tuple[type[BaseException], ...] = Exception,
    match: str | None = None,
    **kwargs: Any,
) -> BaseException | None:
    """Expect calling ``fn`` to raise ``exc`` whose message matches ``match``."""
    description = f"expect_error({_name(fn)})"
    try:
        fn(*args, **kwargs)
    except exc as raised:
        message = str(raised)
        passed = _matches(match, message)
        report(
            build_result(
                "expect_error",
                passed,
                raised,
                match or exc,
                f"error message does not match {match!r}.\nActual message: {message!r}",
                description=description,
            )
        )
        return raised

    report(
        build_result(
            "expect_error",
            False,
            None,
            exc,
            f"{_name(fn)} did not raise {exc!r}",
            description=description,
        )
    )
    return None


def expect_no_error(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Expect calling ``fn`` to complete without raising; returns its value."""
    description = f"expect_no_error({_name(fn)})"
    try:
        value = fn(*args, **kwargs)
    except Exception as raised:
        report(
            build_result(
                "expect_no_error",
                False,
                raised,
                None,
                f"{_name(fn)} raised {type(raised).__name__}: {raised}",
                description=description,
            )
        )
        return None

    report(build_result("expect_no_error", True, value, None, description=description))
    return value


def expect_warning(
    fn: Callable[..., Any],
    *args: Any,
    category: type[Warning] = Warning,
    match: str | None = None,
    **kwargs: Any,
) -> list[warnings.WarningMessage]:
    """Expect calling ``fn`` to emit a warning of ``category`` matching ``match``.

    Warnings of other categories are re-emitted after the call.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        fn(*args, **kwargs)

    matching = [
        w for w in caught
        if issubclass(w.category, category) and _matches(match, str(w.message))
    ]
    for w in caught:
        if w not in matching:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

    seen = [f"{w.category.__name__}: {w.message}" for w in caught]
    report(
        build_result(
            "expect_warning",
            bool(matching),
            seen,
            match or category,
            f"{_name(fn)} did not warn with {category.__name__}"
            + (f" matching {match!r}" if match else "")
            + (f".\nWarnings seen: {seen!r}" if seen else ""),
            description=f"expect_warning({_name(fn)})",
        )
    )
    return matching


def expect_output(
    fn: Callable[..., Any],
    *args: Any,
    match: str | None = None,
    **kwargs: Any,
) -> str:
    """Expect calling ``fn`` to print to stdout, optionally matching ``match``."""
    with captured_output() as buf:
        fn(*args, **kwargs)
    out, _ = buf.getvalue()

    passed = bool(out) and _matches(match, out)
    report(
        build_result(
            "expect_output",
            passed,
            out,
            match,
            f"{_name(fn)} produced no output" if not out
            else f"output does not match {match!r}.\nActual output: {out!r}",
            description=f"expect_output({_name(fn)})",
        )
    )
    return out
