"""Command line interface for the vouch test runner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from vouch.config import VouchConfig, load_config
from vouch.errors import CollectionError, ConfigError
from vouch.reports import JUnitReporter, Reporter, SummaryReporter, resolve_reporters
from vouch.testing import ContextDefinition, Runner, TestDefinition, collect

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TESTS_FAILED = 1
EXIT_USAGE_ERROR = 2
EXIT_NO_TESTS = 5


def main() -> None:
    """Entry point for the vouch CLI."""
    try:
        config = load_config()
    except ConfigError as exc:
        Console(stderr=True).print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(EXIT_USAGE_ERROR) from None

    parser = _build_parser()
    argv = [*config.addopts, *sys.argv[1:]] if config.addopts else sys.argv[1:]
    args = parser.parse_args(argv)

    if args.command == "test":
        _configure_logging(args.log_level or config.log_level)
        exit_code = asyncio.run(_run_tests(args, config))
        raise SystemExit(exit_code)

    parser.print_help()
    raise SystemExit(EXIT_OK)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vouch", description="vouch unit test runner")
    subparsers = parser.add_subparsers(dest="command")

    test_parser = subparsers.add_parser("test", help="Run tests")
    test_parser.add_argument("paths", nargs="*", help="Test files or directories")
    test_parser.add_argument("-k", "--keyword", help="Filter tests by keyword expression")
    test_parser.add_argument(
        "-t", "--tag", dest="include_tags", action="append", help="Run tests with given tag"
    )
    test_parser.add_argument(
        "--skip-tag",
        dest="exclude_tags",
        action="append",
        help="Skip tests that match this tag",
    )
    test_parser.add_argument("--maxfail", type=int, help="Stop after this many failed tests")
    test_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="End a test at its first failed expectation",
    )
    test_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce output")
    test_parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output")
    test_parser.add_argument(
        "-s",
        "--show-output",
        action="store_true",
        help="Show stdout/stderr live (still captured)",
    )
    test_parser.add_argument(
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or import string (repeatable)",
    )
    test_parser.add_argument("--junit-xml", help="Also write a JUnit XML report to this path")
    test_parser.add_argument(
        "--no-reproducible",
        action="store_true",
        help="Do not force locale, collation and timezone for the run",
    )
    test_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for harness diagnostics",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_paths(args: argparse.Namespace, config: VouchConfig) -> list[str]:
    if args.paths:
        return args.paths
    return config.test_paths


def _resolve_tags(args: argparse.Namespace, config: VouchConfig) -> tuple[list[str], list[str]]:
    include = list(config.include_tags)
    exclude = list(config.exclude_tags)
    if args.include_tags:
        include.extend(args.include_tags)
    if args.exclude_tags:
        exclude.extend(args.exclude_tags)
    return include, exclude


def _resolve_maxfail(args: argparse.Namespace, config: VouchConfig) -> int | None:
    if args.maxfail is not None:
        return args.maxfail if args.maxfail > 0 else None
    return config.maxfail


def _resolve_verbosity(args: argparse.Namespace, config: VouchConfig) -> int:
    return config.verbosity + args.verbose - args.quiet


def _resolve_reporters(
    args: argparse.Namespace,
    config: VouchConfig,
    verbosity: int,
    console: Console | None = None,
) -> list[Reporter]:
    """Summary reporter first, then CLI reporters (or, without any, configured ones)."""
    names = list(getattr(args, "reporters", None) or config.reporters)
    names = [n for n in names if n not in ("SummaryReporter", "summary")]
    options: dict[str, dict[str, Any]] = {k: dict(v) for k, v in config.reporter_options.items()}

    reporters: list[Reporter] = [SummaryReporter(console=console, verbosity=verbosity)]
    reporters.extend(resolve_reporters(names, options))

    junit_xml = getattr(args, "junit_xml", None)
    if junit_xml:
        reporters.append(JUnitReporter(path=junit_xml))
    return reporters


def _collect_contexts(paths: Sequence[str], config: VouchConfig) -> list[ContextDefinition]:
    contexts: list[ContextDefinition] = []
    for path in paths:
        contexts.extend(
            collect(path, file_prefix=config.file_prefix, test_prefix=config.test_prefix)
        )
    return contexts


def _filter_tests(
    tests: list[TestDefinition],
    include_tags: Sequence[str],
    exclude_tags: Sequence[str],
    keyword: str | None,
) -> list[TestDefinition]:
    filtered = tests

    if include_tags:
        include = set(include_tags)
        filtered = [test for test in filtered if test.tags & include]

    if exclude_tags:
        exclude = set(exclude_tags)
        filtered = [test for test in filtered if not (test.tags & exclude)]

    if keyword:
        matcher = KeywordMatcher(keyword)
        filtered = [test for test in filtered if matcher.match(test.full_name)]

    return filtered


def _filter_contexts(
    contexts: list[ContextDefinition],
    include_tags: Sequence[str],
    exclude_tags: Sequence[str],
    keyword: str | None,
) -> list[ContextDefinition]:
    """Apply test filters per context, dropping contexts left empty."""
    filtering = bool(include_tags or exclude_tags or keyword)
    kept: list[ContextDefinition] = []
    for ctx in contexts:
        if ctx.skip_reason is not None:
            if not filtering:
                kept.append(ctx)
            continue
        tests = _filter_tests(ctx.tests, include_tags, exclude_tags, keyword)
        if tests:
            kept.append(ContextDefinition(label=ctx.label, module_path=ctx.module_path, tests=tests))
    return kept


async def _run_tests(args: argparse.Namespace, config: VouchConfig) -> int:
    paths = _resolve_paths(args, config)
    include_tags, exclude_tags = _resolve_tags(args, config)
    keyword = args.keyword or config.keyword
    verbosity = _resolve_verbosity(args, config)
    console = Console()

    try:
        contexts = _collect_contexts(paths, config)
        contexts = _filter_contexts(contexts, include_tags, exclude_tags, keyword)
        reporters = _resolve_reporters(args, config, verbosity, console=console)
    except (CollectionError, ValueError, TypeError, ImportError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        return EXIT_USAGE_ERROR

    runner = Runner(
        reporters=reporters,
        maxfail=_resolve_maxfail(args, config),
        fail_fast=args.fail_fast or config.fail_fast,
        capture_output=config.capture_output and not args.show_output,
        reproducible=config.reproducible and not args.no_reproducible,
    )
    run_result = await runner.run(contexts)

    if not run_result.contexts:
        return EXIT_NO_TESTS
    return EXIT_OK if run_result.ok else EXIT_TESTS_FAILED


_KEYWORD_TOKENS = re.compile(r"[()]|[^\s()]+")
# Loosest-binding first; ``not`` binds tightest of all.
_BINARY_OPERATORS = ("or", "and")

KeywordNode = tuple[Any, ...]


def _evaluate(node: KeywordNode, text: str) -> bool:
    kind = node[0]
    if kind == "word":
        return node[1] in text
    if kind == "not":
        return not _evaluate(node[1], text)
    if kind == "and":
        return _evaluate(node[1], text) and _evaluate(node[2], text)
    return _evaluate(node[1], text) or _evaluate(node[2], text)


class KeywordMatcher:
    """Evaluate pytest-style -k expressions against ``<context>::<test>`` names.

    The expression is parsed once into a tree of ``("word", w)``,
    ``("not", x)``, ``("and", x, y)`` and ``("or", x, y)`` nodes. Words match
    case-insensitively as substrings.
    """

    def __init__(self, expression: str) -> None:
        self.expression = expression
        self._pending = _KEYWORD_TOKENS.findall(expression)[::-1]
        self.tree = self._parse_binary(0)
        if self._pending:
            raise ValueError(f"Invalid keyword expression: {expression!r}")

    def match(self, text: str) -> bool:
        return _evaluate(self.tree, text.lower())

    def _take(self) -> str | None:
        return self._pending.pop() if self._pending else None

    def _parse_binary(self, level: int) -> KeywordNode:
        if level == len(_BINARY_OPERATORS):
            return self._parse_operand()
        operator = _BINARY_OPERATORS[level]
        node = self._parse_binary(level + 1)
        while self._pending and self._pending[-1].lower() == operator:
            self._pending.pop()
            node = (operator, node, self._parse_binary(level + 1))
        return node

    def _parse_operand(self) -> KeywordNode:
        token = self._take()
        if token is None:
            raise ValueError("Unexpected end of keyword expression")
        if token.lower() == "not":
            return ("not", self._parse_operand())
        if token == ")":
            raise ValueError("Unexpected ')' in keyword expression")
        if token == "(":
            node = self._parse_binary(0)
            if self._take() != ")":
                raise ValueError("Unmatched '(' in keyword expression")
            return node
        return ("word", token.lower())


__all__ = ["KeywordMatcher", "main"]
