"""Registry of reporter classes, addressable by name or import string."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from vouch.reports.base import Reporter


T = TypeVar("T", bound="Reporter")

REPORTER_HOOKS = (
    "on_no_tests_found",
    "on_collection_complete",
    "on_context_start",
    "on_test_complete",
    "on_context_complete",
    "on_run_complete",
    "on_run_stopped_early",
)


class ReporterRegistry:
    """Reporter classes by name.

    User registrations shadow built-ins of the same name until
    :meth:`clear`, which forgets only the user registrations.
    """

    def __init__(self) -> None:
        self._builtin: dict[str, type[Reporter]] = {}
        self._user: dict[str, type[Reporter]] = {}

    def add(self, cls: type[Reporter], *names: str, builtin: bool = False) -> None:
        target = self._builtin if builtin else self._user
        target.update(dict.fromkeys(names, cls))

    def clear(self) -> None:
        self._user.clear()

    def as_dict(self) -> dict[str, type[Reporter]]:
        return {**self._builtin, **self._user}

    def lookup(self, name: str) -> type[Reporter]:
        """Registered class for ``name``, else the class an import string points at."""
        known = self.as_dict()
        if name in known:
            return known[name]
        if ":" in name or "." in name:
            return _import_reporter_class(name)
        raise ValueError(f"Unknown reporter: {name}. Available: {', '.join(sorted(known))}")


_registry = ReporterRegistry()


def _register_with(cls: type[T] | None, register: Callable[[type[T]], None]) -> type[T] | Any:
    # Supports both ``@decorator`` and ``@decorator(...)``.
    def decorator(target: type[T]) -> type[T]:
        register(target)
        return target

    return decorator(cls) if cls is not None else decorator


def reporter(
    cls: type[T] | None = None,
    *,
    enabled: bool = True,
    name: str | None = None,
) -> type[T] | Any:
    """Register a Reporter class so ``--reporter NAME`` can find it.

        @reporter
        class TapReporter: ...

        @reporter(name="tap")
        class TapReporter: ...
    """

    def register(target: type[T]) -> None:
        if enabled:
            _registry.add(target, name or target.__name__)

    return _register_with(cls, register)


def register_builtin(cls: type[T] | None = None, *, alias: str | None = None) -> type[T] | Any:
    """Register under the class name (and ``alias``); kept by :func:`clear_reporter_registry`."""

    def register(target: type[T]) -> None:
        _registry.add(target, *filter(None, (target.__name__, alias)), builtin=True)

    return _register_with(cls, register)


def get_reporter_registry() -> dict[str, type[Reporter]]:
    return _registry.as_dict()


def clear_reporter_registry() -> None:
    _registry.clear()


def _import_reporter_class(import_path: str) -> type[Reporter]:
    """Import ``module.path:ClassName`` (or ``module.path.ClassName``)."""
    module_path, sep, class_name = import_path.rpartition(":")
    if not sep:
        module_path, _, class_name = import_path.rpartition(".")
    if not module_path or not class_name:
        raise ValueError(f"Invalid import path: {import_path}")

    found = getattr(importlib.import_module(module_path), class_name, None)
    if found is None:
        raise ValueError(f"{module_path} has no attribute {class_name!r}")
    # Reporter is a structural type; a class qualifies by having every hook.
    if not isinstance(found, type) or not all(callable(getattr(found, hook, None)) for hook in REPORTER_HOOKS):
        raise TypeError(f"{import_path} does not implement the Reporter hooks")
    return found


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    """Instantiate a reporter by registry name or import string.

    Raises:
        ValueError: If the reporter cannot be resolved.
    """
    return _registry.lookup(name)(**kwargs)


def resolve_reporters(
    names: list[str],
    options: dict[str, dict[str, Any]] | None = None,
) -> list[Reporter]:
    """Instantiate several reporters; ``options`` maps a name to constructor kwargs."""
    options = options or {}
    return [resolve_reporter(name, **options.get(name, {})) for name in names]


__all__ = [
    "ReporterRegistry",
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
