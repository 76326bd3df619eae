"""Error types raised by the vouch harness."""

from pathlib import Path


class VouchError(Exception):
    """Base class for harness errors (never raised by a failing expectation)."""


class ConfigError(VouchError):
    """Raised when ``[tool.vouch]`` configuration is invalid."""


class CollectionError(VouchError):
    """Raised when a test file cannot be imported."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not collect {path}: {type(cause).__name__}: {cause}")


class InvalidTransitionError(VouchError):
    """Raised when a test result is moved between states out of order."""

    def __init__(self, name: str, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Test {name!r} cannot move from {current} to {target}")
