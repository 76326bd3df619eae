"""Configuration loaded from ``[tool.vouch]`` in pyproject.toml.

Example::

    [tool.vouch]
    test_paths = ["tests"]
    file_prefix = "vouch_"
    maxfail = 5
    addopts = ["-v"]
    reporters = ["junit"]

    [tool.vouch.reporter_options.junit]
    path = "build/junit.xml"
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vouch.errors import ConfigError

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"


class JUnitReporterOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    path: str


# Option tables for third-party reporters are passed through unchecked.
BUILTIN_REPORTER_OPTIONS: dict[str, type[BaseModel]] = {
    "junit": JUnitReporterOptions,
    "JUnitReporter": JUnitReporterOptions,
}


class VouchConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    test_paths: list[str] = Field(default_factory=lambda: ["tests"])
    file_prefix: str = "vouch_"
    test_prefix: str = "vouch_"
    include_tags: list[str] = Field(default_factory=list)
    exclude_tags: list[str] = Field(default_factory=list)
    keyword: str | None = None
    maxfail: int | None = None
    verbosity: int = 0
    addopts: list[str] = Field(default_factory=list)
    fail_fast: bool = False
    reproducible: bool = True
    capture_output: bool = True
    reporters: list[str] = Field(default_factory=list)
    reporter_options: dict[str, dict[str, Any]] = Field(default_factory=dict)
    log_level: str = "WARNING"

    @field_validator("reporter_options")
    @classmethod
    def validate_builtin_reporter_options(cls, value: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        for name, options in value.items():
            model = BUILTIN_REPORTER_OPTIONS.get(name)
            if model is None:
                continue
            try:
                model.model_validate(options)
            except ValidationError as exc:
                problems = "; ".join(
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
                )
                raise ValueError(f"options for reporter {name!r} are invalid ({problems})") from exc
        return value


DEFAULT_CONFIG = VouchConfig()


def find_project_root(start: Path | None = None) -> Path:
    """Nearest directory at or above ``start`` holding pyproject.toml, else ``start``."""
    start = (start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / PYPROJECT).is_file():
            return candidate
    return start


def find_test_dir(start: Path | None = None, config: VouchConfig | None = None) -> Path | None:
    """Locate the designated test directory under the project root."""
    config = config or DEFAULT_CONFIG
    root = find_project_root(start)
    for name in config.test_paths:
        candidate = root / name
        if candidate.is_dir():
            return candidate
    return None


def _config_error(exc: ValidationError) -> ConfigError:
    errors = exc.errors()
    unknown = sorted(str(err["loc"][0]) for err in errors if err["type"] == "extra_forbidden")
    if unknown:
        return ConfigError(f"Unknown [tool.vouch] option(s): {', '.join(unknown)}")
    err = errors[0]
    key = ".".join(str(part) for part in err["loc"])
    return ConfigError(f"[tool.vouch] {key} has invalid value {err['input']!r}: {err['msg']}")


def config_from_mapping(data: dict[str, Any]) -> VouchConfig:
    """Build a config from a ``[tool.vouch]`` table, validating keys and types."""
    try:
        return VouchConfig.model_validate(data)
    except ValidationError as exc:
        raise _config_error(exc) from exc


def load_config(start: Path | None = None) -> VouchConfig:
    """Load configuration from the nearest pyproject.toml, falling back to defaults."""
    root = find_project_root(start)
    pyproject = root / PYPROJECT
    if not pyproject.is_file():
        return VouchConfig()

    try:
        with pyproject.open("rb") as fh:
            document = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Could not parse {pyproject}: {exc}") from exc

    table = document.get("tool", {}).get("vouch")
    if table is None:
        return VouchConfig()
    logger.debug("Loaded [tool.vouch] from %s", pyproject)
    return config_from_mapping(table)


__all__ = [
    "DEFAULT_CONFIG",
    "JUnitReporterOptions",
    "VouchConfig",
    "config_from_mapping",
    "find_project_root",
    "find_test_dir",
    "load_config",
]
