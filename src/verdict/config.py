"""Project configuration read from ``[tool.verdict]`` in pyproject.toml."""

from __future__ import annotations

import logging
import shlex
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class VerdictConfig:
    """Settings for the ``verdict`` command.

    Every key can be overridden by the matching command line flag.
    ``addopts`` are prepended to the command line arguments.
    """

    test_path: str = "tests/verdict"
    filter: str | None = None
    reporter: str = "ConsoleReporter"
    reporter_options: dict[str, dict[str, Any]] = field(default_factory=dict)
    stop_on_failure: bool = False
    stop_on_warning: bool = False
    load_helpers: bool = True
    addopts: list[str] = field(default_factory=list)


DEFAULT_CONFIG = VerdictConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Nearest pyproject.toml at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> VerdictConfig:
    """Load ``[tool.verdict]`` from the nearest pyproject.toml.

    Unknown keys are ignored with a warning. A missing file or table yields
    the defaults.
    """
    pyproject = find_pyproject(start)
    if pyproject is None:
        return VerdictConfig()

    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)

    table = data.get("tool", {}).get("verdict", {})
    known = {f.name for f in fields(VerdictConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        logger.warning("Ignoring unknown [tool.verdict] keys in %s: %s", pyproject, ", ".join(unknown))

    values = {key: value for key, value in table.items() if key in known}
    if isinstance(values.get("addopts"), str):
        values["addopts"] = shlex.split(values["addopts"])
    return VerdictConfig(**values)


__all__ = ["DEFAULT_CONFIG", "VerdictConfig", "find_pyproject", "load_config"]
