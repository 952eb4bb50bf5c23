"""Look up reporters by name for ``--reporter`` and ``[tool.verdict]``."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from verdict.reports.base import Reporter


T = TypeVar("T")

_builtins: dict[str, type[Reporter]] = {}


def register_builtin(cls: type[T]) -> type[T]:
    """Make a shipped reporter available under its class name."""
    _builtins[cls.__name__] = cls  # type: ignore[assignment]
    return cls


def _import_reporter_class(target: str) -> type[Reporter]:
    """Load ``package.module:Class`` (or ``package.module.Class``)."""
    separator = ":" if ":" in target else "."
    module_name, _, class_name = target.rpartition(separator)
    module = importlib.import_module(module_name)
    cls = getattr(module, class_name, None)
    if cls is None:
        raise ValueError(f"Module {module_name} has no attribute {class_name!r}")

    from verdict.reports.base import Reporter

    if not isinstance(cls, type) or not issubclass(cls, Reporter):
        raise TypeError(f"{target} does not implement the Reporter protocol")
    return cls


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    """Instantiate a built-in reporter by name, or any class by import string.

    Raises:
        ValueError: ``name`` is neither a built-in nor an import string.
        TypeError: The imported class does not implement Reporter.
    """
    if name in _builtins:
        return _builtins[name](**kwargs)
    if ":" in name or "." in name:
        return _import_reporter_class(name)(**kwargs)
    available = ", ".join(sorted(_builtins))
    raise ValueError(f"Unknown reporter: {name}. Available: {available}")


def resolve_reporters(
    names: list[str],
    options: Mapping[str, Mapping[str, Any]] | None = None,
) -> list[Reporter]:
    """Instantiate several reporters, passing each its own options."""
    options = options or {}
    return [resolve_reporter(name, **options.get(name, {})) for name in names]


__all__ = ["register_builtin", "resolve_reporter", "resolve_reporters"]
