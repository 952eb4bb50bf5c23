from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from verdict.outcomes import Outcome


@dataclass(frozen=True, slots=True)
class FileRunContext:
    """Execution context for the test file currently being run.

    Attributes
    ----------
    path
        Resolved path of the file, used to locate frames that belong to it.
    context
        Context name of the file (stem without the ``test_`` prefix).
    emit
        Callback receiving ``(test_label, outcome)`` for every outcome.
    """

    path: Path
    context: str
    emit: Callable[[str, Outcome], None]

    def owns(self, filename: str) -> bool:
        return filename == str(self.path)


@dataclass(slots=True)
class TestBlockContext:
    """State of the innermost ``test_that`` block."""

    __test__ = False

    label: str
    n_outcomes: int = 0


FILE_CONTEXT: ContextVar[FileRunContext | None] = ContextVar("file_context", default=None)
BLOCK_CONTEXT: ContextVar[TestBlockContext | None] = ContextVar("block_context", default=None)


@contextmanager
def file_context_scope(ctx: FileRunContext) -> Iterator[None]:
    token = FILE_CONTEXT.set(ctx)
    try:
        yield
    finally:
        FILE_CONTEXT.reset(token)


@contextmanager
def block_context_scope(ctx: TestBlockContext) -> Iterator[None]:
    token = BLOCK_CONTEXT.set(ctx)
    try:
        yield
    finally:
        BLOCK_CONTEXT.reset(token)


__all__ = [
    "BLOCK_CONTEXT",
    "FILE_CONTEXT",
    "FileRunContext",
    "TestBlockContext",
    "block_context_scope",
    "file_context_scope",
]
