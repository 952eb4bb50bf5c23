"""Base reporter protocol for verdict test output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from verdict.outcomes import Outcome
    from verdict.testing.discovery import TestFileDescriptor


@dataclass(frozen=True, slots=True)
class SuiteAbort:
    """Returned from ``on_suite_end`` when the host should exit non-zero."""

    reason: str
    n_fail: int = 0
    n_warn: int = 0


@runtime_checkable
class Reporter(Protocol):
    """Protocol defining the interface for test reporters.

    All methods are synchronous and called in order from a single thread.
    ``on_result`` must record problems rather than raise them; only
    ``on_suite_end`` may escalate, by returning a SuiteAbort.
    """

    def on_suite_start(self) -> None:
        """Called once before the first test file runs."""
        ...

    def on_file_start(self, descriptor: TestFileDescriptor) -> None:
        """Called before each test file runs."""
        ...

    def on_result(self, context: str, test: str, outcome: Outcome) -> None:
        """Called once per expectation outcome, in source order."""
        ...

    def on_file_end(self, descriptor: TestFileDescriptor) -> None:
        """Called after each test file finishes, even when it errored."""
        ...

    def on_suite_end(self) -> SuiteAbort | None:
        """Called exactly once after teardown files have run."""
        ...
