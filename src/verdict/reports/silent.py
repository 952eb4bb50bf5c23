"""Reporters that print nothing themselves."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from verdict.reports.base import Reporter, SuiteAbort

if TYPE_CHECKING:
    from verdict.outcomes import Outcome
    from verdict.testing.discovery import TestFileDescriptor


class SilentReporter:
    """Keeps every outcome in memory and prints nothing."""

    def __init__(self) -> None:
        self.results: list[tuple[str, str, Outcome]] = []

    def on_suite_start(self) -> None:
        pass

    def on_file_start(self, descriptor: TestFileDescriptor) -> None:
        pass

    def on_result(self, context: str, test: str, outcome: Outcome) -> None:
        self.results.append((context, test, outcome))

    def on_file_end(self, descriptor: TestFileDescriptor) -> None:
        pass

    def on_suite_end(self) -> SuiteAbort | None:
        return None


class MultiReporter:
    """Forwards every event to several reporters in order.

    The first abort returned by a child reporter wins.
    """

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self.reporters = list(reporters)

    def on_suite_start(self) -> None:
        for reporter in self.reporters:
            reporter.on_suite_start()

    def on_file_start(self, descriptor: TestFileDescriptor) -> None:
        for reporter in self.reporters:
            reporter.on_file_start(descriptor)

    def on_result(self, context: str, test: str, outcome: Outcome) -> None:
        for reporter in self.reporters:
            reporter.on_result(context, test, outcome)

    def on_file_end(self, descriptor: TestFileDescriptor) -> None:
        for reporter in self.reporters:
            reporter.on_file_end(descriptor)

    def on_suite_end(self) -> SuiteAbort | None:
        aborts = [reporter.on_suite_end() for reporter in self.reporters]
        return next((abort for abort in aborts if abort is not None), None)


__all__ = ["MultiReporter", "SilentReporter"]
