"""Check reporter: a short summary for environments that only show the tail.

Package check tooling typically displays only the last 13 lines of the test
output, so this reporter prints each failure in full as soon as it happens and
finishes with a tally plus a capped index of failures that always fits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from verdict.outcomes import Outcome, OutcomeKind, SourceRef, classify
from verdict.reports.base import SuiteAbort

if TYPE_CHECKING:
    from verdict.testing.discovery import TestFileDescriptor

MAX_INDEX_ENTRIES = 10


def src_loc(ref: SourceRef | None) -> str:
    """Location suffix for a failure header, empty when unknown."""
    if ref is None:
        return ""
    return f" (@{ref})"


def failure_header(outcome: Outcome) -> str:
    """One-line ``Error:``/``Failure:`` header naming the test and its location."""
    kind = "Error" if classify(outcome) is OutcomeKind.ERROR else "Failure"
    return f"{kind}: {outcome.test}{src_loc(outcome.srcref)} "


def index_lines(failures: list[Outcome]) -> list[str]:
    """Numbered one-line headers, truncated to 9 entries plus ``...``."""
    truncated = len(failures) > MAX_INDEX_ENTRIES
    show = failures[: MAX_INDEX_ENTRIES - 1] if truncated else failures
    width = len(f"{len(show)}.")
    lines = [f"{f'{i}.':>{width}} {failure_header(x)}" for i, x in enumerate(show, start=1)]
    if truncated:
        lines.append("...")
    return lines


class CheckReporter:
    """Counts outcomes and prints failures with a bounded final summary."""

    def __init__(self, stop_on_failure: bool = True, console: Console | None = None) -> None:
        self.console = console or Console()
        self.stop_on_failure = stop_on_failure
        self.failures: list[Outcome] = []
        self.n_ok = 0
        self.n_skip = 0
        self.n_warn = 0
        self.n_fail = 0

    def on_suite_start(self) -> None:
        pass

    def on_file_start(self, descriptor: TestFileDescriptor) -> None:
        pass

    def on_file_end(self, descriptor: TestFileDescriptor) -> None:
        pass

    def on_result(self, context: str, test: str, outcome: Outcome) -> None:
        kind = classify(outcome)
        if kind is OutcomeKind.SKIP:
            self.n_skip += 1
            return
        if kind is OutcomeKind.WARNING:
            self.n_warn += 1
            return
        if kind is OutcomeKind.OK:
            self.n_ok += 1
            return

        self.n_fail += 1
        self.failures.append(outcome)

        self.console.rule(
            Text(f"{self.n_fail}. {failure_header(outcome)}"),
            style="red",
            align="left",
        )
        self._line(outcome.format())
        self._line()

    def on_suite_end(self) -> SuiteAbort | None:
        self.console.rule(Text("verdict results "), characters="═", align="left")
        self._line(
            f"OK: {self.n_ok} "
            f"SKIPPED: {self.n_skip} "
            f"WARNINGS: {self.n_warn} "
            f"FAILED: {self.n_fail}"
        )

        if self.n_fail == 0:
            return None

        self._line("\n".join(index_lines(self.failures)))
        self._line()

        if self.stop_on_failure:
            return SuiteAbort("verdict unit tests failed", n_fail=self.n_fail, n_warn=self.n_warn)
        return None

    def _line(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)


__all__ = ["CheckReporter", "failure_header", "index_lines", "src_loc"]
