"""Interactive console reporter: one progress line per file, details at the end."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from verdict.outcomes import Outcome, OutcomeKind, classify
from verdict.reports.base import SuiteAbort
from verdict.reports.check import failure_header, src_loc

if TYPE_CHECKING:
    from verdict.testing.discovery import TestFileDescriptor


_STYLES = {
    OutcomeKind.OK: "green",
    OutcomeKind.SKIP: "blue",
    OutcomeKind.WARNING: "magenta",
    OutcomeKind.FAILURE: "red",
    OutcomeKind.ERROR: "red",
}


def skip_summary(outcome: Outcome, label: int) -> Text:
    text = Text(f"{label}. {outcome.test}", style=_STYLES[OutcomeKind.SKIP])
    text.append(f"{src_loc(outcome.srcref)} - {outcome.message}")
    return text


class ConsoleReporter:
    """Prints a character per outcome, then skipped and failed details.

    Successes are ``.``, skips ``S``, warnings ``W`` and failures their
    running number, so the details at the end can be matched to the progress
    line. With ``verbosity > 0`` skips and warnings are listed as well.
    """

    def __init__(self, verbosity: int = 0, console: Console | None = None) -> None:
        self.console = console or Console()
        self.verbosity = verbosity
        self.counts = {kind: 0 for kind in OutcomeKind}
        self.failures: list[Outcome] = []
        self.skips: list[Outcome] = []
        self.warnings: list[Outcome] = []

    def on_suite_start(self) -> None:
        pass

    def on_file_start(self, descriptor: TestFileDescriptor) -> None:
        self.console.print(Text(f"{descriptor.context}: "), end="")

    def on_result(self, context: str, test: str, outcome: Outcome) -> None:
        kind = classify(outcome)
        self.counts[kind] += 1
        if kind.is_failure:
            self.failures.append(outcome)
            symbol = str(len(self.failures) % 10)
        elif kind is OutcomeKind.SKIP:
            self.skips.append(outcome)
            symbol = "S"
        elif kind is OutcomeKind.WARNING:
            self.warnings.append(outcome)
            symbol = "W"
        else:
            symbol = "."
        self.console.print(Text(symbol, style=_STYLES[kind]), end="")

    def on_file_end(self, descriptor: TestFileDescriptor) -> None:
        self.console.print()

    def on_suite_end(self) -> SuiteAbort | None:
        if self.verbosity > 0:
            self._section("Skipped", [skip_summary(x, i) for i, x in enumerate(self.skips, start=1)])
            self._section(
                "Warnings",
                [Text(f"{i}. {x.test}{src_loc(x.srcref)} - {x.message}") for i, x in enumerate(self.warnings, start=1)],
            )

        if self.failures:
            self.console.rule(Text("Failed"), characters="═", align="left")
            for i, outcome in enumerate(self.failures, start=1):
                self.console.rule(Text(f"{i}. {failure_header(outcome)}"), style="red", align="left")
                self.console.print(outcome.format(), markup=False, highlight=False, soft_wrap=True)
                self.console.print()

        n_fail = self.counts[OutcomeKind.FAILURE] + self.counts[OutcomeKind.ERROR]
        self.console.print(
            f"[ OK: {self.counts[OutcomeKind.OK]} | "
            f"SKIPPED: {self.counts[OutcomeKind.SKIP]} | "
            f"WARNINGS: {self.counts[OutcomeKind.WARNING]} | "
            f"FAILED: {n_fail} ]",
            markup=False,
            highlight=False,
        )
        return None

    def _section(self, title: str, lines: list[Text]) -> None:
        if not lines:
            return
        self.console.rule(Text(title), characters="═", align="left")
        for line in lines:
            self.console.print(line)
        self.console.print()


__all__ = ["ConsoleReporter", "skip_summary"]
