"""Reporting module for verdict test output."""

from verdict.reports.base import Reporter, SuiteAbort
from verdict.reports.check import CheckReporter
from verdict.reports.console import ConsoleReporter
from verdict.reports.registry import register_builtin, resolve_reporter, resolve_reporters
from verdict.reports.silent import MultiReporter, SilentReporter


for _cls in (CheckReporter, ConsoleReporter, SilentReporter):
    register_builtin(_cls)

__all__ = [
    "CheckReporter",
    "ConsoleReporter",
    "MultiReporter",
    "Reporter",
    "SilentReporter",
    "SuiteAbort",
    "resolve_reporter",
    "resolve_reporters",
]
