"""Exception types raised by verdict."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verdict.reports.base import SuiteAbort


class VerdictError(Exception):
    """Base class for verdict errors."""


class SkipTest(Exception):
    """Raised inside a ``test_that`` block to skip the rest of it."""


class NoTestsFoundError(VerdictError):
    """Raised when a package or directory has no test directory."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"No tests found for {target}")


class InvalidFilterError(VerdictError):
    """Raised when a test file filter is not a valid regular expression."""

    def __init__(self, pattern: str, cause: re.error) -> None:
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"Invalid filter {pattern!r}: {cause}")


class SetupFileError(VerdictError):
    """Raised when a helper or setup file fails, so the suite cannot start."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to run {path.name}: {type(cause).__name__}: {cause}")


class TestsFailedError(VerdictError):
    """Raised by ``SuiteResult.raise_for_abort`` when a run was aborted.

    This means the tests failed; it is not a problem with verdict itself.
    """

    __test__ = False

    def __init__(self, abort: SuiteAbort) -> None:
        self.abort = abort
        super().__init__(abort.reason)


__all__ = [
    "InvalidFilterError",
    "NoTestsFoundError",
    "SetupFileError",
    "SkipTest",
    "TestsFailedError",
    "VerdictError",
]
