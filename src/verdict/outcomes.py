"""Outcome values produced by expectations and their classification."""

from __future__ import annotations

import warnings
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from verdict.errors import SkipTest


class OutcomeKind(Enum):
    """Closed set of outcome classes."""

    OK = "ok"
    SKIP = "skip"
    WARNING = "warning"
    FAILURE = "failure"
    ERROR = "error"

    @property
    def is_failure(self) -> bool:
        """Failures and errors count the same; only their header differs."""
        return self in {OutcomeKind.FAILURE, OutcomeKind.ERROR}


class SourceRef(BaseModel):
    """Location of the expectation (or raising line) inside a test file."""

    model_config = ConfigDict(frozen=True)

    filename: str
    line: int

    def __str__(self) -> str:
        return f"{Path(self.filename).name}#{self.line}"


class Outcome(BaseModel):
    """Result of evaluating one expectation.

    Attributes:
    ----------
    kind : OutcomeKind
        Class of the result
    test : str
        Label of the ``test_that`` block (or file) that produced it
    message : str
        Human readable explanation, empty for plain successes
    srcref : SourceRef | None
        Where in the test file the outcome originated, when known
    detail : str | None
        Formatted traceback or diff for failures and errors
    """

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    test: str
    message: str = ""
    srcref: SourceRef | None = None
    detail: str | None = None

    def format(self) -> str:
        """Render message and detail as the body of a failure block."""
        if self.detail:
            return f"{self.message}\n{self.detail}" if self.message else self.detail
        return self.message


def classify(value: Any) -> OutcomeKind:
    """Map any outcome-like value to exactly one OutcomeKind.

    Pure and total: values that are not recognised are treated as errors.
    """
    if isinstance(value, Outcome):
        return value.kind
    if isinstance(value, SkipTest):
        return OutcomeKind.SKIP
    if isinstance(value, (Warning, warnings.WarningMessage)):
        return OutcomeKind.WARNING
    if isinstance(value, AssertionError):
        return OutcomeKind.FAILURE
    if isinstance(value, BaseException):
        return OutcomeKind.ERROR
    if value is None or value is True:
        return OutcomeKind.OK
    if value is False:
        return OutcomeKind.FAILURE
    return OutcomeKind.ERROR


__all__ = ["Outcome", "OutcomeKind", "SourceRef", "classify"]
