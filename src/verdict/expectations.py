"""Expectations used inside test files.

Each expectation turns into exactly one Outcome, emitted to the file that is
currently running. Outside a run, failing expectations raise AssertionError
so the helpers stay usable from plain scripts.
"""

from __future__ import annotations

import difflib
import inspect
import pprint
import re
import traceback
import warnings
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any, Iterator

from verdict.context import (
    BLOCK_CONTEXT,
    FILE_CONTEXT,
    TestBlockContext,
    block_context_scope,
)
from verdict.errors import SkipTest
from verdict.outcomes import Outcome, OutcomeKind, SourceRef, classify

OUTSIDE_LABEL = "(code run outside of `test_that()`)"


def _caller_srcref() -> SourceRef | None:
    ctx = FILE_CONTEXT.get()
    if ctx is None:
        return None
    frame = inspect.currentframe()
    while frame is not None:
        if ctx.owns(frame.f_code.co_filename):
            return SourceRef(filename=frame.f_code.co_filename, line=frame.f_lineno)
        frame = frame.f_back
    return None


def traceback_srcref(exc: BaseException) -> SourceRef | None:
    """Innermost traceback line that belongs to the running test file."""
    ctx = FILE_CONTEXT.get()
    if ctx is None:
        return None
    if isinstance(exc, SyntaxError) and exc.filename and ctx.owns(exc.filename):
        return SourceRef(filename=exc.filename, line=exc.lineno or 0)
    for entry in reversed(traceback.extract_tb(exc.__traceback__)):
        if ctx.owns(entry.filename):
            return SourceRef(filename=entry.filename, line=entry.lineno or 0)
    return None


def format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


def record(
    kind: OutcomeKind,
    message: str = "",
    *,
    detail: str | None = None,
    srcref: SourceRef | None = None,
) -> Outcome:
    """Build an Outcome for the current block and emit it to the running file."""
    block = BLOCK_CONTEXT.get()
    label = block.label if block is not None else OUTSIDE_LABEL
    outcome = Outcome(
        kind=kind,
        test=label,
        message=message,
        srcref=srcref or _caller_srcref(),
        detail=detail,
    )

    file_ctx = FILE_CONTEXT.get()
    if file_ctx is None:
        if kind.is_failure:
            raise AssertionError(outcome.format())
        return outcome

    if block is not None:
        block.n_outcomes += 1
    file_ctx.emit(label, outcome)
    return outcome


def _show_warning(message, category, filename, lineno, file=None, line=None):
    ctx = FILE_CONTEXT.get()
    srcref = None
    if ctx is not None and ctx.owns(filename):
        srcref = SourceRef(filename=filename, line=lineno)
    record(OutcomeKind.WARNING, f"{category.__name__}: {message}", srcref=srcref)


@contextmanager
def capture_warnings() -> Iterator[None]:
    """Record every warning raised in the block as a WARNING outcome."""
    with warnings.catch_warnings():
        warnings.simplefilter("always")
        warnings.showwarning = _show_warning
        yield


@contextmanager
def test_that(label: str) -> Iterator[None]:
    """Group expectations under a label.

    An exception escaping the block is recorded (failure for AssertionError,
    skip for SkipTest, error otherwise) and the rest of the file keeps
    running. ``sys.exit()`` is recorded as an error too; KeyboardInterrupt
    propagates. Warnings raised inside the block are recorded as warnings. A
    block that records nothing is reported as an empty, skipped test.
    """
    block = TestBlockContext(label=label)

    with block_context_scope(block), capture_warnings():
        try:
            yield
        except (Exception, SystemExit) as exc:
            kind = classify(exc)
            if kind is OutcomeKind.SKIP:
                record(kind, str(exc) or "Skipped", srcref=traceback_srcref(exc))
            else:
                message = str(exc) if kind is OutcomeKind.FAILURE else f"{type(exc).__name__}: {exc}"
                record(
                    kind,
                    message,
                    detail=format_exception(exc),
                    srcref=traceback_srcref(exc),
                )

        if block.n_outcomes == 0:
            record(OutcomeKind.SKIP, "Empty test")


test_that.__test__ = False  # type: ignore[attr-defined]


def expect(condition: Any, message: str = "") -> Outcome:
    if condition:
        return record(OutcomeKind.OK)
    return record(OutcomeKind.FAILURE, message or "condition is not true")


def expect_equal(actual: Any, expected: Any, message: str = "") -> Outcome:
    """Compare with ``==``; multi-line reprs get an ndiff as detail."""
    if actual == expected:
        return record(OutcomeKind.OK)

    left, right = pprint.pformat(actual), pprint.pformat(expected)
    detail = None
    if "\n" in left or "\n" in right:
        detail = "\n".join(difflib.ndiff(left.splitlines(), right.splitlines()))
    summary = f"{left} != {right}" if detail is None else "actual != expected"
    return record(
        OutcomeKind.FAILURE,
        f"{message}: {summary}" if message else summary,
        detail=detail,
    )


def expect_raises(
    exc_type: type[BaseException],
    fn: Callable[..., Any],
    *args: Any,
    match: str | None = None,
    **kwargs: Any,
) -> Outcome:
    """Expect ``fn(*args, **kwargs)`` to raise ``exc_type``.

    Exceptions of other types propagate and are recorded as errors by the
    enclosing block.
    """
    try:
        fn(*args, **kwargs)
    except exc_type as exc:
        if match is not None and not re.search(match, str(exc)):
            return record(
                OutcomeKind.FAILURE,
                f"{type(exc).__name__} message {str(exc)!r} does not match {match!r}",
            )
        return record(OutcomeKind.OK)
    return record(OutcomeKind.FAILURE, f"did not raise {exc_type.__name__}")


def expect_warning(
    category: type[Warning],
    fn: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Outcome:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        fn(*args, **kwargs)
    if any(issubclass(w.category, category) for w in caught):
        return record(OutcomeKind.OK)
    return record(OutcomeKind.FAILURE, f"did not warn {category.__name__}")


def skip(message: str = "Skipped") -> None:
    raise SkipTest(message)


def fail(message: str = "Failure has been forced") -> Outcome:
    return record(OutcomeKind.FAILURE, message)


def succeed(message: str = "") -> Outcome:
    return record(OutcomeKind.OK, message)


__all__ = [
    "capture_warnings",
    "expect",
    "expect_equal",
    "expect_raises",
    "expect_warning",
    "fail",
    "record",
    "skip",
    "succeed",
    "test_that",
]
