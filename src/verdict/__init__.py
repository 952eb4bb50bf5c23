"""verdict - run a directory of test files and report a bounded summary."""

from .errors import SkipTest, TestsFailedError, VerdictError
from .expectations import (
    expect,
    expect_equal,
    expect_raises,
    expect_warning,
    fail,
    skip,
    succeed,
    test_that,
)
from .outcomes import Outcome, OutcomeKind, SourceRef, classify
from .reports import CheckReporter, ConsoleReporter, Reporter, SilentReporter, SuiteAbort
from .testing import (
    SuiteResult,
    is_testing,
    test_check,
    test_dir,
    test_package,
    testing_package,
)
from .version import __version__


__all__ = [
    # Running tests
    "test_dir",
    "test_package",
    "test_check",
    "is_testing",
    "testing_package",
    "SuiteResult",
    # Inside test files
    "test_that",
    "expect",
    "expect_equal",
    "expect_raises",
    "expect_warning",
    "skip",
    "fail",
    "succeed",
    # Outcomes
    "Outcome",
    "OutcomeKind",
    "SourceRef",
    "classify",
    # Reporting
    "Reporter",
    "CheckReporter",
    "ConsoleReporter",
    "SilentReporter",
    "SuiteAbort",
    # Errors
    "SkipTest",
    "TestsFailedError",
    "VerdictError",
]
