"""Test file discovery, isolated execution and suite orchestration."""

from .discovery import FileRole, TestFileDescriptor, find_test_files
from .runner import TestFileRunner
from .state import is_testing, testing_package
from .suite import (
    SuiteResult,
    TestRecord,
    TestSuiteOrchestrator,
    test_check,
    test_dir,
    test_package,
)


__all__ = [
    "FileRole",
    "SuiteResult",
    "TestFileDescriptor",
    "TestFileRunner",
    "TestRecord",
    "TestSuiteOrchestrator",
    "find_test_files",
    "is_testing",
    "test_check",
    "test_dir",
    "test_package",
    "testing_package",
]
