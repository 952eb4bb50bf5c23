"""Tests for suite orchestration and the test_dir/test_package/test_check entry points."""

import os

import pytest

from verdict.errors import NoTestsFoundError, SetupFileError, TestsFailedError
from verdict.outcomes import OutcomeKind
from verdict.reports import CheckReporter, SilentReporter, SuiteAbort
from verdict.testing import is_testing, test_check, test_dir, test_package, testing_package
from verdict.testing.state import ENV_PACKAGE, ENV_TESTING, in_package_test


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_TESTING, raising=False)
    monkeypatch.delenv(ENV_PACKAGE, raising=False)


LOGGING_SUITE = {
    "helper_log.py": "log.append('helper')\n",
    "setup_log.py": "log.append('setup')\n",
    "teardown_log.py": "log.append('teardown')\n",
    "test_b.py": """
        from verdict import expect, test_that

        log.append('test_b')
        with test_that("b"):
            expect(True)
        """,
    "test_a.py": """
        from verdict import expect, test_that

        log.append('test_a')
        with test_that("a"):
            expect(helper_ran)
        """,
    "helper_flag.py": "helper_ran = True\n",
}


class TestOrchestration:
    def test_roles_run_in_order(self, write_files, recording_reporter):
        suite = write_files(LOGGING_SUITE)
        log = []

        result = test_dir(suite, reporter=recording_reporter, namespace={"log": log})

        assert log == ["helper", "setup", "test_a", "test_b", "teardown"]
        assert recording_reporter.events == [
            ("suite_start",),
            ("file_start", "test_a.py"),
            ("file_end", "test_a.py"),
            ("file_start", "test_b.py"),
            ("file_end", "test_b.py"),
            ("suite_end",),
        ]
        assert result.n_ok == 2
        assert result.ok

    def test_results_are_returned_to_caller(self, write_files):
        suite = write_files(LOGGING_SUITE)

        result = test_dir(suite, reporter=SilentReporter(), namespace={"log": []})

        assert [(r.file, r.context, r.test) for r in result.results] == [
            ("test_a.py", "a", "a"),
            ("test_b.py", "b", "b"),
        ]

    def test_skip_helpers(self, write_files):
        suite = write_files(LOGGING_SUITE)
        log = []

        result = test_dir(
            suite,
            reporter=SilentReporter(),
            namespace={"log": log, "helper_ran": False},
            load_helpers=False,
        )

        assert log == ["setup", "test_a", "test_b", "teardown"]
        assert result.n_fail == 1

    def test_filter_keeps_lifecycle_files(self, write_files):
        suite = write_files(LOGGING_SUITE)
        log = []

        test_dir(suite, filter="^b$", reporter=SilentReporter(), namespace={"log": log})

        assert log == ["helper", "setup", "test_b", "teardown"]

    def test_load_error_does_not_stop_other_files(self, write_files, recording_reporter):
        suite = write_files(
            {
                "test_a_broken.py": "raise RuntimeError('boom')\n",
                "test_b_fine.py": "from verdict import expect\nexpect(True)\n",
            }
        )

        result = test_dir(suite, reporter=recording_reporter)

        assert result.n_fail == 1
        assert result.n_ok == 1
        assert [o.kind for _, _, o in recording_reporter.results] == [OutcomeKind.ERROR, OutcomeKind.OK]

    def test_sys_exit_in_test_file_does_not_end_suite(self, write_files, recording_reporter):
        suite = write_files(
            {
                "test_a_exits.py": "import sys\nsys.exit(3)\n",
                "test_b_fine.py": "from verdict import expect\nexpect(True)\n",
                "teardown_exits.py": "import sys\nsys.exit(4)\n",
            }
        )

        result = test_dir(suite, reporter=recording_reporter)

        assert [(r.file, r.kind) for r in result.results] == [
            ("test_a_exits.py", OutcomeKind.ERROR),
            ("test_b_fine.py", OutcomeKind.OK),
            ("teardown_exits.py", OutcomeKind.ERROR),
        ]
        assert result.results[0].outcome.message == "SystemExit: 3"
        assert recording_reporter.events[-1] == ("suite_end",)

    def test_teardown_runs_once_after_unexpected_error(self, write_files):
        suite = write_files(
            {
                "teardown_count.py": "log.append('teardown')\n",
                "test_crash.py": """
                    from verdict import expect, test_that

                    with test_that("before"):
                        expect(True)
                    raise OSError("disk gone")
                    """,
            }
        )
        log = []

        result = test_dir(suite, reporter=SilentReporter(), namespace={"log": log})

        assert log == ["teardown"]
        assert result.n_fail == 1

    def test_teardown_runs_when_reporter_raises(self, write_files):
        class ExplodingReporter(SilentReporter):
            def on_file_start(self, descriptor):
                raise KeyboardInterrupt

        suite = write_files({"teardown_x.py": "log.append('teardown')\n", "test_x.py": ""})
        log = []

        with pytest.raises(KeyboardInterrupt):
            test_dir(suite, reporter=ExplodingReporter(), namespace={"log": log})

        assert log == ["teardown"]

    def test_failing_teardown_is_reported(self, write_files):
        suite = write_files({"teardown_bad.py": "1 / 0\n", "test_ok.py": "from verdict import succeed\nsucceed()\n"})

        result = test_dir(suite, reporter=SilentReporter())

        assert [r.kind for r in result.results] == [OutcomeKind.OK, OutcomeKind.ERROR]
        assert result.results[-1].file == "teardown_bad.py"

    def test_setup_error_raises(self, write_files):
        suite = write_files({"setup_bad.py": "raise ImportError('missing')\n", "test_x.py": ""})

        with pytest.raises(SetupFileError, match="setup_bad.py"):
            test_dir(suite, reporter=SilentReporter())


class TestAbortPolicy:
    FILES = {
        "test_mixed.py": """
            import warnings
            from verdict import expect, test_that

            with test_that("mixed"):
                expect(False)
                warnings.warn("deprecated thing")
            """
    }

    def test_no_abort_by_default(self, write_files):
        result = test_dir(write_files(self.FILES), reporter=SilentReporter())

        assert result.abort is None
        assert result.n_fail == 1
        assert result.n_warn == 1
        result.raise_for_abort()

    def test_stop_on_failure(self, write_files):
        result = test_dir(write_files(self.FILES), reporter=SilentReporter(), stop_on_failure=True)

        assert result.abort == SuiteAbort("Test failures", n_fail=1, n_warn=1)
        with pytest.raises(TestsFailedError):
            result.raise_for_abort()

    def test_stop_on_warning(self, write_files):
        files = {"test_warn.py": "import warnings\nfrom verdict import test_that\nwith test_that('w'):\n    warnings.warn('x')\n"}

        result = test_dir(write_files(files), reporter=SilentReporter(), stop_on_warning=True)

        assert result.abort is not None
        assert result.abort.reason == "Tests generated warnings"

    def test_reporter_abort_is_propagated(self, write_files, console):
        result = test_dir(write_files(self.FILES), reporter=CheckReporter(console=console))

        assert result.abort is not None
        assert result.abort.reason == "verdict unit tests failed"
        assert "OK: 0 SKIPPED: 0 WARNINGS: 1 FAILED: 1" in console.file.getvalue()


class TestTestingFlag:
    def test_flag_set_during_run_and_cleared_after(self, write_files):
        suite = write_files(
            {
                "test_flag.py": """
                    from verdict import expect, is_testing, test_that

                    with test_that("flag"):
                        expect(is_testing())
                    """
            }
        )

        result = test_dir(suite, reporter=SilentReporter())

        assert result.n_ok == 1
        assert not is_testing()
        assert ENV_TESTING not in os.environ

    def test_flag_cleared_after_error(self, write_files):
        suite = write_files({"setup_bad.py": "raise ValueError\n"})

        with pytest.raises(SetupFileError):
            test_dir(suite, reporter=SilentReporter())

        assert not is_testing()


@pytest.fixture
def make_package(tmp_path, monkeypatch):
    """Create an importable package with tests inside it."""

    def _make(name: str, tests: dict[str, str], subdir: str = "tests/verdict"):
        package_dir = tmp_path / "site" / name
        package_dir.mkdir(parents=True)
        (package_dir / "__init__.py").write_text("_secret = 42\n\ndef public():\n    return _secret\n")
        test_path = package_dir / subdir
        test_path.mkdir(parents=True)
        for file_name, source in tests.items():
            (test_path / file_name).write_text(source)
        monkeypatch.syspath_prepend(str(tmp_path / "site"))
        return package_dir

    return _make


class TestPackageEntryPoints:
    PACKAGE_TEST = (
        "from verdict import expect, expect_equal, test_package, testing_package, test_that\n"
        "with test_that('internals'):\n"
        "    expect_equal(_secret, 42)\n"
        "    expect_equal(public(), 42)\n"
        "with test_that('package name'):\n"
        "    expect_equal(testing_package(), __package__)\n"
        "with test_that('nested call is ignored'):\n"
        "    expect(test_package('anything') is None)\n"
    )

    def test_package_tests_see_private_names(self, make_package, console):
        make_package("verdict_pkg_one", {"test_internal.py": self.PACKAGE_TEST})

        result = test_package("verdict_pkg_one", reporter=CheckReporter(console=console))

        assert result.n_ok == 4
        assert result.ok
        assert "OK: 4 SKIPPED: 0 WARNINGS: 0 FAILED: 0" in console.file.getvalue()
        assert not in_package_test()
        assert testing_package() == ""

    def test_package_default_stops_on_failure(self, make_package, console):
        make_package("verdict_pkg_two", {"test_bad.py": "from verdict import fail\nfail()\n"})

        result = test_package("verdict_pkg_two", reporter=CheckReporter(console=console))

        assert result.abort is not None

    def test_legacy_tests_directory_warns(self, make_package):
        make_package("verdict_pkg_three", {"test_ok.py": "from verdict import succeed\nsucceed()\n"}, subdir="tests")

        with pytest.warns(DeprecationWarning, match="tests/verdict"):
            result = test_package("verdict_pkg_three", reporter=SilentReporter())

        assert result.n_ok == 1

    def test_package_without_tests_raises(self, tmp_path, monkeypatch):
        package_dir = tmp_path / "site" / "verdict_pkg_empty"
        package_dir.mkdir(parents=True)
        (package_dir / "__init__.py").write_text("")
        monkeypatch.syspath_prepend(str(tmp_path / "site"))

        with pytest.raises(NoTestsFoundError, match="verdict_pkg_empty"):
            test_package("verdict_pkg_empty", reporter=SilentReporter())

        assert not in_package_test()

    def test_check_runs_from_tests_directory(self, make_package, monkeypatch, console):
        package_dir = make_package("verdict_pkg_four", {})
        project_tests = package_dir.parent / "project_tests"
        (project_tests / "verdict").mkdir(parents=True)
        (project_tests / "verdict" / "test_it.py").write_text(
            "from verdict import expect_equal\nexpect_equal(_secret, 42)\n"
        )
        monkeypatch.chdir(project_tests)

        result = test_check("verdict_pkg_four", reporter=CheckReporter(console=console))

        assert result.n_ok == 1
        assert result.ok

    def test_check_without_directory_raises(self, make_package, monkeypatch, tmp_path):
        make_package("verdict_pkg_five", {})
        monkeypatch.chdir(tmp_path)

        with pytest.raises(NoTestsFoundError):
            test_check("verdict_pkg_five", reporter=SilentReporter())
