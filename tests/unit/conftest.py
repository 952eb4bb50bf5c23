"""Shared fixtures for unit tests."""

import io
import textwrap
from pathlib import Path

import pytest
from rich.console import Console


class RecordingReporter:
    """Reporter that keeps every event for assertions."""

    def __init__(self, abort=None):
        self.events = []
        self.results = []
        self.abort = abort

    def on_suite_start(self) -> None:
        self.events.append(("suite_start",))

    def on_file_start(self, descriptor) -> None:
        self.events.append(("file_start", descriptor.name))

    def on_result(self, context, test, outcome) -> None:
        self.results.append((context, test, outcome))

    def on_file_end(self, descriptor) -> None:
        self.events.append(("file_end", descriptor.name))

    def on_suite_end(self):
        self.events.append(("suite_end",))
        return self.abort


@pytest.fixture
def console() -> Console:
    """Uncoloured console writing to a string buffer."""
    return Console(file=io.StringIO(), width=100, color_system=None)


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def write_files(tmp_path: Path):
    """Write ``{name: source}`` into a fresh test directory and return it."""

    def _write(files: dict[str, str], directory: str = "suite") -> Path:
        test_dir = tmp_path / directory
        test_dir.mkdir(parents=True, exist_ok=True)
        for name, source in files.items():
            (test_dir / name).write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return test_dir

    return _write
