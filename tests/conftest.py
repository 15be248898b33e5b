"""
Pytest configuration and shared fixtures for dirsummary tests.
"""

import datetime
import os
import re
import sys
from pathlib import PurePosixPath

import pytest

# Add the src directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))


class FakeFileSystem:
    """In-memory stand-in for ``LocalFileSystem``.

    ``entries`` maps POSIX paths to file contents, or ``None`` for directories.
    Parent directories are created implicitly.
    """

    def __init__(self, entries):
        self.entries = {}
        self.appended = {}
        for raw, content in entries.items():
            path = PurePosixPath(raw)
            for parent in path.parents:
                if str(parent) != "/":
                    self.entries.setdefault(parent, None)
            self.entries[path] = content

    def list_children(self, directory):
        directory = PurePosixPath(directory)
        return [
            (path, content is None)
            for path, content in self.entries.items()
            if path.parent == directory and path != directory
        ]

    def read_lines(self, path):
        lines = re.split(r"\r\n|\r|\n", self.entries[PurePosixPath(path)])
        return lines[:-1] if lines[-1] == "" else lines

    def append_lines(self, path, lines):
        self.appended.setdefault(PurePosixPath(path), []).extend(lines)

    def exists(self, path):
        return PurePosixPath(path) in self.entries

    def ensure_dir(self, directory):
        self.entries.setdefault(PurePosixPath(directory), None)


@pytest.fixture
def fake_fs():
    """Factory building a ``FakeFileSystem`` from a ``{path: content}`` dict."""
    return FakeFileSystem


@pytest.fixture
def fixed_clock():
    moment = datetime.datetime(2024, 3, 9, 14, 5, 7)
    return lambda: moment


@pytest.fixture
def make_tree(tmp_path):
    """Create files under ``tmp_path`` from a ``{relative_path: content}`` dict."""

    def _make(files):
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make
