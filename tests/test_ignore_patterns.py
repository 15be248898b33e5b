"""Tests for ignore-file loading and wildcard matching."""

import os
from pathlib import Path, PurePosixPath

import pytest

from dirsummary.core import (
    ConfigFileError,
    is_ignored,
    load_ignore_patterns,
    translate_pattern,
    wildcard_match,
)


def test_blank_and_comment_lines_produce_no_patterns(tmp_path):
    ignore = tmp_path / ".summaryignore"
    ignore.write_text("\n# build output\n   \n  # indented comment\n*.log\n", encoding="utf-8")

    assert load_ignore_patterns(ignore) == ["*.log"]


def test_lines_are_trimmed(tmp_path):
    ignore = tmp_path / "ignore.txt"
    ignore.write_text("   secret.txt   \n", encoding="utf-8")

    assert load_ignore_patterns(ignore) == ["secret.txt"]


def test_missing_ignore_file_means_no_patterns(tmp_path):
    assert load_ignore_patterns(tmp_path / "nope") == []
    assert load_ignore_patterns(None) == []


def test_ignore_path_that_is_a_directory_is_rejected(tmp_path):
    with pytest.raises(ConfigFileError):
        load_ignore_patterns(tmp_path)


def test_trailing_separator_is_wrapped():
    assert translate_pattern("build/") == f"*build{os.sep}*"


def test_leading_separator_is_wrapped():
    assert translate_pattern("/dist") == f"*{os.sep}dist*"


def test_plain_pattern_is_kept():
    assert translate_pattern("*.py?") == "*.py?"


@pytest.mark.parametrize(
    "pattern,text,expected",
    [
        ("*.log", "app.log", True),
        ("*.log", "logs/app.log", True),
        ("*.log", "app.log.txt", False),
        ("?.txt", "a.txt", True),
        ("?.txt", "ab.txt", False),
        ("*build/*", "src/build/out.o", True),
        ("*build/*", "builder.py", False),
        ("README.MD", "readme.md", True),
        ("a*b*c", "axxbyyc", True),
        ("a*b*c", "axxbyy", False),
        ("*", "", True),
        ("", "x", False),
        ("*build\\*", "src/build/out.o", True),
    ],
)
def test_wildcard_match(pattern, text, expected):
    assert wildcard_match(pattern, text) is expected


def test_is_ignored_matches_relative_path():
    root = PurePosixPath("/proj")
    assert is_ignored(root / "src" / "secret.txt", root, ["src/SECRET.txt"])
    assert not is_ignored(root / "src" / "public.txt", root, ["src/SECRET.txt"])


def test_is_ignored_matches_absolute_path():
    root = PurePosixPath("/proj")
    assert is_ignored(root / "gen", root, ["/proj/gen"], is_dir=True)


def test_directory_pattern_drops_the_directory_itself():
    root = PurePosixPath("/proj")
    patterns = ["*build/*"]
    assert is_ignored(root / "build", root, patterns, is_dir=True)
    assert not is_ignored(root / "build.txt", root, patterns)


def test_no_patterns_never_ignores(tmp_path):
    assert not is_ignored(tmp_path / "a.txt", Path(tmp_path), [])
