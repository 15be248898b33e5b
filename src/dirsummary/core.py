"""
Core logic for dirsummary package.
"""

from __future__ import annotations

import datetime
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

import pathspec.util
from colorama import Fore, Style, init as colorama_init

from .fs import LocalFileSystem

colorama_init()

# Exceptions
class SummaryError(Exception): ...
class UsageError(SummaryError): ...
class InvalidRootError(SummaryError): ...
class EmptyResultError(SummaryError): ...
class ConfigFileError(SummaryError): ...
class OutputError(SummaryError): ...

# Defaults
DEFAULT_DEPTH = 5
TIMESTAMP_FORMAT = "%y%m%d_%H%M%S"
OUTPUT_SUFFIX = "-summary.txt"
SEPARATOR = "=" * 80
FILE_NOT_FOUND = "File not found."
UNREADABLE_FILE = "Could not read file."

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_BLANK = "    "


# Logging helpers
def say(msg: str, color: str = "") -> None:
    """Print a ``[dirsummary]`` progress line, colored when *color* is given."""
    line = f"[dirsummary] {msg}"
    print(color + line + Style.RESET_ALL if color else line)


def warn(msg: str) -> None:
    say(msg, Fore.YELLOW)


def error(msg: str) -> None:
    print(Fore.RED + f"Error: {msg}" + Style.RESET_ALL, file=sys.stderr)


# Ignore-file utilities
def translate_pattern(line: str) -> str:
    """Turn one ignore-file line into a wildcard pattern.

    Separators become ``os.sep``. A line that starts or ends with a separator
    is wrapped in ``*`` so it matches anywhere in a path (``build/`` becomes
    ``*build/*``); any other line is kept as written.
    """
    pattern = line.replace("/", os.sep).replace("\\", os.sep)
    if pattern.endswith(os.sep) or pattern.startswith(os.sep):
        return f"*{pattern}*"
    return pattern


def load_ignore_patterns(ignore_path: Optional[Path]) -> List[str]:
    """Read a gitignore-like file into wildcard patterns.

    Blank lines and ``#`` comments are dropped. A missing file yields no
    patterns.
    """
    if ignore_path is None or not ignore_path.exists():
        return []
    if not ignore_path.is_file():
        raise ConfigFileError(f"Ignore file '{ignore_path}' is not a file")
    try:
        with ignore_path.open("r", encoding="utf-8") as fh:
            lines = [
                ln.strip()
                for ln in fh
                if ln.strip() and not ln.lstrip().startswith("#")
            ]
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Could not read ignore file '{ignore_path}': {e}")
    return [translate_pattern(ln) for ln in lines]


# Matching
def _fold(text: str) -> str:
    return text.replace("\\", "/").lower()


def wildcard_match(pattern: str, text: str) -> bool:
    """Case-insensitive glob match supporting ``*`` and ``?``.

    ``*`` also spans path separators. Both separator styles compare equal.
    """
    pattern, text = _fold(pattern), _fold(text)
    p = t = 0
    star, mark = -1, 0
    while t < len(text):
        if p < len(pattern) and pattern[p] in ("?", text[t]):
            p += 1
            t += 1
        elif p < len(pattern) and pattern[p] == "*":
            star, mark = p, t
            p += 1
        elif star != -1:
            # let the last star swallow one more character
            p = star + 1
            mark += 1
            t = mark
        else:
            return False
    while p < len(pattern) and pattern[p] == "*":
        p += 1
    return p == len(pattern)


def relative_posix(path: Path, root: Path) -> str:
    """Path of *path* below *root* with forward slashes."""
    return pathspec.util.normalize_file(path.relative_to(root))


def is_ignored(path: Path, root: Path, patterns: Sequence[str], is_dir: bool = False) -> bool:
    """True when any pattern matches the root-relative or the absolute path.

    Directories are also checked with a trailing separator so ``*build/*``
    drops the ``build`` directory itself.
    """
    if not patterns:
        return False
    candidates = [relative_posix(path, root), str(path)]
    if is_dir:
        candidates += [c + "/" for c in candidates]
    return any(wildcard_match(pat, cand) for pat in patterns for cand in candidates)


def extension_of(name: str) -> str:
    return name.rsplit(".", 1)[1] if "." in name else ""


# Traversal
@dataclass(frozen=True)
class TraversalResult:
    tree_lines: List[str] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)

    def __add__(self, other: "TraversalResult") -> "TraversalResult":
        return TraversalResult(
            self.tree_lines + other.tree_lines, self.files + other.files
        )


def traverse(
    directory: Path,
    extensions: Set[str],
    patterns: Sequence[str] = (),
    depth: int = DEFAULT_DEPTH,
    prefix: str = "",
    root: Optional[Path] = None,
    fs: Optional[LocalFileSystem] = None,
) -> TraversalResult:
    """Walk *directory* and return its tree lines and the files it keeps.

    Children are visited sorted by name. Directories are always entered,
    files are kept when their extension is in *extensions*, and anything an
    ignore pattern matches is dropped with its whole subtree. Recursion stops
    silently once *depth* levels have been listed.
    """
    if depth <= 0:
        return TraversalResult()
    fs = fs or LocalFileSystem()
    root = root or directory

    try:
        children = fs.list_children(directory)
    except OSError as e:
        raise InvalidRootError(f"Could not scan directory '{directory}': {e}")

    entries = [
        (path, is_dir)
        for path, is_dir in sorted(children, key=lambda e: e[0].name)
        if is_dir or extension_of(path.name) in extensions
    ]
    entries = [
        (path, is_dir)
        for path, is_dir in entries
        if not is_ignored(path, root, patterns, is_dir)
    ]

    result = TraversalResult()
    for idx, (path, is_dir) in enumerate(entries):
        last = idx == len(entries) - 1
        connector = _LAST if last else _BRANCH
        if is_dir:
            result += TraversalResult([f"{prefix}{connector}{path.name}/"])
            result += traverse(
                path,
                extensions,
                patterns,
                depth - 1,
                prefix + (_BLANK if last else _PIPE),
                root,
                fs,
            )
        else:
            result += TraversalResult([f"{prefix}{connector}{path.name}"], [path])
    return result


def render_tree(root: Path, result: TraversalResult) -> List[str]:
    return [f"{root.name or root}/"] + result.tree_lines


# Output
def output_path(directory: Path, now: datetime.datetime) -> Path:
    """``<YYMMDD_HHMMSS>-summary.txt`` inside *directory*."""
    return directory / f"{now.strftime(TIMESTAMP_FORMAT)}{OUTPUT_SUFFIX}"


def display_path(path: Path, base: Path) -> str:
    try:
        return relative_posix(path, base)
    except ValueError:
        return str(path).replace("\\", "/")


def format_file_block(
    path: Path,
    base: Path,
    fs: Optional[LocalFileSystem] = None,
    verbose: bool = False,
) -> List[str]:
    """Separator, path line, the file's lines and a trailing blank line."""
    fs = fs or LocalFileSystem()
    label = display_path(path, base)
    if not fs.exists(path):
        if verbose:
            warn(f"! {label} vanished before it could be written")
        body = [FILE_NOT_FOUND]
    else:
        try:
            body = fs.read_lines(path)
        except OSError as e:
            if verbose:
                warn(f"! Could not read {label}: {e}")
            body = [UNREADABLE_FILE]
    return [SEPARATOR, label, *body, ""]


def write_summary(
    out_path: Path,
    files: Iterable[Path],
    base: Path,
    tree_lines: Optional[List[str]] = None,
    fs: Optional[LocalFileSystem] = None,
    verbose: bool = False,
) -> int:
    """Append the tree (when given) and one block per file to *out_path*.

    Returns the number of file blocks written.
    """
    fs = fs or LocalFileSystem()
    count = 0
    try:
        fs.ensure_dir(out_path.parent)
        if tree_lines:
            fs.append_lines(out_path, [*tree_lines, ""])
        for path in files:
            fs.append_lines(out_path, format_file_block(path, base, fs, verbose))
            count += 1
    except OSError as e:
        raise OutputError(f"Could not write to output file '{out_path}': {e}")
    return count
