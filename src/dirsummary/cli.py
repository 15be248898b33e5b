"""
CLI entrypoint for dirsummary package.
"""
import argparse
import datetime
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set

from colorama import Fore

from .core import (
    DEFAULT_DEPTH,
    load_ignore_patterns,
    traverse,
    render_tree,
    output_path,
    write_summary,
    say,
    error,
    SummaryError,
    UsageError,
    InvalidRootError,
    EmptyResultError,
)
from .fs import LocalFileSystem

FOLDER_MODE = "folder"
FILES_MODE = "files"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dirsummary",
        description=(
            "Write a <YYMMDD_HHMMSS>-summary.txt holding a folder tree plus the "
            "contents of the selected files."
        ),
    )
    p.add_argument("--folder", type=Path, help="Root directory to scan (folder mode)")
    p.add_argument(
        "--exts",
        help="Comma-separated extensions to include, without the dot (e.g. py,md)",
    )
    p.add_argument(
        "--files",
        nargs="*",
        type=Path,
        help="Explicit files to summarize (file-list mode)",
    )
    p.add_argument(
        "--ignore",
        type=Path,
        help="Path to a gitignore-like file of patterns to skip",
    )
    p.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Maximum directory depth to walk (default {DEFAULT_DEPTH})",
    )
    p.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the summary file (default: current directory)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return p


def parse_extensions(raw: Optional[str]) -> Set[str]:
    if not raw:
        return set()
    return {ext.strip().lstrip(".") for ext in raw.split(",") if ext.strip().lstrip(".")}


def resolve_mode(ns: argparse.Namespace) -> str:
    """Pick folder or file-list mode; exactly one must be requested."""
    folder_mode = bool(ns.folder) and bool(parse_extensions(ns.exts))
    files_mode = ns.files is not None
    if folder_mode == files_mode:
        raise UsageError("supply either --folder with --exts, or --files")
    if ns.depth < 1:
        raise UsageError("--depth must be at least 1")
    return FOLDER_MODE if folder_mode else FILES_MODE


def _anchor(path: Path, cwd: Path) -> Path:
    return (path if path.is_absolute() else cwd / path).resolve()


def run(
    ns: argparse.Namespace,
    now: Callable[[], datetime.datetime] = datetime.datetime.now,
    cwd: Optional[Path] = None,
    fs: Optional[LocalFileSystem] = None,
) -> Path:
    """Execute one summary run and return the output file path."""
    started = now()
    cwd = cwd or Path.cwd()
    fs = fs or LocalFileSystem()
    mode = resolve_mode(ns)
    out_dir = _anchor(ns.output_dir or cwd, cwd)
    out_path = output_path(out_dir, started)

    tree_lines: Optional[List[str]] = None
    if mode == FOLDER_MODE:
        root = _anchor(ns.folder, cwd)
        if not root.exists():
            raise InvalidRootError(f"Folder '{ns.folder}' does not exist")
        if not root.is_dir():
            raise InvalidRootError(f"Folder '{ns.folder}' is not a directory")

        patterns = load_ignore_patterns(_anchor(ns.ignore, cwd) if ns.ignore else None)
        if ns.verbose:
            if ns.ignore:
                say(f"Loaded {len(patterns)} ignore patterns from {ns.ignore}")
            say(f"Scanning {root} …")

        result = traverse(
            root, parse_extensions(ns.exts), patterns, depth=ns.depth, fs=fs
        )
        if not result.files:
            raise EmptyResultError(f"No matching files found under '{ns.folder}'")
        if ns.verbose:
            say(f"{len(result.files)} files kept after filtering.")
        files: Sequence[Path] = result.files
        base = root
        tree_lines = render_tree(root, result)
    else:
        if not ns.files:
            raise EmptyResultError("No files given")
        files = [f if f.is_absolute() else cwd / f for f in ns.files]
        base = cwd

    written = write_summary(
        out_path, files, base, tree_lines=tree_lines, fs=fs, verbose=ns.verbose
    )
    if ns.verbose:
        say(f"Done → {out_path}. {written} files written.", Fore.GREEN)
    return out_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    try:
        ns = parser.parse_args(argv)
        try:
            run(ns)
        except UsageError as e:
            parser.print_usage(sys.stderr)
            error(str(e))
            sys.exit(1)
        except SummaryError as e:
            error(str(e))
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
