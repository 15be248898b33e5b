"""
Filesystem collaborator used by the traversal and the writer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple


class LocalFileSystem:
    """Thin wrapper over :mod:`pathlib` exposing only what the summarizer needs."""

    encoding = "utf-8"

    def list_children(self, directory: Path) -> List[Tuple[Path, bool]]:
        """Return ``(path, is_dir)`` for every immediate child of *directory*."""
        return [(child, child.is_dir()) for child in directory.iterdir()]

    def read_lines(self, path: Path) -> List[str]:
        # line endings only; str.splitlines also breaks on \x0c and \u2028
        with path.open("r", encoding=self.encoding, errors="replace") as fh:
            return [ln.rstrip("\r\n") for ln in fh]

    def append_lines(self, path: Path, lines: Iterable[str]) -> None:
        with path.open("a", encoding=self.encoding, newline="\n") as fh:
            for line in lines:
                fh.write(f"{line}\n")

    def exists(self, path: Path) -> bool:
        return path.exists()

    def ensure_dir(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
