"""
Markdown output for source-map.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from .errors import OutputError
from .walker import Candidate


class MarkdownWriter:
    """Writes headers, fenced code blocks and raw text to a Markdown file.

    Use as a context manager; the file is created (or truncated) on enter.
    """

    def __init__(self, out_path: Path) -> None:
        self.out_path = out_path
        self._fh: Optional[TextIO] = None

    def __enter__(self) -> "MarkdownWriter":
        try:
            self.out_path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.out_path.open("w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputError(f"Could not open output file '{self.out_path}': {e}")
        return self

    def __exit__(self, *exc_info) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def _write(self, text: str) -> None:
        if self._fh is None:
            raise OutputError("Markdown file is not open")
        try:
            self._fh.write(text)
        except OSError as e:
            raise OutputError(f"Could not write to output file '{self.out_path}': {e}")

    def add_header(self, level: int, text: str) -> None:
        self._write(f"{'#' * level} {text}\n\n")

    def add_code_block(self, tag: str, content: str) -> None:
        self._write(f"```{tag}\n{content}\n```\n\n")

    def add_raw_text(self, text: str) -> None:
        self._write(text)


# project-tree renderer
def build_project_tree(entries: Iterable[Candidate], root_label: str) -> str:
    """
    Return an ASCII tree (à la the Unix ``tree`` utility).

    • Directories are listed before files, each group by name.
    • Empty directories are kept; they are part of the project layout.
    """
    tree: Dict[str, Optional[dict]] = {}

    for entry in entries:
        parts = entry.path.split("/")
        cur = tree
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})  # type: ignore[assignment]
        if entry.is_dir:
            cur.setdefault(parts[-1], {})
        else:
            cur[parts[-1]] = None

    lines: List[str] = [root_label]

    def _walk(node: dict, prefix: str = "") -> None:
        items = sorted(node.items(), key=lambda kv: (kv[1] is None, kv[0]))  # dirs first
        for idx, (name, child) in enumerate(items):
            last = idx == len(items) - 1
            connector = "└── " if last else "├── "
            lines.append(f"{prefix}{connector}{name}{'/' if child is not None else ''}")
            if child is not None:
                _walk(child, prefix + ("    " if last else "│   "))

    _walk(tree)
    return "\n".join(lines) + "\n"
