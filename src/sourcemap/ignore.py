"""
.gitignore handling for source-map.

Only the ``.gitignore`` at the scan root is read. Rules are evaluated in file
order and the last rule that matches a path decides whether it is ignored,
so a ``!`` rule can re-include something an earlier rule excluded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from .console import warn


@dataclass(frozen=True)
class Pattern:
    """A single ignore rule with its ``!`` and trailing ``/`` already stripped."""

    glob: str
    negation: bool = False
    directory_only: bool = False
    _regex: Optional[re.Pattern] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def parse(cls, line: str) -> Optional["Pattern"]:
        """Turn one rule-file line into a :class:`Pattern` (``None`` for blanks/comments)."""
        line = line.rstrip("\r\n")
        if not line or line.startswith("#"):
            return None

        negation = line.startswith("!")
        if negation:
            line = line[1:]
        directory_only = line.endswith("/")
        if directory_only:
            line = line[:-1]
        return cls(line, negation=negation, directory_only=directory_only)

    def compile(self) -> "Pattern":
        """Return a copy carrying the compiled glob.

        Raises ``ValueError`` when the glob cannot be compiled.
        """
        if not self.glob:
            raise ValueError("empty pattern")
        compiled = Pattern(self.glob, self.negation, self.directory_only)
        object.__setattr__(compiled, "_regex", translate_glob(self.glob))
        return compiled

    def matches(self, path: str) -> bool:
        return self._regex is not None and self._regex.fullmatch(path) is not None


def translate_glob(glob: str) -> re.Pattern:
    """Compile *glob* to match a whole path, ``fnmatch(FNM_PATHNAME)`` style.

    ``*`` and ``?`` never match ``/`` (so ``**`` is just two ``*``). Apart
    from ``[...]`` and ``\\`` escapes the rest is literal, a leading ``/`` and
    trailing spaces included.
    """
    return re.compile(GitWildMatchPattern._translate_segment_glob(glob), re.DOTALL)


class PatternSet:
    """Ordered ignore rules answering "is this path excluded?"."""

    def __init__(self, patterns: Iterable[Pattern] = ()) -> None:
        compiled: List[Pattern] = []
        for pattern in patterns:
            try:
                compiled.append(pattern.compile())
            except (ValueError, re.error) as e:
                warn(f"Skipping malformed ignore pattern '{pattern.glob}': {e}")
        self.patterns: Tuple[Pattern, ...] = tuple(compiled)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "PatternSet":
        parsed = (Pattern.parse(line) for line in lines)
        return cls(p for p in parsed if p is not None)

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self):
        return iter(self.patterns)

    def matches(self, path: str, is_dir: bool) -> bool:
        """Return ``True`` if *path* is ignored.

        Every rule is consulted; a later match overrides an earlier one.
        """
        if path.startswith("./"):
            path = path[2:]

        ignored = False
        for pattern in self.patterns:
            if pattern.directory_only and not is_dir:
                continue
            if pattern.matches(path):
                ignored = not pattern.negation
        return ignored


def load_gitignore(root: Path) -> PatternSet:
    """Compile ``root/.gitignore``; a missing or unreadable file means no rules."""
    gitignore_path = root / ".gitignore"
    try:
        with gitignore_path.open("r", encoding="utf-8", errors="replace") as fh:
            return PatternSet.from_lines(fh)
    except OSError:
        return PatternSet()
