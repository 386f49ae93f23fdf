"""
Tree traversal: which entries of the project end up in the document.

Entries are visited depth-first, a directory before its contents, siblings in
name order. Paths are reported relative to the scan root in posix form
(``src/main.c``), which is also the form the ``.gitignore`` rules see.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, List, Tuple

from .console import warn
from .ignore import PatternSet
from .profile import ProfileFilter, split_extension

# Never shown in the directory listing.
TREE_HIDDEN: FrozenSet[str] = frozenset({".git"})


@dataclass(frozen=True)
class Candidate:
    path: str
    is_dir: bool

    @property
    def basename(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def extension(self) -> str:
        return "" if self.is_dir else split_extension(self.basename)


def _list_dir(directory: Path, verbose: bool) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        if verbose:
            warn(f"Could not open directory {directory}: {e}")
        return []


def _scan(
    directory: Path,
    rel: str,
    patterns: PatternSet,
    output_name: str,
    hidden: Iterable[str],
    verbose: bool,
    active: Tuple[str, ...],
) -> Iterator[Tuple[Candidate, Path]]:
    for entry in _list_dir(directory, verbose):
        path = f"{rel}/{entry.name}" if rel else entry.name
        try:
            mode = entry.stat().st_mode
        except OSError as e:
            if verbose:
                warn(f"Could not stat {path}: {e}")
            continue

        is_dir = stat.S_ISDIR(mode)
        if entry.name in hidden:
            continue
        if patterns.matches(path, is_dir):
            continue

        if is_dir:
            real = os.path.realpath(entry)
            if real in active:
                if verbose:
                    warn(f"Skipping {path}: symlink loop")
                continue
            yield Candidate(path, True), entry
            yield from _scan(
                entry, path, patterns, output_name, hidden, verbose, active + (real,)
            )
        elif stat.S_ISREG(mode):
            # The document being written must never contain itself.
            if entry.name == output_name:
                continue
            yield Candidate(path, False), entry


def _start(root: Path) -> Tuple[str, ...]:
    return (os.path.realpath(root),)


def walk(
    root: Path,
    patterns: PatternSet,
    profile_filter: ProfileFilter,
    output_name: str,
    verbose: bool = False,
) -> Iterator[Tuple[str, bytes]]:
    """Yield ``(relative_path, content)`` for every file the profile wants.

    Ignored directories are not descended into. Unreadable entries are
    skipped without interrupting the walk.
    """
    for candidate, fs_path in _scan(
        root, "", patterns, output_name, (), verbose, _start(root)
    ):
        if candidate.is_dir:
            continue
        if not profile_filter.is_allowed(candidate.basename, candidate.extension):
            continue
        try:
            content = fs_path.read_bytes()
        except OSError as e:
            if verbose:
                warn(f"Could not read {candidate.path}: {e}")
            continue
        yield candidate.path, content


def walk_tree(
    root: Path,
    patterns: PatternSet,
    output_name: str,
    verbose: bool = False,
) -> Iterator[Candidate]:
    """Every entry that belongs in the directory listing, profile not applied."""
    for candidate, _ in _scan(
        root, "", patterns, output_name, TREE_HIDDEN, verbose, _start(root)
    ):
        yield candidate
