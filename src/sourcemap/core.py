"""
Core logic for source-map: scan a project and write it out as Markdown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from . import console
from .errors import InvalidRootError, SourceMapError
from .ignore import PatternSet, load_gitignore
from .markdown import MarkdownWriter, build_project_tree
from .profile import LanguageProfile, ProfileFilter, syntax_tag
from .walker import walk, walk_tree

__all__ = [
    "SourceMapError",
    "InvalidRootError",
    "ExportSummary",
    "resolve_root",
    "generate_document",
]


@dataclass
class ExportSummary:
    out_path: Path
    files_written: int = 0
    bytes_written: int = 0
    binary_files: List[str] = field(default_factory=list)


def _is_binary(data: bytes) -> bool:
    return b"\0" in data


def resolve_root(root: Path) -> Path:
    try:
        root = root.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidRootError(f"Could not resolve root path '{root}': {e}")
    if not root.exists():
        raise InvalidRootError(f"Root directory '{root}' does not exist")
    if not root.is_dir():
        raise InvalidRootError(f"Root path '{root}' is not a directory")
    return root


def generate_document(
    profile: LanguageProfile,
    root: Path,
    out_path: Path,
    verbose: bool = False,
) -> ExportSummary:
    """Write the directory tree of *root* and the profile-selected file
    contents to *out_path*.

    The output file is left out of both the tree and the contents, wherever
    it sits in the project.
    """
    root = resolve_root(root)
    output_name = out_path.name
    patterns: PatternSet = load_gitignore(root)
    if verbose:
        console.info(f"Scanning {root} …")
        console.info(f"{len(patterns)} ignore rules loaded from .gitignore")

    summary = ExportSummary(out_path=out_path)
    profile_filter = ProfileFilter(profile)

    with MarkdownWriter(out_path) as md:
        md.add_header(1, profile.language_name)

        md.add_header(2, "Directory Tree")
        tree = build_project_tree(walk_tree(root, patterns, output_name, verbose), root.name)
        md.add_code_block("", tree.rstrip("\n"))

        md.add_header(2, "File Contents")
        for rel, raw in walk(root, patterns, profile_filter, output_name, verbose):
            md.add_header(3, rel)
            if _is_binary(raw):
                summary.binary_files.append(rel)
                if verbose:
                    console.warn(f"Skipping binary content of {rel}")
                md.add_raw_text("_Binary file, content not shown._\n\n")
                continue

            text = raw.decode("utf-8", errors="replace")
            md.add_code_block(syntax_tag(profile, rel.rsplit("/", 1)[-1]), text)
            summary.files_written += 1
            summary.bytes_written += len(raw)

    if verbose:
        console.done(
            f"Done → {out_path}. {summary.files_written} files written, "
            f"{summary.bytes_written} bytes, {len(summary.binary_files)} binary."
        )
    return summary
