"""
CLI entrypoint for source-map.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__, console
from .core import SourceMapError, generate_document
from .profile import PROFILE_DIRS, available_profiles, load_language_profile


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="source-map",
        description="Export a project's directory tree and source files as one Markdown document.",
    )
    p.add_argument("language", nargs="?", help="Language profile to use (e.g. c, python)")
    p.add_argument(
        "target_dir",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root dir (default: .)",
    )
    p.add_argument(
        "output_file",
        nargs="?",
        type=Path,
        default=Path("output.md"),
        help="Output file (default: output.md)",
    )
    p.add_argument(
        "--config-dir",
        type=Path,
        action="append",
        default=[],
        help="Extra directory to search for <language>.ini (may be repeated)",
    )
    p.add_argument("--list-profiles", action="store_true", help="List available profiles and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ns = p.parse_args(argv)
    if ns.language is None and not ns.list_profiles:
        p.error("the following arguments are required: language")
    return ns


def main(argv: Optional[List[str]] = None) -> None:
    try:
        ns = _parse_args(argv)
        search_dirs = list(ns.config_dir) + [Path(d) for d in PROFILE_DIRS]

        if ns.list_profiles:
            for name in available_profiles(search_dirs):
                print(name)
            return

        try:
            profile = load_language_profile(ns.language, search_dirs)
            if ns.verbose:
                console.info(f"Loaded profile '{ns.language}' ({profile.language_name})")
            generate_document(
                profile,
                root=ns.target_dir,
                out_path=ns.output_file,
                verbose=ns.verbose,
            )
        except SourceMapError as e:
            console.error(str(e))
            sys.exit(1)

        print(f"Export complete: {ns.output_file}")

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
