"""
Language profiles: which files of a project are worth putting in the document.

A profile is an INI file named ``<language>.ini``::

    [Core]
    language_name = C

    [Filters]
    allowed_extensions = c,h
    allowed_dotfiles = .clang-format
    allowed_filenames = Makefile
    ignored_extensions = o
    ignored_filenames = generated.c

    [Markdown]
    syntax_map = c:c,h:c,Makefile:makefile
"""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .errors import ProfileError, ProfileNotFoundError

DEFAULT_LANGUAGE_NAME = "Project"

# Searched in order; the profiles bundled with the package come last.
PROFILE_DIRS: Tuple[str, ...] = (
    "./config",
    "~/.config/source-map",
    "/usr/local/share/source-map/config",
)

_FILTER_KEYS = (
    "allowed_extensions",
    "allowed_dotfiles",
    "allowed_filenames",
    "ignored_extensions",
    "ignored_filenames",
)


def split_extension(basename: str) -> str:
    """Text after the last ``.``; empty for ``Makefile`` and ``.bashrc``."""
    dot = basename.rfind(".")
    return basename[dot + 1 :] if dot > 0 else ""


@dataclass(frozen=True)
class LanguageProfile:
    language_name: str = DEFAULT_LANGUAGE_NAME
    allowed_extensions: FrozenSet[str] = frozenset()
    allowed_dotfiles: FrozenSet[str] = frozenset()
    allowed_filenames: FrozenSet[str] = frozenset()
    ignored_extensions: FrozenSet[str] = frozenset()
    ignored_filenames: FrozenSet[str] = frozenset()
    syntax_map: Tuple[Tuple[str, str], ...] = field(default=())

    def __post_init__(self) -> None:
        # Accept any iterable of strings for the lookup sets.
        for key in _FILTER_KEYS:
            object.__setattr__(self, key, frozenset(getattr(self, key)))
        object.__setattr__(self, "syntax_map", tuple(tuple(p) for p in self.syntax_map))


class ProfileFilter:
    """Allow/deny decision for a file, based on a :class:`LanguageProfile`."""

    def __init__(self, profile: LanguageProfile) -> None:
        self.profile = profile

    def is_allowed(self, basename: str, extension: str) -> bool:
        """Ignore lists win over allow lists; anything unlisted is denied."""
        p = self.profile
        if basename in p.ignored_filenames:
            return False
        if extension in p.ignored_extensions:
            return False

        if basename.startswith(".") and basename in p.allowed_dotfiles:
            return True
        if basename in p.allowed_filenames:
            return True
        if extension in p.allowed_extensions:
            return True

        return False


# INI parsing
def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_syntax_map(value: str) -> Tuple[Tuple[str, str], ...]:
    pairs = []
    for item in _split_list(value):
        key, sep, tag = item.partition(":")
        if sep:
            pairs.append((key.strip(), tag.strip()))
    return tuple(pairs)


def parse_profile(text: str, source: str = "<profile>") -> LanguageProfile:
    """Build a :class:`LanguageProfile` from the text of an INI file."""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_string(text.lstrip("\ufeff"), source=source)
    except configparser.Error as e:
        raise ProfileError(f"Could not parse profile '{source}': {e}")

    filters = {
        key: _split_list(parser.get("Filters", key, fallback=""))
        for key in _FILTER_KEYS
    }
    return LanguageProfile(
        language_name=parser.get("Core", "language_name", fallback=DEFAULT_LANGUAGE_NAME),
        syntax_map=_parse_syntax_map(parser.get("Markdown", "syntax_map", fallback="")),
        **filters,
    )


def _read_bundled(language: str) -> Optional[str]:
    resource = resources.files("sourcemap") / "profiles" / f"{language}.ini"
    if not resource.is_file():
        return None
    return resource.read_text(encoding="utf-8-sig")


def load_language_profile(
    language: str,
    search_dirs: Optional[Sequence[Path]] = None,
) -> LanguageProfile:
    """Find ``<language>.ini`` in *search_dirs* (default :data:`PROFILE_DIRS`),
    falling back to the profiles shipped with the package."""
    if search_dirs is None:
        search_dirs = [Path(d) for d in PROFILE_DIRS]

    for base in search_dirs:
        ini_path = Path(base).expanduser() / f"{language}.ini"
        if not ini_path.is_file():
            continue
        try:
            text = ini_path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise ProfileError(f"Could not read profile '{ini_path}': {e}")
        return parse_profile(text, source=str(ini_path))

    text = _read_bundled(language)
    if text is None:
        raise ProfileNotFoundError(f"Could not load language profile '{language}'")
    return parse_profile(text, source=f"<bundled {language}.ini>")


def available_profiles(search_dirs: Optional[Iterable[Path]] = None) -> List[str]:
    """Names of every profile reachable from *search_dirs* and the bundle."""
    if search_dirs is None:
        search_dirs = [Path(d) for d in PROFILE_DIRS]
    names = set()
    for base in search_dirs:
        base = Path(base).expanduser()
        if base.is_dir():
            names.update(p.stem for p in base.glob("*.ini"))
    bundled = resources.files("sourcemap") / "profiles"
    if bundled.is_dir():
        names.update(
            entry.name[: -len(".ini")]
            for entry in bundled.iterdir()
            if entry.name.endswith(".ini")
        )
    return sorted(names)


def syntax_tag(profile: LanguageProfile, filename: str) -> str:
    """Fence tag for *filename*: mapped name, then mapped extension, then the
    bare extension, then ``txt``."""
    ext = split_extension(filename)

    for key, tag in profile.syntax_map:
        if key == filename:
            return tag
        if ext and key == ext:
            return tag

    return ext or "txt"
