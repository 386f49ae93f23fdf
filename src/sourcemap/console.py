"""
Coloured console messages for source-map.
"""

from __future__ import annotations

import sys

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()

PREFIX = "[source-map]"


def _emit(msg: str, colour: str, stream) -> None:
    print(f"{colour}{msg}{Style.RESET_ALL}", file=stream)


def info(msg: str) -> None:
    print(f"{PREFIX} {msg}")


def warn(msg: str) -> None:
    _emit(f"{PREFIX} ! {msg}", Fore.YELLOW, sys.stderr)


def done(msg: str) -> None:
    _emit(f"{PREFIX} {msg}", Fore.GREEN, sys.stdout)


def error(msg: str) -> None:
    _emit(f"Error: {msg}", Fore.RED, sys.stderr)
