# flavors.py - supported shells, where their history lives and how lines look

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Optional, Pattern, Tuple


class HistoryError(RuntimeError):
    """Raised when history cannot be located, read or interpreted."""


class HistoryFlavor(Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"

    def __str__(self) -> str:
        return self.value

    @property
    def history_file(self) -> Optional[str]:
        """File name under $HOME, None for fish (read through `fish -c history`)."""
        return _HISTORY_FILES[self]

    def history_path(self) -> Path:
        name = self.history_file
        if name is None:
            raise HistoryError(f"{self} history is not stored in a plain file")
        try:
            home = Path.home()
        except RuntimeError:
            raise HistoryError("Unable to determine home path. Please specify history file path") from None
        return home / name

    def regex_and_capture_idx(self) -> Tuple[Pattern[str], int]:
        """Regex applied to every raw line and the group holding the command."""
        return _LINE_RES[self]


_HISTORY_FILES = {
    HistoryFlavor.BASH: ".bash_history",
    HistoryFlavor.ZSH: ".zsh_history",
    HistoryFlavor.FISH: None,
}

# zsh extended history looks like ": 1690000000:0;git status"
_LINE_RES = {
    HistoryFlavor.ZSH: (re.compile(r"^.*;(sudo )?(.*)$"), 2),
    HistoryFlavor.BASH: (re.compile(r"^(sudo )?(.*)$"), 2),
    HistoryFlavor.FISH: (re.compile(r"(.*)"), 0),
}


def detect_flavor(shell: Optional[str] = None) -> Optional[HistoryFlavor]:
    """Guess the flavor from $SHELL (or `shell`); None if nothing matches."""
    shell_path = shell if shell is not None else os.environ.get("SHELL", "")
    if not shell_path:
        return None
    for flavor in HistoryFlavor:
        if flavor.value in shell_path:
            return flavor
    return None


def resolve_flavor(zsh: bool = False, bash: bool = False, fish: bool = False,
                   shell: Optional[str] = None) -> HistoryFlavor:
    """
    Pick the flavor from explicit flags, falling back to detection.
    More than one flag, or nothing detectable, is an error.
    """
    chosen = [f for f, on in ((HistoryFlavor.ZSH, zsh), (HistoryFlavor.BASH, bash), (HistoryFlavor.FISH, fish)) if on]
    if len(chosen) > 1:
        raise HistoryError("Multiple shell modes selected, please select one or none")
    if chosen:
        return chosen[0]
    detected = detect_flavor(shell)
    if detected is None:
        raise HistoryError("Unable to detect shell, please manually select a shell flavor")
    return detected


def parse_flavor(name: str) -> HistoryFlavor:
    try:
        return HistoryFlavor(name.strip().lower())
    except ValueError:
        names = ", ".join(f.value for f in HistoryFlavor)
        raise HistoryError(f"Unknown shell flavor {name!r} (choose from {names})") from None
