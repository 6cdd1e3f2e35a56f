# loader.py
# Reads shell history (file or `fish -c history`) and builds the command trie.

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from history_heatmap.core.trie import CommandTrie
from history_heatmap.utils.logger_utils import Log

from .flavors import HistoryError, HistoryFlavor
from .tokenizer import iter_token_lines

logger = logging.getLogger(__name__)

FISH_TIMEOUT_S = 30

PathLike = Union[str, Path]


def _read_file(path: Path) -> str:
    # zsh metafies non-ascii bytes, so decoding must not fail
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        raise HistoryError(f"History file not found: {path}") from None
    except IsADirectoryError:
        raise HistoryError(f"History path is a directory: {path}") from None
    except OSError as e:
        raise HistoryError(f"Unable to read history file {path}: {e.strerror or e}") from e


def _run_fish() -> str:
    try:
        proc = subprocess.run(
            ["fish", "-c", "history"],
            capture_output=True,
            timeout=FISH_TIMEOUT_S,
            check=False,
        )
    except FileNotFoundError:
        raise HistoryError("fish executable not found on PATH") from None
    except subprocess.TimeoutExpired:
        raise HistoryError(f"`fish -c history` did not finish within {FISH_TIMEOUT_S}s") from None
    if proc.returncode != 0:
        err = proc.stderr.decode("utf-8", errors="replace").strip()
        raise HistoryError(f"`fish -c history` failed with exit status {proc.returncode}: {err}")
    return proc.stdout.decode("utf-8", errors="replace")


def load_history(flavor: HistoryFlavor, path: Optional[PathLike] = None) -> str:
    """
    Return the raw history text for `flavor`.
    An explicit `path` is always read as a file, even for fish.
    """
    if path is not None:
        p = Path(path).expanduser()
        logger.debug("reading %s history from %s", flavor, p)
        return _read_file(p)
    if flavor is HistoryFlavor.FISH:
        logger.debug("reading fish history via `fish -c history`")
        return _run_fish()
    p = flavor.history_path()
    logger.debug("reading %s history from %s", flavor, p)
    return _read_file(p)


def build_trie(history: str, flavor: HistoryFlavor) -> CommandTrie:
    """Tokenize every usable line of `history` into a fresh trie."""
    trie = CommandTrie()
    n = trie.insert_many(iter_token_lines(history, flavor))
    if logger.isEnabledFor(logging.DEBUG):
        # counting prefixes walks the whole trie
        logger.debug("ingested %d history lines into %d prefixes", n, len(trie))
    return trie


def parse(path: Optional[PathLike], flavor: HistoryFlavor) -> CommandTrie:
    """Load and ingest history in one go."""
    with Log.time_block("history parse"):
        return build_trie(load_history(flavor, path), flavor)
