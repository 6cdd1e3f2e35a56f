"""
History Heatmap

Reads a shell history file, counts every command and command prefix in a
token trie and reports the most used ones as a heat map.

Views:
    fuzzy  prefixes by total use, hiding ones that never run on their own
    exact  full commands by how often they were typed
    heat   prefixes by total use (command components)

Example Usage:
    from history_heatmap import CommandTrie, top_k, to_display_lines

    trie = CommandTrie.from_token_lines([["git", "status"], ["ls"]])
    for line in to_display_lines(top_k(trie, 5, "heat")):
        print(f"{line.pct:.2f} {line.count} {line.full_text}")
"""

# history_heatmap/__init__.py
from .core import (  # re-export
    CommandTrie,
    DisplayLine,
    RankedEntry,
    TrieNode,
    get_policy,
    pct_to_bar,
    to_display_lines,
    top_exclusive,
    top_inclusive,
    top_inclusive_filt,
    top_k,
)
from .history import HistoryError, HistoryFlavor, build_trie, parse

__version__ = "0.1.0"
__all__ = [
    "CommandTrie",
    "TrieNode",
    "RankedEntry",
    "DisplayLine",
    "get_policy",
    "top_k",
    "top_exclusive",
    "top_inclusive",
    "top_inclusive_filt",
    "to_display_lines",
    "pct_to_bar",
    "HistoryError",
    "HistoryFlavor",
    "build_trie",
    "parse",
]
