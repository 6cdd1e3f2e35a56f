# history_heatmap/history/__init__.py
# locating, reading and tokenizing shell history

from .flavors import HistoryError, HistoryFlavor, detect_flavor, parse_flavor, resolve_flavor
from .tokenizer import extract_command, iter_token_lines, tokenize
from .loader import build_trie, load_history, parse

__all__ = [
    "HistoryError",
    "HistoryFlavor",
    "detect_flavor",
    "parse_flavor",
    "resolve_flavor",
    "extract_command",
    "iter_token_lines",
    "tokenize",
    "build_trie",
    "load_history",
    "parse",
]
