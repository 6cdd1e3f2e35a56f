"""
history_heatmap.core

The counting and ranking engine behind the report.
Contains:
 - the command frequency trie (CommandTrie, TrieNode)
 - bounded top-k extraction under the exact / heat / fuzzy policies
 - conversion of ranked entries into display lines and heat bars
"""

from .trie import CommandTrie, TrieNode
from .ranker import (
    EXACT,
    FUZZY,
    HEAT,
    POLICIES,
    BoundedTopK,
    RankedEntry,
    RankingPolicy,
    extract,
    get_policy,
    top_exclusive,
    top_inclusive,
    top_inclusive_filt,
    top_k,
)
from .display import DisplayLine, pct_to_bar, to_display_lines

__all__ = [
    "CommandTrie",
    "TrieNode",
    "RankedEntry",
    "RankingPolicy",
    "BoundedTopK",
    "EXACT",
    "HEAT",
    "FUZZY",
    "POLICIES",
    "extract",
    "get_policy",
    "top_exclusive",
    "top_inclusive",
    "top_inclusive_filt",
    "top_k",
    "DisplayLine",
    "to_display_lines",
    "pct_to_bar",
]
