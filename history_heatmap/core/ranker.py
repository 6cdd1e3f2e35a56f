# history_heatmap/core/ranker.py
"""
Ranker - bounded top-k extraction over the command trie

Design goals:
 - One traversal shared by every ranking policy.
 - Policies are plain configuration: which count ranks a node, and whether the
   node may be reported at all.
 - Bounded memory per level: each subtree hands back at most `limit` entries.
 - Deterministic ordering: count descending, then command text ascending.

Policies:
 - exact  (top_exclusive):      every prefix, ranked by count_exact
 - heat   (top_inclusive):      every prefix, ranked by count_inclusive
 - fuzzy  (top_inclusive_filt): prefixes run bare in at least 10% of their
   traffic, ranked by count_inclusive. Drops things like `git` that are
   (nearly) always followed by a subcommand.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Callable, Dict, Iterable, List, Union
import heapq
import logging

from .trie import CommandTrie, TrieNode

logger = logging.getLogger(__name__)

# share of a node's traffic (in tenths) that must end on it for the fuzzy view
FUZZY_MIN_TENTHS = 1


@total_ordering
@dataclass(frozen=True)
class RankedEntry:
    """
    A partial or full command with the count assigned by a ranking policy.

    Comparisons express rank: `a < b` means `a` ranks below `b`, i.e. it has
    a smaller count, or the same count and a lexicographically later text.
    """
    count: int
    full_text: str

    def __lt__(self, other: "RankedEntry") -> bool:
        if not isinstance(other, RankedEntry):
            return NotImplemented
        if self.count != other.count:
            return self.count < other.count
        return self.full_text > other.full_text


@dataclass(frozen=True)
class RankingPolicy:
    name: str
    title: str
    count_of: Callable[[TrieNode], int]
    qualifies: Callable[[TrieNode], bool]


def _always(node: TrieNode) -> bool:
    return True


def _runs_bare_often(node: TrieNode) -> bool:
    # count_exact != 0 implies count_inclusive > 0, so the division is safe
    return node.count_exact != 0 and (node.count_exact * 10) // node.count_inclusive >= FUZZY_MIN_TENTHS


EXACT = RankingPolicy("exact", "Exact", lambda n: n.count_exact, _always)
HEAT = RankingPolicy("heat", "Heatmap", lambda n: n.count_inclusive, _always)
FUZZY = RankingPolicy("fuzzy", "Fuzzy", lambda n: n.count_inclusive, _runs_bare_often)

POLICIES: Dict[str, RankingPolicy] = {p.name: p for p in (EXACT, HEAT, FUZZY)}
_ALIASES = {"heatmap": "heat", "filtered": "fuzzy", "exclusive": "exact", "inclusive": "heat"}


def get_policy(name: str) -> RankingPolicy:
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return POLICIES[key]
    except KeyError:
        raise ValueError(f"unknown ranking policy {name!r} (choose from {', '.join(POLICIES)})") from None


class BoundedTopK:
    """
    Keeps the `limit` best entries seen so far.
    Min-heap on rank: the head is always the entry to evict next.
    """

    __slots__ = ("limit", "_heap")

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self._heap: List[RankedEntry] = []

    def push(self, entry: RankedEntry) -> None:
        if self.limit <= 0:
            return
        if len(self._heap) < self.limit:
            heapq.heappush(self._heap, entry)
        elif self._heap[0] < entry:
            heapq.heapreplace(self._heap, entry)

    def extend(self, entries: Iterable[RankedEntry]) -> None:
        for e in entries:
            self.push(e)

    def ranked(self) -> List[RankedEntry]:
        """Entries best-first."""
        return sorted(self._heap, reverse=True)

    def __len__(self) -> int:
        return len(self._heap)


# ---------------------------------
# Traversal
# ---------------------------------
class _Frame:
    """One pending subtree of `extract`: its node, text so far and best entries."""

    __slots__ = ("node", "prefix", "topn", "pending")

    def __init__(self, node: TrieNode, prefix: str, limit: int) -> None:
        self.node = node
        self.prefix = prefix
        self.topn = BoundedTopK(limit)
        # reversed so pop() hands children out in ascending token order
        self.pending = node.sorted_children()[::-1]


def extract(node: TrieNode, limit: int, policy: RankingPolicy, prefix: str = "") -> List[RankedEntry]:
    """
    Best `limit` entries below `node` under `policy`, best-first.
    `node` itself is never a candidate; only its descendants are.

    Post-order walk on an explicit stack (lines can be thousands of tokens
    deep). Each subtree is cut down to `limit` entries before it is merged
    into its parent, followed by the child's own candidate.
    """
    if limit <= 0:
        return []
    top = _Frame(node, prefix, limit)
    stack = [top]
    while stack:
        frame = stack[-1]
        if frame.pending:
            tok, child = frame.pending.pop()
            stack.append(_Frame(child, f"{frame.prefix}{tok} ", limit))
            continue
        stack.pop()
        if not stack:
            break
        parent = stack[-1]
        parent.topn.extend(frame.topn.ranked())
        if policy.qualifies(frame.node):
            parent.topn.push(RankedEntry(policy.count_of(frame.node), frame.prefix.rstrip()))
    return top.topn.ranked()


def top_exclusive(node: TrieNode, limit: int, prefix: str = "") -> List[RankedEntry]:
    """Commands typed exactly, most frequent first. Powers display-exact."""
    return extract(node, limit, EXACT, prefix)


def top_inclusive(node: TrieNode, limit: int, prefix: str = "") -> List[RankedEntry]:
    """Prefixes by total traffic through them. Powers display-heat."""
    return extract(node, limit, HEAT, prefix)


def top_inclusive_filt(node: TrieNode, limit: int, prefix: str = "") -> List[RankedEntry]:
    """
    Prefixes by total traffic, skipping prefixes that are almost never run
    on their own (`git` without a subcommand). Powers display-fuzzy.
    """
    return extract(node, limit, FUZZY, prefix)


def top_k(source: Union[CommandTrie, TrieNode],
          limit: int,
          policy: Union[RankingPolicy, str] = FUZZY,
          prefix: str = "") -> List[RankedEntry]:
    """
    Public entrypoint: accepts a trie or a subtree node and a policy object or name.
    `prefix` is the text of the path leading to `source` when it is a subtree.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if isinstance(policy, str):
        policy = get_policy(policy)
    node = source.root if isinstance(source, CommandTrie) else source
    if prefix and not prefix.endswith(" "):
        prefix += " "
    out = extract(node, limit, policy, prefix)
    logger.debug("top_k(%s, limit=%d) -> %d entries", policy.name, limit, len(out))
    return out
