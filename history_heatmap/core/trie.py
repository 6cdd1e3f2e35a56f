# trie.py
# Frequency trie keyed by command token (one node per command prefix).
# Each node counts lines passing through it and lines ending on it,
# which is all the ranking policies need.

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

Token = str
TokenLine = Sequence[Token]


class TrieNode:
    """
    A single node in the CommandTrie (one command prefix).
    children: token -> TrieNode
    count_inclusive: lines whose tokens pass through this prefix (ending here or below)
    count_exact: lines whose tokens end exactly at this prefix
    """

    __slots__ = ("children", "count_inclusive", "count_exact")

    def __init__(self) -> None:
        self.children: Dict[Token, TrieNode] = {}
        self.count_inclusive = 0
        self.count_exact = 0

    def chomp(self, tokens: TokenLine) -> None:
        """
        Count one history line starting at this node.
        Walks iteratively so very long lines stay off the call stack.
        """
        node = self
        for tok in tokens:
            node.count_inclusive += 1
            child = node.children.get(tok)
            if child is None:
                child = node.children[tok] = TrieNode()
            node = child
        node.count_inclusive += 1
        node.count_exact += 1

    def sorted_children(self) -> List[Tuple[Token, "TrieNode"]]:
        """(token, child) pairs in ascending token order."""
        return sorted(self.children.items())

    def walk(self, prefix: Tuple[Token, ...] = ()) -> Iterator[Tuple[Tuple[Token, ...], "TrieNode"]]:
        """DFS over (tokens, node) pairs, this node first, children in sorted order."""
        stack = [(prefix, self)]
        while stack:
            toks, node = stack.pop()
            yield toks, node
            # reversed so the smallest token is popped first
            for tok, child in reversed(node.sorted_children()):
                stack.append((toks + (tok,), child))

    def count_nodes(self) -> int:
        """Nodes in this subtree, this one included."""
        n = 0
        stack = [self]
        while stack:
            node = stack.pop()
            n += 1
            stack.extend(node.children.values())
        return n

    def __repr__(self) -> str:
        return (
            f"TrieNode(inclusive={self.count_inclusive}, "
            f"exact={self.count_exact}, children={len(self.children)})"
        )


class CommandTrie:
    """
    Trie of tokenized history lines, used by the ranker for:
     - exact command counts
     - inclusive (heat) counts per prefix
     - the filtered fuzzy view
    Built once from a history file and thrown away after the report.
    """

    def __init__(self) -> None:
        self._root = TrieNode()

    @classmethod
    def from_token_lines(cls, lines: Iterable[TokenLine]) -> "CommandTrie":
        trie = cls()
        trie.insert_many(lines)
        return trie

    @property
    def root(self) -> TrieNode:
        return self._root

    @property
    def total(self) -> int:
        """Number of lines ingested."""
        return self._root.count_inclusive

    # insertion -----------------------------------------------------
    def insert(self, tokens: TokenLine) -> None:
        """
        Insert one tokenized line.
        An empty line is an exact hit on the root.
        """
        self._root.chomp(tokens)

    def insert_many(self, lines: Iterable[TokenLine]) -> int:
        n = 0
        for tokens in lines:
            self._root.chomp(tokens)
            n += 1
        return n

    # lookup ---------------------------------------------------------
    def find(self, tokens: TokenLine) -> Optional[TrieNode]:
        """Node for a token prefix, or None if it was never seen."""
        node = self._root
        for tok in tokens:
            node = node.children.get(tok)
            if node is None:
                return None
        return node

    def __contains__(self, tokens: TokenLine) -> bool:
        node = self.find(tokens)
        return node is not None and node.count_exact > 0

    def __len__(self) -> int:
        """
        Count distinct prefixes (non-root nodes).
        (O(N) walk. For inspection and tests.)
        """
        return self._root.count_nodes() - 1
