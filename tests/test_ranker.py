# tests/test_ranker.py
# top-k extraction under the exact / heat / fuzzy policies

import pytest

from history_heatmap.core.ranker import (
    EXACT,
    FUZZY,
    HEAT,
    BoundedTopK,
    RankedEntry,
    get_policy,
    top_exclusive,
    top_inclusive,
    top_inclusive_filt,
    top_k,
)
from history_heatmap.core.trie import CommandTrie, TrieNode


def pairs(entries):
    return [(e.full_text, e.count) for e in entries]


def brute_force(trie, limit, policy):
    """Every qualifying prefix, sorted by count desc then text asc."""
    out = []
    for toks, node in trie.root.walk():
        if not toks or not policy.qualifies(node):
            continue
        out.append((" ".join(toks), policy.count_of(node)))
    out.sort(key=lambda kv: (-kv[1], kv[0]))
    return out[:limit]


def _node(exact, inclusive):
    n = TrieNode()
    n.count_exact = exact
    n.count_inclusive = inclusive
    return n


# worked example ----------------------------------------------------------
def test_exact_top_two(sample_trie):
    assert pairs(top_k(sample_trie, 2, EXACT)) == [("git status", 5), ("git commit", 3)]


def test_heat_top_one(sample_trie):
    assert pairs(top_k(sample_trie, 1, HEAT)) == [("git", 9)]


def test_fuzzy_top_two(sample_trie):
    assert pairs(top_k(sample_trie, 2, FUZZY)) == [("git", 9), ("git status", 5)]


def test_fuzzy_everything(sample_trie):
    assert pairs(top_k(sample_trie, 10, "fuzzy")) == [
        ("git", 9),
        ("git status", 5),
        ("git commit", 3),
        ("ls", 2),
    ]


def test_named_wrappers_match_policies(sample_trie):
    root = sample_trie.root
    assert top_exclusive(root, 3) == top_k(sample_trie, 3, EXACT)
    assert top_inclusive(root, 3) == top_k(sample_trie, 3, HEAT)
    assert top_inclusive_filt(root, 3) == top_k(sample_trie, 3, FUZZY)


# fuzzy threshold -------------------------------------------------------------
def test_fuzzy_threshold_boundary():
    assert FUZZY.qualifies(_node(3, 30))
    assert not FUZZY.qualifies(_node(2, 30))


def test_fuzzy_skips_nodes_never_run_bare():
    # must not divide by count_inclusive here
    assert not FUZZY.qualifies(_node(0, 0))
    assert not FUZZY.qualifies(_node(0, 12))


def test_fuzzy_hides_command_always_used_with_subcommand():
    trie = CommandTrie.from_token_lines([["git", "status"]] * 10 + [["git", "log"]] * 2)
    assert pairs(top_k(trie, 5, FUZZY)) == [("git status", 10), ("git log", 2)]
    # heat still shows it
    assert pairs(top_k(trie, 1, HEAT)) == [("git", 12)]


def test_fuzzy_rare_bare_use_is_filtered():
    # 1 bare run out of 11 -> 10 // 11 == 0
    trie = CommandTrie.from_token_lines([["npm", "test"]] * 10 + [["npm"]])
    assert "npm" not in [t for t, _ in pairs(top_k(trie, 5, FUZZY))]


# ordering and bounds ----------------------------------------------------------
@pytest.mark.parametrize("policy", [EXACT, HEAT, FUZZY])
@pytest.mark.parametrize("limit", [1, 3, 5, 8, 50])
def test_matches_brute_force(busy_trie, policy, limit):
    assert pairs(top_k(busy_trie, limit, policy)) == brute_force(busy_trie, limit, policy)


@pytest.mark.parametrize("policy", [EXACT, HEAT, FUZZY])
def test_sorted_and_bounded(busy_trie, policy):
    out = top_k(busy_trie, 6, policy)
    assert len(out) <= 6
    counts = [e.count for e in out]
    assert counts == sorted(counts, reverse=True)


def test_never_more_than_distinct_prefixes(sample_trie):
    assert len(top_k(sample_trie, 100, EXACT)) == len(sample_trie)
    assert len(top_k(sample_trie, 100, HEAT)) == len(sample_trie)


def test_extraction_is_idempotent(busy_trie):
    for policy in (EXACT, HEAT, FUZZY):
        assert top_k(busy_trie, 5, policy) == top_k(busy_trie, 5, policy)


def test_ties_break_on_command_text():
    trie = CommandTrie.from_token_lines([["b"], ["c"], ["a"]])
    assert pairs(top_k(trie, 2, HEAT)) == [("a", 1), ("b", 1)]


def test_zero_limit_and_empty_trie(sample_trie):
    assert top_k(sample_trie, 0, HEAT) == []
    assert top_k(CommandTrie(), 5, EXACT) == []


def test_root_is_never_reported():
    trie = CommandTrie.from_token_lines([[], [], ["ls"]])
    assert pairs(top_k(trie, 5, EXACT)) == [("ls", 1)]


def test_subtree_with_prefix(sample_trie):
    git = sample_trie.find(["git"])
    assert pairs(top_k(git, 5, EXACT, prefix="git")) == [("git status", 5), ("git commit", 3)]


def test_bad_arguments(sample_trie):
    with pytest.raises(ValueError):
        top_k(sample_trie, -1, HEAT)
    with pytest.raises(ValueError):
        top_k(sample_trie, 3, "popular")


# helpers ---------------------------------------------------------------------
def test_get_policy_names():
    assert get_policy("EXACT") is EXACT
    assert get_policy("heatmap") is HEAT
    assert get_policy(" filtered ") is FUZZY


def test_ranked_entry_compares_by_rank():
    assert RankedEntry(2, "ls") < RankedEntry(5, "git")
    assert RankedEntry(3, "zip") < RankedEntry(3, "cat")
    assert RankedEntry(3, "cat") == RankedEntry(3, "cat")


def test_bounded_top_k_evicts_lowest():
    buf = BoundedTopK(2)
    buf.extend([RankedEntry(1, "a"), RankedEntry(7, "b"), RankedEntry(4, "c"), RankedEntry(4, "a")])
    assert len(buf) == 2
    assert pairs(buf.ranked()) == [("b", 7), ("a", 4)]


def test_bounded_top_k_zero_capacity():
    buf = BoundedTopK(0)
    buf.push(RankedEntry(10, "x"))
    assert buf.ranked() == []


# deep lines ------------------------------------------------------------------
@pytest.fixture
def deep_trie():
    return CommandTrie.from_token_lines([["x"] * 5000, ["ls"]])


def test_fuzzy_on_very_long_line(deep_trie):
    out = top_k(deep_trie, 3, FUZZY)
    # only the full line and `ls` were ever run bare
    assert pairs(out) == [("ls", 1), (" ".join(["x"] * 5000), 1)]


def test_heat_and_exact_on_very_long_line(deep_trie):
    assert pairs(top_k(deep_trie, 3, HEAT)) == [("ls", 1), ("x", 1), ("x x", 1)]
    out = top_k(deep_trie, 2, EXACT)
    assert [e.count for e in out] == [1, 1]
    assert out[0].full_text == "ls"
