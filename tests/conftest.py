# tests/conftest.py - shared fixtures

import pytest

from history_heatmap.core.trie import CommandTrie


SAMPLE_LINES = (
    [["git", "status"]] * 5
    + [["git", "commit"]] * 3
    + [["git"]]
    + [["ls"]] * 2
)


@pytest.fixture
def sample_lines():
    return [list(t) for t in SAMPLE_LINES]


@pytest.fixture
def sample_trie(sample_lines):
    return CommandTrie.from_token_lines(sample_lines)


@pytest.fixture
def busy_trie():
    """Larger trie with plenty of count ties and deep prefixes."""
    lines = []
    lines += [["git", "status"]] * 7
    lines += [["git", "commit", "-m", "wip"]] * 4
    lines += [["git", "commit", "--amend"]] * 4
    lines += [["git", "push"]] * 2
    lines += [["docker", "ps"]] * 3
    lines += [["docker", "compose", "up", "-d"]] * 3
    lines += [["docker"]]
    lines += [["ls"]] * 4
    lines += [["ls", "-la"]] * 2
    lines += [["cd", ".."]] * 3
    lines += [["vim", "notes.md"]]
    lines += [["make"]] * 3
    lines += [["make", "test"]] * 3
    return CommandTrie.from_token_lines(lines)
