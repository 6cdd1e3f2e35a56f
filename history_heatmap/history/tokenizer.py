# history_heatmap/history/tokenizer.py
# pulls the command out of a raw history line and splits it into tokens

from typing import Iterator, List, Optional

from .flavors import HistoryFlavor


def extract_command(line: str, flavor: HistoryFlavor) -> Optional[str]:
    """
    Apply the flavor's line regex; return the command part or None.
    A leading `sudo ` is dropped for zsh and bash.
    """
    regex, idx = flavor.regex_and_capture_idx()
    m = regex.match(line)
    if m is None:
        return None
    return m.group(idx)


def tokenize(command: str) -> List[str]:
    """Whitespace tokens, no empty strings."""
    if not command:
        return []
    return command.split()


def iter_token_lines(history: str, flavor: HistoryFlavor) -> Iterator[List[str]]:
    """Token list of every line of `history` the flavor regex accepts."""
    for line in history.split("\n"):
        cmd = extract_command(line, flavor)
        if cmd is None:
            continue
        yield tokenize(cmd)
