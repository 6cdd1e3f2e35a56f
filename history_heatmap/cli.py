"""
cli.py - command line front end for the history heat map
Features:
- Reads zsh, bash or fish history (auto-detected from $SHELL)
- Three views: fuzzy (default), exact commands, heat map of command components
- Optional scoping to a command prefix (e.g. only `git ...`)
- Uses Rich for the table and error output
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from history_heatmap.core.display import DisplayLine, pct_to_bar, to_display_lines
from history_heatmap.core.ranker import RankedEntry, RankingPolicy, get_policy, top_k
from history_heatmap.core.trie import CommandTrie
from history_heatmap.history import HistoryError, HistoryFlavor, parse, parse_flavor, resolve_flavor
from history_heatmap.utils.config_manager import Config, ConfigError
from history_heatmap.utils.logger_utils import Log

logger = logging.getLogger(__name__)

# report goes to stdout, problems to stderr
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="history-heatmap",
        description="Show the commands you run most, as a heat map of your shell history.",
    )
    display = p.add_mutually_exclusive_group()
    display.add_argument("-z", "--display-fuzzy", dest="mode", action="store_const", const="fuzzy",
                         help="Show fuzzy matched output. This is the default option.")
    display.add_argument("-e", "--display-exact", dest="mode", action="store_const", const="exact",
                         help="Show the most common exact commands")
    display.add_argument("-t", "--display-heat", dest="mode", action="store_const", const="heat",
                         help="Show the most common command components")

    shell = p.add_argument_group("shell flavor")
    shell.add_argument("--flavor-zsh", dest="zsh", action="store_true",
                       help="Manually select ZSH history, overriding auto-detect")
    shell.add_argument("--flavor-bash", dest="bash", action="store_true",
                       help="Manually select Bash history, overriding auto-detect")
    shell.add_argument("--flavor-fish", dest="fish", action="store_true",
                       help="Manually select Fish history, overriding auto-detect")

    p.add_argument("-f", dest="file", default=None,
                   help="File to parse. Defaults to history file of selected or detected shell flavor")
    p.add_argument("-n", dest="count", type=_non_negative, default=None,
                   help="How many items to show (default 10)")
    p.add_argument("-w", "--width", dest="width", type=_non_negative, default=None,
                   help="Width of the heat bars in characters (default 8)")
    p.add_argument("--prefix", default=None,
                   help="Only rank commands starting with these words, e.g. --prefix 'git'")
    p.add_argument("--config", default=None, help="Path to a JSON config file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    p.add_argument("--log-file", default=None, help="Also append log records to this file")
    return p


def _non_negative(val: str) -> int:
    try:
        n = int(val)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {val!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _choose_flavor(args: argparse.Namespace, cfg: Config) -> HistoryFlavor:
    """Explicit flags first (at most one), then the config file, then $SHELL."""
    if args.zsh or args.bash or args.fish:
        return resolve_flavor(zsh=args.zsh, bash=args.bash, fish=args.fish)
    if cfg["flavor"]:
        return parse_flavor(cfg["flavor"])
    return resolve_flavor()


def rank(trie: CommandTrie, count: int, policy: RankingPolicy, prefix: Optional[str] = None) -> List[RankedEntry]:
    """Top `count` entries for the whole trie, or only below `prefix`."""
    if not prefix:
        return top_k(trie, count, policy)
    toks = prefix.split()
    node = trie.find(toks)
    if node is None:
        logger.info("prefix %r never appears in history", prefix)
        return []
    return top_k(node, count, policy, prefix=" ".join(toks))


def render(lines: Sequence[DisplayLine], title: str, width: int, out: Console = console) -> None:
    out.print("")
    out.print(f"  {title} Commands ")
    out.print("")
    if not lines:
        out.print("(no commands found)")
        out.print("")
        return

    table = Table(box=box.MARKDOWN, show_edge=True, pad_edge=True)
    table.add_column("HEAT", no_wrap=True, style="red")
    table.add_column("COUNT", justify="right", no_wrap=True)
    table.add_column("COMMAND", overflow="fold")
    for line in lines:
        table.add_row(pct_to_bar(line.pct, width), str(line.count), Text(line.full_text))
    out.print(table)
    out.print("")


def run(args: argparse.Namespace) -> int:
    cfg = Config(args.config)
    try:
        policy = get_policy(args.mode or cfg["mode"])
    except ValueError as e:
        raise ConfigError(str(e)) from None
    count = args.count if args.count is not None else cfg["count"]
    width = args.width if args.width is not None else cfg["bar_width"]
    flavor = _choose_flavor(args, cfg)
    path = args.file or cfg["history_file"]

    logger.debug("mode=%s flavor=%s count=%d file=%s", policy.name, flavor, count, path or "<default>")
    trie = parse(path, flavor)

    with Log.time_block(f"{policy.name} ranking"):
        entries = rank(trie, count, policy, args.prefix)
    render(to_display_lines(entries), policy.title, width)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    Log.setup(verbose=args.verbose, path=args.log_file)
    try:
        return run(args)
    except (HistoryError, ConfigError) as e:
        err_console.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
