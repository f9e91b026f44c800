from __future__ import annotations

"""CLI utility to format a chat message into HTML."""

import argparse
import sys

from src.app.dependencies import build_formatter
from src.app.logging_config import configure_logging
from src.users.directory import InMemoryUserDirectory, StaticMentionKeys
from src.users.types import UserProfile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Format a chat message into an HTML fragment.")
    parser.add_argument("path", nargs="?", help="File to read; stdin when omitted.")
    parser.add_argument("--search-term", default=None, help="Word to highlight.")
    parser.add_argument(
        "--user",
        action="append",
        default=[],
        help="Known username for @mention linking. Repeatable.",
    )
    parser.add_argument(
        "--mention-key",
        action="append",
        default=[],
        help="Viewer mention key to highlight. Repeatable.",
    )
    parser.add_argument("--singleline", action="store_true", help="Collapse newlines to spaces.")
    parser.add_argument("--no-markdown", action="store_true", help="Escape HTML instead of rendering markdown.")
    parser.add_argument(
        "--no-mention-highlight",
        action="store_true",
        help="Skip highlighting the viewer's mention keys.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Read a message, format it and print the HTML."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.path:
        with open(args.path, encoding="utf-8") as handle:
            text = handle.read()
    else:
        text = sys.stdin.read()

    directory = InMemoryUserDirectory.from_profiles(UserProfile(username=name) for name in args.user)
    formatter = build_formatter(directory, StaticMentionKeys(keys=args.mention_key))
    output = formatter.format_text(
        text,
        {
            "search_term": args.search_term,
            "mention_highlight": not args.no_mention_highlight,
            "singleline": args.singleline,
            "markdown": not args.no_markdown,
        },
    )
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
