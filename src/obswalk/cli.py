"""
CLI interface for obswalk.

Reads a UI tree description (JSON or Facelets-style markup) and lists the
components observing an event, one tree path per line.
"""

from __future__ import annotations

import argparse
import os
import sys

from .config import get_config
from .core import UNBOUNDED, group_by_event, locate_observers
from .dom import Component, TreeDepthError
from .formats import json as _json  # noqa: F401 - ensure json format is registered
from .formats import markup as _markup  # noqa: F401 - ensure markup format is registered
from .formats.base import TreeFormat, registry
from .log import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="obswalk",
        description="Find UI components whose auto-update handlers observe an event",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Tree description file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--event",
        "-e",
        type=str,
        help="Event name to look for (substring match against each handler's 'on' list)",
    )

    parser.add_argument(
        "--events",
        action="store_true",
        dest="list_events",
        help="List every declared event with its observer count instead of searching one",
    )

    parser.add_argument(
        "--type",
        type=str,
        dest="format_type",
        help="Force tree format (json, markup)",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        help="Fail if the tree is deeper than this (default from config; 0 = unbounded)",
    )

    parser.add_argument(
        "--show-handler",
        action="store_true",
        help="Append the matching handler's 'on' list to each line",
    )

    parser.add_argument(
        "--count",
        "-c",
        action="store_true",
        help="Print only the number of matches",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log traversal details to stderr",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """Read from file or stdin, return (content, filename)."""
    if filepath:
        if os.path.isdir(filepath):
            raise ValueError(f"{filepath} is a directory")
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath
    return sys.stdin.read(), None


def get_format(content: str, filename: str | None, format_type: str | None) -> TreeFormat:
    """Pick the tree format: explicit type, then extension, then detection."""
    if format_type:
        strategy = registry.get_by_name(format_type)
        if strategy is None:
            names = ", ".join(s.name for s in registry.strategies)
            raise ValueError(f"Unknown format type: {format_type} (available: {names})")
        return strategy

    match = registry.detect(content, filename)
    if match is None:
        raise ValueError("Could not detect tree format; use --type")
    logger.debug("Using %s format (confidence %.1f)", match.strategy.name, match.confidence)
    return match.strategy


def resolve_max_depth(flag: int | None) -> int:
    """CLI flag wins over config; 0 or less means unbounded."""
    if flag is None:
        configured = get_config().max_depth
        return configured if configured is not None else UNBOUNDED
    return flag if flag > 0 else UNBOUNDED


def load_tree(filepath: str | None, format_type: str | None = None) -> Component:
    """Read and parse a tree description."""
    content, filename = read_input(filepath)
    if not content.strip():
        raise ValueError("Empty input")
    return get_format(content, filename, format_type).parse(content)


def render_observers(root: Component, event: str, max_depth: int | None,
                     show_handler: bool = False, count: bool = False) -> str:
    """Format the observers of one event for output."""
    observers = locate_observers(root, event, max_depth)
    if count:
        return str(len(observers))
    lines = []
    for obs in observers:
        line = obs.path_str
        if show_handler:
            line += f"\ton={obs.handler.on}"
        lines.append(line)
    return "\n".join(lines)


def render_events(root: Component, max_depth: int | None) -> str:
    """Format the declared-event inventory: one 'event<TAB>count' per line."""
    grouped = group_by_event(root, max_depth)
    return "\n".join(f"{event}\t{len(found)}" for event, found in grouped.items())


def main(args: list[str] | None = None) -> int:
    """Main entry point. Returns exit code."""
    parsed = parse_args(args)
    cfg = get_config()

    try:
        configure_logging("DEBUG" if parsed.verbose else cfg.logging.level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.event is None and not parsed.list_events:
        print("Error: --event is required (or use --events)", file=sys.stderr)
        return 1

    try:
        root = load_tree(parsed.file, parsed.format_type)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    max_depth = resolve_max_depth(parsed.max_depth)

    try:
        if parsed.list_events:
            output = render_events(root, max_depth)
        else:
            output = render_observers(
                root,
                parsed.event,
                max_depth,
                show_handler=parsed.show_handler,
                count=parsed.count,
            )
    except TreeDepthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
