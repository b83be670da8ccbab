"""CLI for wikidown - Obsidian-flavored markdown rendering."""

import argparse
import json
import logging
import platform
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from . import __version__
from .core.utils import slugify
from .runtime import build_runtime


def _read_note(path: Path) -> str | None:
    if not path.is_file():
        print(f"Note {path} not found", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def cmd_render(args: argparse.Namespace, rt: Any) -> int:
    """Render a note with all transformations applied."""
    text = _read_note(args.file)
    if text is None:
        return 1

    tree = rt.processor.process_text(text)
    renderer = rt.markdown if args.format == "markdown" else rt.html
    sys.stdout.write(renderer.render(tree))
    return 0


def cmd_toc(args: argparse.Namespace, rt: Any) -> int:
    """Print the table of contents of a course-style note."""
    text = _read_note(args.file)
    if text is None:
        return 1

    toc: list = []
    rt.processor.process_text(text, toc=toc)

    if args.json:
        print(json.dumps([asdict(e) for e in toc], indent=2, ensure_ascii=False))
        return 0
    for entry in toc:
        if entry.group:
            print(f"{entry.group}\t{entry.title}\t{entry.href}")
        else:
            print(f"{entry.title}\t{entry.href}")
    return 0


def cmd_slug(args: argparse.Namespace, rt: Any) -> int:
    """Print the slug of a title."""
    print(slugify(args.text))
    return 0


def _version_string() -> str:
    return (
        f"wikidown {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="wikidown", description="Render Obsidian-flavored markdown"
    )
    parser.add_argument(
        "--version", action="version", version=_version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/wikidown.toml, notes/wikidown.toml)",
    )
    parser.add_argument(
        "--notes",
        type=Path,
        default=None,
        help="Folder holding linked and embedded notes (overrides config)",
    )
    parser.add_argument(
        "--base-url",
        dest="base_url",
        default=None,
        help="Prefix for every resolved link (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # render command
    parser_render = subparsers.add_parser("render", help="Render a note")
    parser_render.add_argument("file", type=Path, help="Markdown file")
    parser_render.add_argument(
        "--format",
        choices=["html", "markdown"],
        default="html",
        help="Output format (default: html)",
    )

    # toc command
    parser_toc = subparsers.add_parser("toc", help="Extract a table of contents")
    parser_toc.add_argument("file", type=Path, help="Markdown file")
    parser_toc.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # slug command
    parser_slug = subparsers.add_parser("slug", help="Print the slug of a title")
    parser_slug.add_argument("text", help="Title or heading text")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rt = build_runtime(
        config_path=args.config,
        notes_path=args.notes,
        base_url=args.base_url,
    )

    handlers = {
        "render": cmd_render,
        "toc": cmd_toc,
        "slug": cmd_slug,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
