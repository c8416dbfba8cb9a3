#!/usr/bin/env python3
"""
CLI for ann-downloader

Usage:
  ann-downloader download 000001                   # Annual reports, 3 most recent years
  ann-downloader download 000001 PAYH --year 2022  # Explicit year(s)
  ann-downloader download 平安银行 --all-years      # Every year
  ann-downloader download 000001 --no-skip         # Overwrite existing files
  ann-downloader download 000001 --category semiannual
  ann-downloader list 000001                       # Dry run: show what would be downloaded
  ann-downloader downloaded --code 000001          # Show downloaded files
  ann-downloader list-tools                        # Show MCP tool definitions

Download directory: --dir, else $ANN_DOWNLOADER_DIR, else ~/Dropbox/Personal/年报,
else the current directory.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from . import APP_NAME, __version__
from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .config import configure_logging, get_default_category, get_default_dir
from .container import Container
from .formatters import format_download, format_list_announcements, format_list_downloaded


async def list_tools_command() -> int:
    """Show MCP tool definitions"""
    for tool_schema in TOOL_SCHEMAS.values():
        print(f"Tool: {tool_schema['name']}")
        print()
        print("Description:")
        print(tool_schema['description'])
        print("Input Schema:")
        print(json.dumps(tool_schema['inputSchema'], indent=2, ensure_ascii=False))
        print()
        print("-" * 80)
        print()

    return 0


async def download_command(args: argparse.Namespace, base_dir: Path) -> int:
    """Download announcements"""
    container = Container(base_dir=base_dir, skip_if_exists=not args.no_skip)
    try:
        handlers = MCPHandlers(container)
        result = await handlers.download_announcements(
            symbols=args.symbols,
            years=args.year,
            recent_years=args.recent,
            all_years=args.all_years,
            match=args.match,
            exclude=args.exclude,
            category=args.category,
            no_skip=args.no_skip
        )
    finally:
        container.close()

    print(format_download(result))
    return 0 if result["success"] else 1


async def list_command(args: argparse.Namespace, base_dir: Path) -> int:
    """List announcements a download would select"""
    container = Container(base_dir=base_dir)
    try:
        handlers = MCPHandlers(container)
        result = await handlers.list_announcements(
            symbols=args.symbols,
            years=args.year,
            recent_years=args.recent,
            all_years=args.all_years,
            match=args.match,
            exclude=args.exclude,
            category=args.category
        )
    finally:
        container.close()

    print(format_list_announcements(result))
    return 0 if result["success"] else 1


async def downloaded_command(args: argparse.Namespace, base_dir: Path) -> int:
    """List downloaded announcements"""
    container = Container(base_dir=base_dir)
    try:
        result = await MCPHandlers(container).list_downloaded(code=args.code)
    finally:
        container.close()

    print(format_list_downloaded(result))
    return 0 if result["success"] else 1


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("symbols", nargs="+", help="Stock code, pinyin abbreviation or short name")
    years = parser.add_mutually_exclusive_group()
    years.add_argument("--year", action="append", help="Year to download (repeatable)")
    years.add_argument("--recent", type=int, help="Keep the N most recent years found (default: 3)")
    years.add_argument("--all-years", action="store_true", help="Keep every year")
    parser.add_argument("--match", action="append", help="Keep only titles containing this keyword (repeatable)")
    parser.add_argument(
        "--exclude",
        action="append",
        help="Drop titles containing this keyword (repeatable, default: 摘要)"
    )
    parser.add_argument(
        "--no-exclude",
        dest="exclude",
        action="store_const",
        const=[],
        help="Do not drop any titles by keyword"
    )
    parser.add_argument(
        "--category",
        default=get_default_category(),
        help="annual, semiannual, q1, q3 or a cninfo category selector (default: $ANN_DOWNLOADER_CATEGORY or annual)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Download listed-company announcements from cninfo"
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {__version__}")
    parser.add_argument("--dir", help="Download directory prefix")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("list-tools", help="Show MCP tool definitions")

    download_parser = subparsers.add_parser("download", help="Download announcements")
    _add_filter_arguments(download_parser)
    download_parser.add_argument("--no-skip", action="store_true", help="No skip if exists")

    list_parser = subparsers.add_parser("list", help="List announcements without downloading")
    _add_filter_arguments(list_parser)

    downloaded_parser = subparsers.add_parser("downloaded", help="List downloaded announcements")
    downloaded_parser.add_argument("--code", help="Optional stock code filter")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    if args.command == "list-tools":
        return asyncio.run(list_tools_command())

    base_dir = Path(args.dir) if args.dir else get_default_dir()
    if not base_dir.is_dir():
        print(f"ERROR: {base_dir} not exists")
        return 1

    if args.command == "download":
        return asyncio.run(download_command(args, base_dir))
    elif args.command == "list":
        return asyncio.run(list_command(args, base_dir))
    elif args.command == "downloaded":
        return asyncio.run(downloaded_command(args, base_dir))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
