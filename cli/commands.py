"""
CLI subcommand implementations for the favourites store.

Subcommands::

    stol-favorites [--base-dir DIR] add    ID
    stol-favorites [--base-dir DIR] remove ID
    stol-favorites [--base-dir DIR] toggle ID [--json]
    stol-favorites [--base-dir DIR] check  ID [--json]
    stol-favorites [--base-dir DIR] list      [--json]
    stol-favorites [--base-dir DIR] count
    stol-favorites [--base-dir DIR] size      [--json]
    stol-favorites [--base-dir DIR] clear     [--yes]

Everything stays on this machine; no command performs network I/O.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from contracts.v1 import (
    FavouriteStatusResponse,
    StorageReportResponse,
    ToggleResponse,
    entries_to_list_response,
)
from core.domain import FavoritesStorageError, StorageUnavailable, is_valid_taxon_id
from stol_platform.runtime.config import BASE_DIR_ENV_VAR, resolve_base_dir
from stol_platform.services import FavoritesServiceImpl, open_favorites_service_async


async def _open_service(args) -> FavoritesServiceImpl:
    base_dir = resolve_base_dir(getattr(args, "base_dir", None))
    try:
        return await open_favorites_service_async(base_dir)
    except StorageUnavailable as e:
        print(f"Error: {e}")
        sys.exit(1)


def _parse_taxon_id(raw: str) -> int:
    """argparse type: a signed 64-bit integer."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid taxon ID: {raw!r}")
    if not is_valid_taxon_id(value):
        raise argparse.ArgumentTypeError(f"taxon ID out of 64-bit range: {raw}")
    return value


# ---------------------------------------------------------------------------
# Subcommands: add / remove / toggle / check
# ---------------------------------------------------------------------------

async def cmd_add(args):
    """Add a taxon to favourites."""
    service = await _open_service(args)
    try:
        await service.add_favourite(args.id)
        print(f"✓ Taxon {args.id} is a favourite.")
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()


async def cmd_remove(args):
    """Remove a taxon from favourites."""
    service = await _open_service(args)
    try:
        await service.remove_favourite(args.id)
        print(f"✓ Taxon {args.id} is not a favourite.")
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()


async def cmd_toggle(args):
    """Toggle favourite status and report the new state."""
    service = await _open_service(args)
    try:
        state = await service.toggle_favourite(args.id)
        if args.json:
            print(ToggleResponse(taxon_id=args.id, is_favourite=state).model_dump_json(indent=2))
        elif state:
            print(f"★ Taxon {args.id} added to favourites.")
        else:
            print(f"☆ Taxon {args.id} removed from favourites.")
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()


async def cmd_check(args):
    """Report whether a taxon is favourited."""
    service = await _open_service(args)
    try:
        state = await service.is_favourite(args.id)
        if args.json:
            print(FavouriteStatusResponse(taxon_id=args.id, is_favourite=state).model_dump_json(indent=2))
        else:
            print(f"Taxon {args.id}: {'favourite' if state else 'not a favourite'}")
    finally:
        await service.close()


# ---------------------------------------------------------------------------
# Subcommands: list / count / size / clear
# ---------------------------------------------------------------------------

async def cmd_list(args):
    """List favourites, most recently added first."""
    service = await _open_service(args)
    try:
        entries = await service.all_favourites()
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()

    if args.json:
        print(entries_to_list_response(entries).model_dump_json(indent=2))
        return

    if not entries:
        print("No favourites.")
        return
    print(f"\n{'Taxon ID':>20}  {'Added (UTC)'}")
    print("-" * 45)
    for entry in entries:
        added = entry.created_at.strftime("%Y-%m-%d %H:%M:%S")
        print(f"{entry.taxon_id:>20}  {added}")


async def cmd_count(args):
    """Print the number of favourites."""
    service = await _open_service(args)
    try:
        print(await service.favourites_count())
    finally:
        await service.close()


async def cmd_size(args):
    """Print favourites count and approximate database size."""
    service = await _open_service(args)
    try:
        count = await service.favourites_count()
        size = await service.storage_bytes()
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()

    if args.json:
        print(StorageReportResponse(count=count, storage_bytes=size).model_dump_json(indent=2))
    else:
        print(f"Favourites: {count}")
        print(f"Storage:    {size} bytes")


async def cmd_clear(args):
    """Delete every favourite after confirmation."""
    if not args.yes:
        try:
            confirm = input("Delete all favourites? This cannot be undone. (y/N): ")
        except (EOFError, KeyboardInterrupt):
            return
        if confirm.strip().lower() not in ('y', 'yes'):
            print("Cancelled.")
            return

    service = await _open_service(args)
    try:
        await service.clear_all_favourites()
        print("✓ All favourites deleted.")
    except FavoritesStorageError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await service.close()


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

COMMANDS = {
    "add": cmd_add,
    "remove": cmd_remove,
    "toggle": cmd_toggle,
    "check": cmd_check,
    "list": cmd_list,
    "count": cmd_count,
    "size": cmd_size,
    "clear": cmd_clear,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="stol-favorites",
        description="Local, privacy-safe favourites store",
    )
    parser.add_argument(
        "--base-dir",
        help=f"Application data directory (or set {BASE_DIR_ENV_VAR})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("add", "Add a taxon to favourites"),
        ("remove", "Remove a taxon from favourites"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("id", type=_parse_taxon_id, help="Taxon ID")

    p_toggle = subparsers.add_parser("toggle", help="Toggle favourite status")
    p_toggle.add_argument("id", type=_parse_taxon_id, help="Taxon ID")
    p_toggle.add_argument("--json", action="store_true", help="Print JSON")

    p_check = subparsers.add_parser("check", help="Check whether a taxon is a favourite")
    p_check.add_argument("id", type=_parse_taxon_id, help="Taxon ID")
    p_check.add_argument("--json", action="store_true", help="Print JSON")

    p_list = subparsers.add_parser("list", help="List favourites, newest first")
    p_list.add_argument("--json", action="store_true", help="Print JSON")

    subparsers.add_parser("count", help="Print the number of favourites")

    p_size = subparsers.add_parser("size", help="Show the database size")
    p_size.add_argument("--json", action="store_true", help="Print JSON")

    p_clear = subparsers.add_parser("clear", help="Delete all favourites")
    p_clear.add_argument("--yes", action="store_true", help="Skip confirmation")

    return parser


async def main(argv=None):
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    await COMMANDS[args.command](args)


def run():
    """Console-script entry point."""
    asyncio.run(main())
