"""
hubspot-summaries CLI — entry point for all operations.

Usage:
    hubspot-summaries mcp                  # Start the MCP server (stdio transport)
    hubspot-summaries status               # Show configuration status
    hubspot-summaries list [filters]       # Print matching notes as JSON
    hubspot-summaries show ID              # Print one decoded note
    hubspot-summaries version              # Show version
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hubspot-summaries",
        description="Summary notes stored as HubSpot engagements, served over MCP.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    # mcp
    subparsers.add_parser("mcp", help="Start the MCP server (stdio transport)")

    # status
    subparsers.add_parser("status", help="Show configuration status")

    # list
    list_parser = subparsers.add_parser("list", help="List summary notes")
    list_parser.add_argument("--date", help="Creation date, YYYY-MM-DD (UTC)")
    list_parser.add_argument("--day", dest="day_of_week", help="Day of the week, e.g. Monday")
    list_parser.add_argument("--start", help="Time range start, HH:MM")
    list_parser.add_argument("--end", help="Time range end, HH:MM")
    list_parser.add_argument("--query", help="Case-insensitive text to search for")
    list_parser.add_argument("--limit", type=int, help="Number of most recent notes")

    # show
    show_parser = subparsers.add_parser("show", help="Show one summary note")
    show_parser.add_argument("id", help="Engagement ID")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from hubspot_summaries import __version__

        print(f"hubspot-summaries {__version__}")
        return 0

    if args.command == "mcp":
        return _cmd_mcp()
    elif args.command == "status":
        return _cmd_status()
    elif args.command == "list":
        return _cmd_list(args)
    elif args.command == "show":
        return _cmd_show(args)
    else:
        parser.print_help()
        return 0


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout belongs to the MCP stdio transport."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _cmd_mcp() -> int:
    from hubspot_summaries.api.mcp import run_server
    from hubspot_summaries.config import get_config

    cfg = get_config()
    configure_logging(cfg.log_level)
    asyncio.run(run_server(cfg))
    return 0


def _cmd_status() -> int:
    from hubspot_summaries.config import get_config

    cfg = get_config()
    missing = cfg.hubspot.missing()
    print(f"HubSpot API:      {cfg.hubspot.base_url}")
    print(f"Access token:     {'MISSING' if 'HUBSPOT_ACCESS_TOKEN' in missing else 'configured'}")
    print(f"Shared contact:   {cfg.hubspot.contact_id or 'MISSING'}")
    print(f"Page size:        {cfg.hubspot.page_size}")
    print(f"Filter timezone:  {cfg.timezone or 'server local'}")
    if missing:
        print(f"\nMissing required environment variables: {', '.join(missing)}")
        return 1
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    from hubspot_summaries.notes.filters import FilterCriteria, TimeRange

    criteria = FilterCriteria(
        date=args.date,
        day_of_week=args.day_of_week,
        time_range=TimeRange(args.start or "", args.end or "") if args.start or args.end else None,
        query=args.query,
        limit=args.limit,
    )

    async def run(service):
        records = await service.list_summaries(criteria)
        return [r.to_dict() for r in records]

    return _run_with_service(run)


def _cmd_show(args: argparse.Namespace) -> int:
    from dataclasses import asdict

    from hubspot_summaries.notes.codec import decode

    async def run(service):
        record = await service.get_summary(args.id)
        return {"id": record.id, "createdAt": record.created_at_ms, **asdict(decode(record.body))}

    return _run_with_service(run)


def _run_with_service(func) -> int:
    """Run ``func(service)`` against HubSpot and print its result as JSON."""
    from hubspot_summaries.config import get_config
    from hubspot_summaries.errors import SummaryError
    from hubspot_summaries.hubspot.client import HubSpotClient
    from hubspot_summaries.notes.service import SummaryService

    cfg = get_config()
    configure_logging(cfg.log_level)

    async def run():
        cfg.hubspot.require()
        async with HubSpotClient(cfg.hubspot) as client:
            return await func(SummaryService.from_config(client, cfg))

    try:
        result = asyncio.run(run())
    except SummaryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
