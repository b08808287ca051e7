"""
MCP Server for HubSpot summary notes.

Provides a Model Context Protocol (MCP) interface so LLM clients can create,
retrieve, update and delete summary notes stored as HubSpot NOTE engagements
on one shared contact. Runs locally with stdio transport.

Architecture:
    MCP Client -> stdio -> this server -> SummaryService -> HubSpot API

Tools (4):
    - create_shared_summary: title + summary + author -> new note
    - get_summaries: list notes, filtered by date/dayOfWeek/timeRange/query
    - update_shared_summary: by Engagement ID or search query, merge fields
    - delete_shared_summary: by Engagement ID or filters (newest match)

Start:
    python -m hubspot_summaries.api.mcp
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

from hubspot_summaries import __version__
from hubspot_summaries.config import Config, HubSpotConfig, get_config
from hubspot_summaries.errors import SummaryError, UnknownError
from hubspot_summaries.hubspot.client import HubSpotClient
from hubspot_summaries.notes.filters import FilterCriteria
from hubspot_summaries.notes.service import SummaryService

logger = logging.getLogger(__name__)

SERVER_NAME = "hubspot-mcp-server"

INSTRUCTIONS = (
    "A HubSpot integration server that creates, retrieves, updates, and deletes summary notes.\n"
    "Tools include:\n"
    "  • create_shared_summary: Create a note using title, summary, and author.\n"
    "  • get_summaries: Retrieve notes with flexible filters (date, dayOfWeek, limit, timeRange, query).\n"
    "  • update_shared_summary: Update a note by Engagement ID or search query.\n"
    "  • delete_shared_summary: Delete a note by Engagement ID or via filters."
)

_TIME_RANGE_SCHEMA = {
    "type": "object",
    "properties": {
        "start": {"type": "string", "description": "Optional: Start time in HH:MM"},
        "end": {"type": "string", "description": "Optional: End time in HH:MM"},
    },
    "description": "Optional: Time range filter",
}


# ─── Tool Definitions ────────────────────────────────────────────────


def get_tool_definitions() -> list[dict]:
    """Return the list of MCP tool definitions."""
    return [
        {"name": "create_shared_summary", "description": "Step 1: Accept a title, summary, and author.\nStep 2: Combine these into a note body.\nStep 3: Create a new HubSpot Note engagement associated with a dedicated contact.", "inputSchema": {"type": "object", "properties": {"title": {"type": "string", "description": "Title of the summary"}, "summary": {"type": "string", "description": "Content of the summary"}, "author": {"type": "string", "description": "Name of the author"}}, "required": ["title", "summary", "author"]}},
        {"name": "get_summaries", "description": "Retrieve summary notes from HubSpot with flexible filters.\nOptional filters:\n  • date: (YYYY-MM-DD) to filter by a specific date.\n  • dayOfWeek: e.g., 'Monday' to filter by day of the week.\n  • limit: Number of most recent summaries to return.\n  • timeRange: { start: 'HH:MM', end: 'HH:MM' } to filter by time of day.\n  • query: Keyword to search in note content.", "inputSchema": {"type": "object", "properties": {"date": {"type": "string", "description": "Optional: Date in YYYY-MM-DD format"}, "dayOfWeek": {"type": "string", "description": "Optional: Day of the week (e.g., Monday)"}, "limit": {"type": "integer", "minimum": 1, "description": "Optional: Number of summaries to return"}, "timeRange": _TIME_RANGE_SCHEMA, "query": {"type": "string", "description": "Optional: Keyword to search in note content"}}}},
        {"name": "update_shared_summary", "description": "Step 1: Provide an explicit Engagement ID OR a search query (query) to locate the note.\nStep 2: Retrieve the current note content.\nStep 3: Merge existing values with any provided updates (title, summary, author).\nStep 4: Update the note while preserving unchanged fields.", "inputSchema": {"type": "object", "properties": {"id": {"type": "string", "description": "Optional: Engagement ID of the note"}, "query": {"type": "string", "description": "Optional: Keyword to search in note content"}, "title": {"type": "string", "description": "Optional: Updated title"}, "summary": {"type": "string", "description": "Optional: Updated content"}, "author": {"type": "string", "description": "Optional: Updated author"}}}},
        {"name": "delete_shared_summary", "description": "Delete a summary note from HubSpot.\nEither provide an explicit Engagement ID (id) or use optional filters (date, dayOfWeek, limit, timeRange) to select a candidate note (e.g., 'delete my last summary').", "inputSchema": {"type": "object", "properties": {"id": {"type": "string", "description": "Optional: Engagement ID to delete"}, "date": {"type": "string", "description": "Optional: Date in YYYY-MM-DD format"}, "dayOfWeek": {"type": "string", "description": "Optional: Day of the week (e.g., Monday)"}, "limit": {"type": "integer", "minimum": 1, "description": "Optional: Number of summaries to consider (default 1)"}, "timeRange": _TIME_RANGE_SCHEMA}}},
    ]


# ─── Tool Results ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolResult:
    """Text outcome of one tool call."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}


_ACTIONS = {
    "create_shared_summary": "creating summary",
    "get_summaries": "retrieving summaries",
    "update_shared_summary": "updating summary",
    "delete_shared_summary": "deleting summary",
}


# ─── Tool Handlers ───────────────────────────────────────────────────


async def handle_tool_call(
    name: str,
    arguments: dict[str, Any],
    service: SummaryService,
    config: HubSpotConfig,
) -> ToolResult:
    """Handle an MCP tool call and return its text result.

    Raises McpError only for protocol-level faults (unknown tool, missing
    required arguments); every other failure becomes an error ToolResult.
    """
    if name not in _ACTIONS:
        logger.error("Unknown tool requested: %s", name)
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    if name == "create_shared_summary" and not all(
        arguments.get(key) for key in ("title", "summary", "author")
    ):
        logger.error("Missing required arguments for create_shared_summary")
        raise McpError(
            ErrorData(
                code=INVALID_PARAMS,
                message="Missing required arguments: title, summary, and author",
            )
        )

    missing = config.missing()
    if missing:
        logger.error("Missing required environment variables: %s", ", ".join(missing))
        return ToolResult(
            f"Error: Missing required environment variables: {', '.join(missing)}", is_error=True
        )

    try:
        return await _dispatch(name, arguments, service)
    except SummaryError as e:
        logger.warning("Error %s: %s", _ACTIONS[name], e)
        return ToolResult(f"Error {_ACTIONS[name]}: {e}", is_error=True)
    except Exception as e:
        logger.exception("Unexpected error %s", _ACTIONS[name])
        error = UnknownError(str(e) or "Unknown error")
        return ToolResult(f"Error {_ACTIONS[name]}: {error}", is_error=True)


async def _dispatch(name: str, arguments: dict[str, Any], service: SummaryService) -> ToolResult:
    if name == "create_shared_summary":
        record_id = await service.create_summary(
            arguments["title"], arguments["summary"], arguments["author"]
        )
        return ToolResult(f"Summary created successfully. Engagement ID: {record_id}")

    elif name == "get_summaries":
        records = await service.list_summaries(FilterCriteria.from_arguments(arguments))
        return ToolResult(json.dumps([r.to_dict() for r in records], indent=2, default=str))

    elif name == "update_shared_summary":
        record_id = await service.update_summary(
            record_id=arguments.get("id"),
            query=arguments.get("query"),
            title=arguments.get("title"),
            summary=arguments.get("summary"),
            author=arguments.get("author"),
        )
        return ToolResult(f"Summary updated successfully. Engagement ID: {record_id}")

    # delete_shared_summary
    criteria = FilterCriteria.from_arguments(arguments)
    record_id = await service.delete_summary(record_id=arguments.get("id"), criteria=criteria)
    return ToolResult(f"Summary deleted successfully. Engagement ID: {record_id}")


# ─── MCP Server ──────────────────────────────────────────────────────


def create_server(service: SummaryService, config: HubSpotConfig):
    """Create and configure the MCP server.

    tools/call is registered on ``request_handlers`` directly rather than via
    ``@server.call_tool()``: the decorator converts every exception into an
    isError result, while McpError must reach the session as a JSON-RPC error.
    """
    import mcp.types as types
    from mcp.server import Server

    server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=d["name"], description=d["description"], inputSchema=d["inputSchema"])
            for d in get_tool_definitions()
        ]

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await handle_tool_call(
            req.params.name, req.params.arguments or {}, service, config
        )
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    server.request_handlers[types.CallToolRequest] = call_tool

    return server


def log_config_status(config: HubSpotConfig) -> None:
    """Warn once at startup about each missing required variable."""
    for var in ("HUBSPOT_ACCESS_TOKEN", "SHARED_CONTACT_ID"):
        if var in config.missing():
            logger.warning("%s is missing. HubSpot integration features will be disabled.", var)
        else:
            logger.info("%s is configured.", var)


async def run_server(config: Config | None = None) -> None:
    """Run the MCP server with stdio transport."""
    from mcp.server.stdio import stdio_server

    cfg = config or get_config()
    log_config_status(cfg.hubspot)

    async with HubSpotClient(cfg.hubspot) as client:
        server = create_server(SummaryService.from_config(client, cfg), cfg.hubspot)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("HubSpot MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    from hubspot_summaries.cli import configure_logging

    configure_logging(get_config().log_level)
    asyncio.run(run_server())
