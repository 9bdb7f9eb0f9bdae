"""
MCP Server for Braindump.

Exposes note capture, review and the categorizer as tools for MCP clients.
"""

import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

# Import braindump modules
from braindump.config import ensure_dirs
from braindump.notebook import Notebook
from braindump.surfacing import format_categories, format_notes, format_scores

# stdout carries the protocol; logs go to stderr
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# Create MCP server
server = Server("braindump")

_notebook: Notebook | None = None


def get_notebook() -> Notebook:
    """Shared notebook, so learned keywords stay applied between calls."""
    global _notebook
    if _notebook is None:
        ensure_dirs()
        _notebook = Notebook()
    return _notebook


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="braindump_add",
            description="Capture a thought. It is categorized automatically (task, idea, question, work, shopping, event, note, inspiration, contact, finance, health).",
            inputSchema={
                "type": "object",
                "properties": {
                    "thought": {
                        "type": "string",
                        "description": "The thought to capture",
                    },
                },
                "required": ["thought"],
            },
        ),
        Tool(
            name="braindump_list",
            description="List captured notes, newest first, optionally filtered by category.",
            inputSchema={
                "type": "object",
                "properties": {
                    "category": {
                        "type": "string",
                        "description": "Category name to filter by (optional)",
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum notes to return (default: 20)",
                        "default": 20,
                    },
                },
            },
        ),
        Tool(
            name="braindump_edit",
            description="Replace a note's text. The note is re-categorized.",
            inputSchema={
                "type": "object",
                "properties": {
                    "note_id": {
                        "type": "string",
                        "description": "The ID of the note to edit",
                    },
                    "content": {
                        "type": "string",
                        "description": "New note text",
                    },
                },
                "required": ["note_id", "content"],
            },
        ),
        Tool(
            name="braindump_delete",
            description="Delete a note.",
            inputSchema={
                "type": "object",
                "properties": {
                    "note_id": {
                        "type": "string",
                        "description": "The ID of the note to delete",
                    },
                },
                "required": ["note_id"],
            },
        ),
        Tool(
            name="braindump_categorize",
            description="Show how a text would be categorized, with per-category scores, without saving it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Text to categorize",
                    },
                },
                "required": ["text"],
            },
        ),
        Tool(
            name="braindump_categories",
            description="List all categories with their icons.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "braindump_add":
            return await tool_add(arguments)
        elif name == "braindump_list":
            return await tool_list(arguments)
        elif name == "braindump_edit":
            return await tool_edit(arguments)
        elif name == "braindump_delete":
            return await tool_delete(arguments)
        elif name == "braindump_categorize":
            return await tool_categorize(arguments)
        elif name == "braindump_categories":
            return await tool_categories(arguments)
        else:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=f"Error: {e}")]


async def tool_add(args: dict) -> list[TextContent]:
    """Capture a thought."""
    thought = (args.get("thought") or "").strip()
    if not thought:
        return [TextContent(type="text", text="Error: Empty thought")]

    note = get_notebook().add(thought)
    text = f"Captured: {note['id']} → {note['category_icon']} {note['category']} ({note['confidence']:.2f})"
    if note["tags"]:
        text += "\nTags: " + " ".join(f"#{tag}" for tag in note["tags"])

    return [TextContent(type="text", text=text)]


async def tool_list(args: dict) -> list[TextContent]:
    """List notes."""
    category = args.get("category") or None
    limit = args.get("limit", 20)

    notes = get_notebook().list_notes(category=category, limit=limit)
    return [TextContent(type="text", text=format_notes(notes, category=category))]


async def tool_edit(args: dict) -> list[TextContent]:
    """Edit a note."""
    note_id = (args.get("note_id") or "").strip()
    content = (args.get("content") or "").strip()

    if not note_id:
        return [TextContent(type="text", text="Error: No note_id provided")]
    if not content:
        return [TextContent(type="text", text="Error: Note cannot be empty")]

    note = get_notebook().edit(note_id, content)
    return [TextContent(type="text", text=f"Updated {note_id} → {note['category_icon']} {note['category']}")]


async def tool_delete(args: dict) -> list[TextContent]:
    """Delete a note."""
    note_id = (args.get("note_id") or "").strip()
    if not note_id:
        return [TextContent(type="text", text="Error: No note_id provided")]

    if get_notebook().delete(note_id):
        return [TextContent(type="text", text=f"Deleted: {note_id}")]
    return [TextContent(type="text", text=f"Note not found: {note_id}")]


async def tool_categorize(args: dict) -> list[TextContent]:
    """Dry-run categorization."""
    text = args.get("text") or ""
    return [TextContent(type="text", text=format_scores(text, get_notebook().categorizer))]


async def tool_categories(args: dict) -> list[TextContent]:
    """List categories."""
    notebook = get_notebook()
    result = format_categories(notebook.categories(), used=notebook.db.get_categories())
    return [TextContent(type="text", text=result)]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console-script entry point."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    run()
