"""MCP server exposing Braindump tools."""
