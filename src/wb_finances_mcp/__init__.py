"""MCP server for the Wildberries seller finances API."""

__version__ = "0.1.0"
