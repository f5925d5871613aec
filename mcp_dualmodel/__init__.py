"""MCP stdio host for the DualModel tool."""
