"""DualModel MCP server.

Exposes a single MCP tool that sends one prompt to two OpenRouter-hosted
models concurrently and returns both answers as one labeled text block.
"""

__version__ = "0.1.0"
