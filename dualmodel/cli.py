"""CLI for DualModel - run the MCP server or query both models directly."""

from __future__ import annotations

import asyncio
import json
import shutil
import sys
from pathlib import Path

import click

from dualmodel import __version__


def _load_or_exit(require_key: bool = True):
    from dualmodel.config import load_settings
    from dualmodel.errors import ConfigurationError

    try:
        return load_settings(require_key=require_key)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="dualmodel")
def main() -> None:
    """DualModel - ask two LLMs the same question at once.

    Sends one prompt to two OpenRouter models in parallel and returns both
    answers side by side, as an MCP tool or from the terminal.
    """
    pass


@main.command()
def serve() -> None:
    """Run the MCP server on stdio.

    \b
    Configure in .mcp.json:
        {
            "mcpServers": {
                "dualmodel": {
                    "command": "dualmodel",
                    "args": ["serve"]
                }
            }
        }
    """
    from mcp_dualmodel.server import main as run_server

    run_server()


@main.command()
@click.argument("prompt")
@click.option(
    "--system-prompt", "-s",
    default=None,
    help="Override the default system prompt for this query",
)
@click.option(
    "--raw",
    is_flag=True,
    help="Output raw JSON instead of formatted text",
)
def ask(prompt: str, system_prompt: str | None, raw: bool) -> None:
    """Send PROMPT to both models and print the answers.

    \b
    Example:
        dualmodel ask "Explain quicksort"
        dualmodel ask "Explain quicksort" --system-prompt "Answer in one paragraph"
    """
    from dualmodel.config import configure_logging
    from dualmodel.dispatcher import DualDispatcher
    from dualmodel.errors import DualModelError
    from dualmodel.registry import format_dual_result

    settings = _load_or_exit()
    configure_logging(settings.LOG_LEVEL)

    try:
        result = asyncio.run(DualDispatcher(settings).query_both(prompt, system_prompt))
    except DualModelError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if raw:
        click.echo(json.dumps(result.model_dump(), indent=2))
        return

    click.echo(format_dual_result(result))


@main.command()
def tool() -> None:
    """Print the advertised MCP tool descriptor as JSON."""
    from dualmodel.registry import ToolRegistry

    descriptor = ToolRegistry(_load_or_exit(require_key=False)).describe()
    click.echo(json.dumps(descriptor.model_dump(), indent=2))


@main.command()
@click.option(
    "--name", "-n",
    default="dualmodel",
    help="Server name to register in .mcp.json",
)
def init(name: str) -> None:
    """Register the DualModel MCP server in ./.mcp.json.

    \b
    Example:
        cd /path/to/myproject
        dualmodel init
    """
    mcp_json_path = Path.cwd() / ".mcp.json"
    executable = shutil.which("dualmodel") or "dualmodel"

    if mcp_json_path.exists():
        try:
            mcp_config = json.loads(mcp_json_path.read_text())
        except json.JSONDecodeError:
            mcp_config = {"mcpServers": {}}
    else:
        mcp_config = {"mcpServers": {}}

    if "mcpServers" not in mcp_config:
        mcp_config["mcpServers"] = {}

    if name in mcp_config["mcpServers"]:
        click.echo(f".mcp.json already has {name} config, skipping...")
        return

    mcp_config["mcpServers"][name] = {
        "command": executable,
        "args": ["serve"],
    }
    mcp_json_path.write_text(json.dumps(mcp_config, indent=2) + "\n")
    click.echo(f"Updated .mcp.json with {name} MCP server")
    click.echo("Set OPENROUTER_API_KEY in the environment or a .env file before starting the client.")


if __name__ == "__main__":
    main()
