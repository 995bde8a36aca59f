# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""tmuxmcp CLI package."""

import subprocess
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from tmuxmcp import __version__
from tmuxmcp.core.sessions import SessionService
from tmuxmcp.core.tmux import INSTALL_HINT, TmuxHost, ensure_tmux_available
from tmuxmcp.host_config import get_config, load_config, set_config
from tmuxmcp.utils.exceptions import ConfigLoadError, HostUnavailableError, TmuxMcpError
from tmuxmcp.utils.logging import configure_logging, get_logger, log_startup_info

# stdout belongs to the stdio transport
console = Console(stderr=True)
logger = get_logger(__name__)


def _load(config_path: Optional[str]):
    try:
        config = load_config(Path(config_path)) if config_path else get_config()
    except ConfigLoadError as e:
        raise click.ClickException(str(e))
    set_config(config)
    return config


@click.group()
@click.version_option(version=__version__)
def cli():
    """tmuxmcp - terminal sessions for AI agents over MCP."""
    pass


@cli.command()
@click.option("--transport", type=click.Choice(["stdio", "sse", "http"]), default=None,
              help="Transport mode (default from config: stdio)")
@click.option("--host", default=None, help="Bind host for sse/http transports")
@click.option("--port", type=int, default=None, help="Bind port for sse/http transports")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to config.yml")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def serve(transport: Optional[str], host: Optional[str], port: Optional[int],
          config_path: Optional[str], debug: bool):
    """Run the MCP server."""
    config = _load(config_path)
    configure_logging(
        level="DEBUG" if debug else config.logging.level,
        log_file=config.logging.file,
    )
    log_startup_info(logger, __version__)

    console.print("🔍 Checking tmux availability...")
    try:
        ensure_tmux_available(config.tmux.binary)
    except HostUnavailableError as e:
        console.print(f"[red]❌ Tmux check failed: {e}[/red]")
        raise click.ClickException(f"{e}\n{INSTALL_HINT}")
    console.print("[green]✅ Tmux is available[/green]")

    from tmuxmcp.server import create_server

    mcp = create_server(SessionService.from_config(config))

    transport = transport or config.server.transport
    if transport == "stdio":
        mcp.run(show_banner=False)
    else:
        mcp.run(
            transport=transport,
            host=host or config.server.host,
            port=port or config.server.port,
            show_banner=False,
        )


@cli.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None)
def check(config_path: Optional[str]):
    """Check that tmux is installed."""
    config = _load(config_path)
    try:
        path = ensure_tmux_available(config.tmux.binary)
    except HostUnavailableError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise click.ClickException(INSTALL_HINT)

    result = subprocess.run([path, "-V"], capture_output=True, text=True, check=False)
    version = result.stdout.strip() or "unknown version"
    console.print(f"[green]✅ {version}[/green] ({path})")


@cli.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None)
def sessions(config_path: Optional[str]):
    """List tmux sessions."""
    config = _load(config_path)
    try:
        output = TmuxHost.from_config(config).list_sessions()
    except TmuxMcpError as e:
        raise click.ClickException(str(e))
    click.echo(output, nl=False)


def main():
    """Main entry point."""
    cli()
