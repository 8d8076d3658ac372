"""HeyZub CLI — the main entry point for the MCP command-line host."""

from __future__ import annotations

import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from heyzub import __version__

console = Console()


class Settings:
    """Global options shared by every command."""

    def __init__(self, config_path: str | None, config_dir: str | None):
        self.config_path = config_path
        self.config_dir = config_dir

    def registry(self):
        """Return a loaded ServerRegistry for the configured directory."""
        from heyzub.config import resolve_registry_dir
        from heyzub.servers.registry import ServerRegistry

        reg = ServerRegistry(resolve_registry_dir(self.config_dir))
        reg.load()
        return reg


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/] {escape(message)}")
    raise SystemExit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="Settings file (default: ./.heyzub.yaml or ~/.heyzub.yaml)")
@click.option("--config-dir", default=None, help="Server registry directory (env: HEYZUB_CONFIG_DIR)")
@click.option("--verbose", "-v", is_flag=True, help="Log registry activity")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, config_dir: str | None, verbose: bool):
    """HeyZub — Advanced MCP CLI Host.

    Manage Model Context Protocol servers and the models that talk to them.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.obj = Settings(config_path, config_dir)

    if ctx.invoked_subcommand is None:
        console.print("\n[bold blue]Welcome to HeyZub![/]")
        console.print("Type 'heyzub --help' for more information.")


# ── Version ──────────────────────────────────────────────────────────


@main.command()
def version():
    """Print HeyZub version."""
    console.print(f"HeyZub v{__version__}")
    console.print("Model Context Protocol CLI Host")


# ── Servers ──────────────────────────────────────────────────────────


@main.group(invoke_without_command=True)
@click.pass_context
def server(ctx: click.Context):
    """Manage MCP servers."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_servers)


@server.command(name="list")
@click.option("--sort", "sort_by", default="name", type=click.Choice(["id", "name", "type"]))
@click.pass_obj
def list_servers(settings: Settings, sort_by: str = "name"):
    """List configured MCP servers."""
    from heyzub.servers.errors import RegistryError

    try:
        servers = settings.registry().list_servers()
    except RegistryError as e:
        _fail(str(e))

    if not servers:
        console.print("[yellow]No servers registered.[/]")
        return

    servers.sort(key=lambda s: (getattr(s, sort_by) if sort_by != "type" else s.type_value, s.id))

    table = Table(title=f"Configured MCP Servers ({len(servers)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Endpoint")
    table.add_column("Status", justify="center")

    for s in servers:
        status = "[green]Active[/]" if s.active else "[red]Inactive[/]"
        table.add_row(s.id, s.name, s.type_value, s.endpoint, status)

    console.print(table)


@server.command()
@click.argument("server_id")
@click.pass_obj
def show(settings: Settings, server_id: str):
    """Show a single server."""
    from heyzub.servers.errors import RegistryError

    try:
        entry = settings.registry().get(server_id)
    except RegistryError as e:
        _fail(str(e))

    if entry is None:
        _fail(f"Server '{server_id}' not found")

    console.print(f"  [cyan]{entry.id}[/]")
    console.print(f"    Name:     {entry.name}")
    console.print(f"    Type:     {entry.type_value}")
    console.print(f"    Endpoint: {entry.endpoint}")
    console.print(f"    Active:   {'yes' if entry.active else 'no'}")
    if entry.config:
        console.print(f"    Config:   {entry.config}")


@server.command()
@click.option("--name", "-n", required=True, help="Human-readable server name")
@click.option("--type", "-t", "server_type", required=True, help="sqlite, filesystem or openai-compatible")
@click.option("--endpoint", "-e", required=True, help="Address or URI of the server")
@click.option("--id", "server_id", default="", help="Server id (generated when omitted)")
@click.option("--active/--inactive", default=False, help="Mark the server active")
@click.option("--config", "server_config", default="", help="Type-specific settings blob")
@click.pass_obj
def add(
    settings: Settings,
    name: str,
    server_type: str,
    endpoint: str,
    server_id: str,
    active: bool,
    server_config: str,
):
    """Register a server (replaces any server with the same id)."""
    from heyzub.servers.errors import RegistryError
    from heyzub.servers.models import ServerConfig

    try:
        entry = settings.registry().register(
            ServerConfig(
                id=server_id,
                name=name,
                type=server_type,
                endpoint=endpoint,
                active=active,
                config=server_config,
            )
        )
    except RegistryError as e:
        _fail(str(e))

    console.print(f"  Registered: [cyan]{entry.id}[/] ({entry.type_value}, {entry.endpoint})")


@server.command()
@click.argument("server_id")
@click.pass_obj
def remove(settings: Settings, server_id: str):
    """Unregister a server by id."""
    from heyzub.servers.errors import RegistryError

    try:
        settings.registry().unregister(server_id)
    except RegistryError as e:
        _fail(str(e))

    console.print(f"  Removed: [cyan]{server_id}[/]")


# ── Models ───────────────────────────────────────────────────────────


@main.command()
def model():
    """Manage and explore AI models."""
    from heyzub.models.catalog import list_models

    console.print("Available AI Models:")
    for m in list_models():
        console.print(f"- {m.name} (Provider: {m.provider})")
        console.print(f"  Capabilities: {', '.join(m.capabilities)}")


# ── Config ───────────────────────────────────────────────────────────


@main.command()
@click.pass_obj
def config(settings: Settings):
    """Show HeyZub configuration."""
    from heyzub.config import ConfigError, load_config, resolve_registry_dir
    from heyzub.servers.errors import RegistryError
    from heyzub.servers.registry import ServerRegistry, default_config_dir

    try:
        cfg = load_config(settings.config_path)
    except ConfigError as e:
        _fail(str(e))

    try:
        registry_dir = resolve_registry_dir(settings.config_dir) or default_config_dir()
    except RegistryError as e:
        _fail(str(e))
    snapshot = registry_dir / ServerRegistry.SNAPSHOT_FILE

    console.print("HeyZub Configuration:")
    console.print(f"Settings File: {cfg.source or '(defaults)'}")
    console.print(f"Default Model: {cfg.default_model}")
    console.print(f"Active Servers: {', '.join(cfg.active_servers) or '(none)'}")
    console.print(f"Server Registry: {snapshot}")


# ── Interact ─────────────────────────────────────────────────────────


@main.command()
def interact():
    """Start an interactive MCP session."""
    console.print("Entering Interactive MCP Session")
    console.print("Type 'exit' to quit")

    stdin = click.get_text_stream("stdin")
    while True:
        click.echo("heyzub> ", nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            break
        text = line.strip()
        if text == "exit":
            break
        if text:
            console.print(f"You entered: {text}", markup=False)

    console.print("Exiting interactive session. Goodbye!")


if __name__ == "__main__":
    main()
