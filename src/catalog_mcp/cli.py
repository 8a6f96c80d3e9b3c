"""
Command line interface for catalog-mcp.
"""

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from catalog_mcp import __version__
from catalog_mcp.app import CatalogMCPApp
from catalog_mcp.config import Config
from catalog_mcp.errors import CatalogMCPError, ConfigurationError
from catalog_mcp.log_config import configure_logging

logger = logging.getLogger(__name__)

console = Console()

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
DEFAULT_MANIFEST_PATH = "tools-manifest.json"


def _build_app(config: Config) -> CatalogMCPApp:
    try:
        app = CatalogMCPApp(config)
        app.register_tools()
    except CatalogMCPError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)
    return app


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="catalog-mcp")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx, config_file, log_level):
    """Expose Backstage catalog operations as MCP tools."""
    config = Config(config_file)
    configure_logging(log_level or config.log_level)
    ctx.obj = config


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=DEFAULT_MANIFEST_PATH,
    show_default=True,
    help="Where to write the manifest.",
)
@click.pass_obj
def manifest(config, output):
    """Register all tools and export their manifest."""
    app = _build_app(config)
    if not app.loader.export_manifest(output):
        console.print(f"[bold red]Error:[/bold red] Failed to write manifest to {output}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Manifest with {len(app.loader.manifest_entries)} tools written to {output}")


@cli.command()
@click.pass_obj
def tools(config):
    """List the registered tools."""
    app = _build_app(config)

    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters", style="magenta")
    for entry in app.loader.manifest_entries:
        table.add_row(entry.name, entry.description, ", ".join(entry.params))
    console.print(table)


@cli.command()
@click.argument("name")
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object.")
@click.option("--user", default=None, help="User id passed to the tool.")
@click.option("--scope", "scopes", multiple=True, help="Scope granted to the caller (repeatable).")
@click.pass_obj
def call(config, name, args_json, user, scopes):
    """Invoke a tool through the full dispatch stack."""
    try:
        config.require_base_url()
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)

    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid JSON in --args: {e}")
        sys.exit(1)

    app = _build_app(config)
    extras = {"user_id": user, "scopes": list(scopes)}
    result = asyncio.run(app.server.call_tool(name, arguments, extras))

    text = "\n".join(item.get("text", "") for item in result.get("content", []))
    if result.get("isError"):
        console.print(Panel(Text(text), title=name, style="red"))
        sys.exit(1)
    console.print(Panel(Text(text), title=name, style="green"))


def main():
    cli()


if __name__ == "__main__":
    main()
