"""Command-line entry point: serve MCP over stdin/stdout."""

import asyncio
import logging
import sys

import click

from . import __version__
from .config import LOG_LEVELS, load_config
from .errors import ConfigError, RegistryError
from .server import create_server


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send diagnostics to stderr; stdout carries the protocol."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.version_option(version=__version__, prog_name="mcp-dispatch")
@click.option(
    "--config", "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON config file (default: $MCP_CONFIG_FILE).",
)
@click.option("--name", default=None, help="Server name reported to clients.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level for stderr diagnostics.",
)
@click.option(
    "--allow-path", "allowed_paths",
    multiple=True,
    help="Directory the file tools may access. Repeatable.",
)
@click.option("--read-only", is_flag=True, help="Disable file write and delete tools.")
@click.option(
    "--disable-tool", "disabled_tools",
    multiple=True,
    help="Tool name to switch off. Repeatable.",
)
@click.option("--list-tools", is_flag=True, help="Print the tool descriptors and exit.")
def main(config_file, name, log_level, allowed_paths, read_only, disabled_tools, list_tools):
    """Run an MCP tool server speaking newline-delimited JSON-RPC on stdio."""
    try:
        config = load_config(
            config_file=config_file,
            name=name,
            log_level=log_level,
            allowed_paths=list(allowed_paths),
            read_only=True if read_only else None,
            disabled_tools=list(disabled_tools),
        )
        configure_logging(config.log_level)
        server = create_server(config)
    except (ConfigError, RegistryError) as e:
        raise click.ClickException(str(e))

    if list_tools:
        for descriptor in server.registry.list():
            click.echo(f"{descriptor.name}: {descriptor.description}")
        return

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted")
