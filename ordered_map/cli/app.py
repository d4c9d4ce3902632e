import click
import importlib.metadata
import logging
import sys
import toml
import os
from pathlib import Path

from ordered_map.cli.show_commands import show
from ordered_map.config import (
    OrderedMapConfig,
    SUPPORTED_KEYS_VIEWS,
    SUPPORTED_LOG_LEVELS,
)


LOGGER = logging.getLogger(__name__)

PACKAGE_LOGGER = "ordered_map"


def default_omap_config_path():
    default = Path.home() / ".config" / "omap" / "config.toml"
    return os.environ.get("OMAP_CONFIG", default)


@click.group()
@click.option(
    "--config",
    help="Path to configuration file",
    type=click.Path(exists=False, readable=True),
    show_default=True,
    default=default_omap_config_path,
)
@click.option(
    "--log-level",
    help="Log level, overrides the configuration file",
    type=click.Choice(SUPPORTED_LOG_LEVELS, case_sensitive=False),
    required=False,
)
@click.option(
    "--keys-view",
    help="What keys() returns, overrides the configuration file",
    type=click.Choice(SUPPORTED_KEYS_VIEWS),
    required=False,
)
@click.pass_context
def cli(ctx, config, log_level, keys_view):
    if ctx.invoked_subcommand == "version":
        return
    try:
        with open(config) as f:
            settings = toml.load(f).get("omap", {})
    except FileNotFoundError:
        settings = {}
        print(f"Warning: Configuration file not found {config}", file=sys.stderr)
    except toml.TomlDecodeError as e:
        click.echo(f"Error: Invalid configuration file {config}: {e}", err=True)
        sys.exit(1)

    if not isinstance(settings, dict):
        click.echo(f"Error: [omap] in {config} must be a table", err=True)
        sys.exit(1)

    if log_level:
        settings["log-level"] = log_level

    if keys_view:
        settings["keys-view"] = keys_view

    try:
        omap_config = OrderedMapConfig.from_dict(settings)
    except ValueError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    logging.basicConfig()
    logging.getLogger(PACKAGE_LOGGER).setLevel(omap_config.log_level)
    LOGGER.debug("Using configuration %s", omap_config)
    ctx.obj = {"config": omap_config}


@cli.command()
def version():
    print(f"{importlib.metadata.version('ordered-map')}")


cli.add_command(show)


def main():
    cli()


if __name__ == "__main__":
    main()
