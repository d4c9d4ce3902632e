import logging
import sys
from collections.abc import Hashable
import click
import yaml
from tabulate import tabulate
from ordered_map.collections import OrderedMap


LOGGER = logging.getLogger(__name__)


def parse_yaml_scalar(text: str):
    # `--set 3=true` stores the int 3 mapped to the bool True, like the document would
    if not text:
        return text
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text


def parse_key_value(ctx, param, value):
    # Parse the input as key=value pairs, keeping their order
    pairs = []
    for item in value:
        if "=" not in item:
            raise click.BadParameter(f"expected key=value, got {item!r}")
        key, val = item.split("=", 1)  # split only on the first equal sign
        key = parse_yaml_scalar(key)
        if not isinstance(key, Hashable):
            raise click.BadParameter(f"key {item!r} is not a scalar")
        pairs.append((key, parse_yaml_scalar(val)))
    return pairs


def parse_keys(ctx, param, value):
    keys = [parse_yaml_scalar(item) for item in value]
    for item, key in zip(value, keys):
        if not isinstance(key, Hashable):
            raise click.BadParameter(f"key {item!r} is not a scalar")
    return keys


@click.command(help="Load a YAML mapping document and print one of its views")
@click.argument("document", type=click.File("r"))
@click.option(
    "-s",
    "--set",
    "set_entries",
    help="Entry to set as key=value, applied in order after loading the document",
    type=str,
    multiple=True,
    required=False,
    callback=parse_key_value,
)
@click.option(
    "-d",
    "--delete",
    "delete_keys",
    help="Key to delete, applied after the --set entries",
    type=str,
    multiple=True,
    required=False,
    callback=parse_keys,
)
@click.option(
    "--view",
    help="View to print",
    type=click.Choice(["keys", "values", "entries"]),
    default="entries",
    show_default=True,
    required=False,
)
@click.pass_context
def show(ctx, document, set_entries, delete_keys, view):
    config = ctx.obj["config"]
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as e:
        click.echo(f"Error: Invalid YAML document {document.name}: {e}", err=True)
        sys.exit(1)

    if not isinstance(data, dict):
        click.echo(
            f"Error: Top level of {document.name} must be a mapping", err=True
        )
        sys.exit(1)

    omap = OrderedMap(data.items(), config=config)
    LOGGER.debug("Loaded %d entries from %s", omap.size, document.name)

    for key, value in set_entries:
        omap.set(key, value)

    for key in delete_keys:
        if not omap.delete(key):
            click.echo(f"Warning: Key not found {key!r}", err=True)

    if view == "keys":
        for key in omap.keys():
            click.echo(key)
    elif view == "values":
        for value in omap.values():
            click.echo(value)
    else:
        click.echo(tabulate(omap.entries(), headers=["key", "value"]))
