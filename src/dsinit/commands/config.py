"""dsinit config - Show and change default settings."""

import json

import click

from dsinit.core.config import ConfigManager, coerce_value
from dsinit.templates import TIERS
from dsinit.ui import Symbols, make_console

console = make_console()


@click.group()
def config_cmd():
    """Manage defaults used by `dsinit new`."""
    pass


@config_cmd.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_cmd(as_json: bool):
    """Show the current configuration."""
    manager = ConfigManager()
    data = manager.config.to_dict()

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[text.dim]{manager.config_file}[/]")
    for key, value in data.items():
        console.print(f"  [path]{key}[/] = {value!r}", highlight=False)


@config_cmd.command("set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set KEY to VALUE."""
    try:
        coerced = coerce_value(key, value)
    except KeyError:
        raise click.BadParameter(f"Unknown setting '{key}'", param_hint="'KEY'")
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'VALUE'")

    if key == "default_tier" and coerced not in TIERS:
        raise click.BadParameter(
            f"Unknown tier '{coerced}'. Available: {', '.join(TIERS)}", param_hint="'VALUE'"
        )

    ConfigManager().update(**{key: coerced})
    console.print(f"[status.ok]{Symbols.OK}[/] {key} = {coerced!r}", highlight=False)


@config_cmd.command("path")
def path_cmd():
    """Print the location of the config file."""
    click.echo(str(ConfigManager().config_file))
