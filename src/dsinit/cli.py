"""Main CLI entry point for dsinit."""

import logging
import os

import click

from dsinit import __version__
from dsinit.commands.config import config_cmd
from dsinit.commands.new import new_cmd
from dsinit.commands.tiers import tiers_cmd

LOG_LEVEL_ENV = "DSINIT_LOG_LEVEL"


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr.

    --verbose forces DEBUG; otherwise DSINIT_LOG_LEVEL (default WARNING).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="dsinit")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """dsinit - Scaffold data-science projects in three tiers.

    \b
    Quick Start:
      dsinit new my-project              Create a project (core tier)
      dsinit new my-project -t full      Everything: CI, pre-commit, docs
      dsinit new my-project --repo URL   Scaffold into a clone
      dsinit tiers                       Show what each tier creates

    \b
    Configuration:
      dsinit config show                 Current defaults
      dsinit config set author "Ada L."  Change a default
    """
    configure_logging(verbose)


main.add_command(new_cmd, name="new")
main.add_command(tiers_cmd, name="tiers")
main.add_command(config_cmd, name="config")


if __name__ == "__main__":
    main()
