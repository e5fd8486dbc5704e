"""Shared utility functions for commands."""

import sys
from pathlib import Path

import click

from plugin_installer import setup_logging
from plugin_installer.config import ConfigError, load_config
from plugin_installer.errors import (
    PluginInstallerError,
    format_error,
    format_suggestion,
)
from plugin_installer.loader import build_service
from plugin_installer.messages import DEBUG, WARNING, FilteringSink
from plugin_installer.paths import CONFIG_ENV_VAR, get_config_path
from plugin_installer.service import PluginInstallerService


class EchoMessageSink(FilteringSink):
    """Prints engine messages on the terminal: debug dimmed, warnings yellow."""

    def emit(self, msg: str, level: str) -> None:
        if level == DEBUG:
            click.secho(msg, dim=True)
        elif level == WARNING:
            click.secho(msg, fg="yellow")
        else:
            click.echo(msg)


def load_service(ctx: click.Context) -> PluginInstallerService:
    """Build the installer service for the current invocation.

    Raises:
        ConfigError: If the config file cannot be read or is invalid
    """
    debug = ctx.obj.get("debug", False)
    setup_logging(debug)

    config_path = Path(ctx.obj.get("config_path") or get_config_path())
    if not config_path.exists():
        click.echo(
            format_suggestion(
                f"Config file not found: {config_path}",
                f"pass --config or set ${CONFIG_ENV_VAR}",
            ),
            err=True,
        )
        sys.exit(1)
    config = load_config(config_path)

    levels = config.enabled_levels
    if debug:
        levels.add(DEBUG)
    return build_service(config, messages=EchoMessageSink(levels))


def fail(error: Exception) -> None:
    click.echo(format_error(str(error)), err=True)
    sys.exit(1)


HANDLED_ERRORS = (ConfigError, PluginInstallerError)
