"""CLI command definitions for plugin-installer."""

import click

from plugin_installer import __version__
from plugin_installer.commands.install import install, install_all
from plugin_installer.commands.plan import plan
from plugin_installer.commands.status import status
from plugin_installer.commands.uninstall import uninstall, uninstall_all


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file (default: $PLUGIN_INSTALLER_CONFIG or ~/.config/plugin-installer/config.yaml)",
)
@click.version_option(__version__, prog_name="plugin-installer")
@click.pass_context
def cli(ctx, debug, config_path):
    """Install and uninstall plugins in dependency order."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path


# Register all commands
cli.add_command(install)
cli.add_command(install_all)
cli.add_command(uninstall)
cli.add_command(uninstall_all)
cli.add_command(status)
cli.add_command(plan)

__all__ = [
    "cli",
]


if __name__ == "__main__":
    cli()
