"""Plan command implementation."""

import click

from plugin_installer.commands.utils import HANDLED_ERRORS, fail, load_service
from plugin_installer.installer import INSTALL, UNINSTALL, render_plan


@click.command()
@click.argument("component_id")
@click.option(
    "--uninstall",
    "-u",
    "uninstall",
    is_flag=True,
    help="Show the uninstall order instead of the install order",
)
@click.option("--force", "-f", is_flag=True, help="Plan as if installing with --force")
@click.pass_context
def plan(ctx, component_id: str, uninstall: bool, force: bool):
    """Show the order in which components would be processed."""
    try:
        service = load_service(ctx)
        action = UNINSTALL if uninstall else INSTALL
        computed = service.describe_plan(component_id, action=action, force=force)
    except HANDLED_ERRORS as e:
        fail(e)
    click.echo(render_plan(computed))
