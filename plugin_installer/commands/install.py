"""Install commands implementation."""

import click

from plugin_installer.commands.utils import HANDLED_ERRORS, fail, load_service


@click.command()
@click.argument("component_id")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Run installers even for components that are already installed",
)
@click.pass_context
def install(ctx, component_id: str, force: bool):
    """Install a component and everything it depends on."""
    try:
        service = load_service(ctx)
        if not service.is_installable(component_id):
            click.echo(f"⚪ {component_id}: no installer, nothing to do")
            return
        service.install(component_id, force=force)
    except HANDLED_ERRORS as e:
        fail(e)
    click.echo(f"✅ {component_id} installed")


@click.command(name="install-all")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Run installers even for components that are already installed",
)
@click.pass_context
def install_all(ctx, force: bool):
    """Install every known component."""
    try:
        service = load_service(ctx)
        service.install_all(force=force)
    except HANDLED_ERRORS as e:
        fail(e)
    click.echo("✅ All components installed")
