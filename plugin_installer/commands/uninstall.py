"""Uninstall commands implementation."""

import click

from plugin_installer.commands.utils import HANDLED_ERRORS, fail, load_service


@click.command()
@click.argument("component_id")
@click.pass_context
def uninstall(ctx, component_id: str):
    """Uninstall a component after everything that depends on it."""
    try:
        service = load_service(ctx)
        service.uninstall(component_id)
        installable = service.is_installable(component_id)
        dependents = len(service.plan_uninstall(component_id)) - 1
    except HANDLED_ERRORS as e:
        fail(e)

    if installable:
        click.echo(f"✅ {component_id} uninstalled")
    elif dependents:
        click.echo(
            f"⚪ {component_id}: no installer, "
            f"{dependents} dependent component(s) uninstalled"
        )
    else:
        click.echo(f"⚪ {component_id}: no installer, nothing to do")


@click.command(name="uninstall-all")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def uninstall_all(ctx, yes: bool):
    """Uninstall every known component."""
    try:
        service = load_service(ctx)
        count = len(service.list_component_ids())
        if not yes and not click.confirm(
            f"Uninstall all {count} component(s)?", default=False
        ):
            click.echo("Aborted.")
            return
        service.uninstall_all()
    except HANDLED_ERRORS as e:
        fail(e)
    click.echo("✅ All components uninstalled")
