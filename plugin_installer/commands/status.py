"""Status command implementation."""

import click

from plugin_installer.commands.utils import HANDLED_ERRORS, fail, load_service


@click.command()
@click.argument("component_id", required=False)
@click.option("--verbose", "-v", is_flag=True, help="Show declared dependencies")
@click.pass_context
def status(ctx, component_id: str | None, verbose: bool):
    """Show which components are installable and installed."""
    try:
        service = load_service(ctx)
        component_ids = [component_id] if component_id else service.list_component_ids()

        if not component_ids:
            click.echo("No components found.")
            return

        for cid in component_ids:
            if not service.is_installable(cid):
                click.echo(f"⚪ {cid}: no installer")
            elif service.is_installed(cid):
                click.echo(f"✅ {cid}: installed")
            else:
                click.echo(f"❌ {cid}: not installed")

            if verbose:
                dependencies = service.dependencies.dependencies_of(cid)
                click.echo(f"   Dependencies: {', '.join(dependencies) or 'none'}")
    except HANDLED_ERRORS as e:
        fail(e)
