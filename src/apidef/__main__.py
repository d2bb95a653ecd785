import click

from apidef.server.interfaces.cli.check import check
from apidef.server.interfaces.cli.routes import list_routes
from apidef.server.interfaces.cli.types import list_types


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """apidef CLI"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(list_types)
cli.add_command(list_routes)
cli.add_command(check)


if __name__ == "__main__":
    cli()
