import click

from apidef.sdk.validator import TypeInfoModel
from apidef.server.interfaces.cli.utils import output_error, output_result
from apidef.server.service import APIService


def _capabilities(info: TypeInfoModel) -> str:
    flags = [
        label
        for label, present in (
            ("parser", info.has_parser),
            ("formatter", info.has_formatter),
            ("params", info.has_params_checker),
        )
        if present
    ]
    return ", ".join(flags) or "-"


def format_type_list(types: list[TypeInfoModel]) -> str:
    output = [f"\n{click.style('🔤 Value types', fg='cyan', bold=True)} ({len(types)})"]
    width = max((len(t.name) for t in types), default=0)
    for info in types:
        name = click.style(info.name.ljust(width), fg="yellow")
        marker = "" if info.is_builtin else click.style(" [custom]", fg="magenta")
        required = click.style(" (params required)", fg="red") if info.is_params_required else ""
        output.append(f"  {name}  {info.description}{marker}{required}")
        output.append(f"  {' ' * width}  {click.style('capabilities:', dim=True)} {_capabilities(info)}")
    return "\n".join(output)


@click.command(name="types")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def list_types(json_output: bool, debug: bool) -> None:
    """List the value types available to parameter declarations.

    \b
    Examples:
        apidef types
        apidef types --json-output
    """
    try:
        types = APIService().registry.describe()
        if json_output:
            output_result([t.model_dump(mode="json") for t in types], json_output, debug)
        else:
            click.echo(format_type_list(types))
    except Exception as e:
        output_error(e, json_output, debug)
