from pathlib import Path

import click

from apidef.server.definitions.api import APIInfoModel
from apidef.server.interfaces.cli.utils import output_error, output_result, prepare_service


def format_route(info: APIInfoModel) -> str:
    output = [
        f"  {click.style(info.method.upper().ljust(6), fg='green', bold=True)} "
        f"{info.path}  {click.style(info.title, dim=True)}"
    ]
    for spec in info.parameters:
        flags = []
        if spec.required:
            flags.append("required")
        if spec.has_default:
            flags.append(f"default={spec.default!r}")
        suffix = f" ({', '.join(flags)})" if flags else ""
        output.append(f"      {spec.place}.{spec.name}: {spec.type}{suffix}")
    for group in info.required_one_of:
        output.append(f"      one of: {', '.join(group)}")
    return "\n".join(output)


def format_route_list(routes: list[APIInfoModel]) -> str:
    if not routes:
        return click.style("ℹ️  No APIs defined", fg="blue")

    output = []
    current_group = None
    for info in sorted(routes, key=lambda r: r.group):
        if info.group != current_group:
            current_group = info.group
            output.append(f"\n{click.style('📁 ' + current_group, fg='cyan', bold=True)}")
        output.append(format_route(info))
    return "\n".join(output)


@click.command(name="routes")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to apidef.yml",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def list_routes(config_path: Path | None, json_output: bool, debug: bool) -> None:
    """List the routes declared in the definition file.

    The definitions are initialized first, so this also reports definition
    errors such as unknown groups or types.

    \b
    Examples:
        apidef routes
        apidef routes --config api/apidef.yml --json-output
    """
    try:
        service = prepare_service(config_path, debug=debug)
        routes = [api.info() for api in service.apis.values()]
        if json_output:
            output_result([r.model_dump(mode="json") for r in routes], json_output, debug)
        else:
            click.echo(format_route_list(routes))
    except Exception as e:
        output_error(e, json_output, debug)
