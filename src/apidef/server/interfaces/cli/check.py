import json
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl

import click

from apidef.sdk.validator import CheckedRequestModel, ValidationError
from apidef.server.interfaces.cli.utils import output_error, output_result, prepare_service


def parse_input(ctx: click.Context, param: click.Parameter, value: str | None) -> dict[str, Any] | None:
    """Parse a JSON object or a ``key=value&...`` query string."""
    if value is None:
        return None
    if value.lstrip().startswith("{"):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise click.BadParameter("expected a JSON object")
        return parsed
    return dict(parse_qsl(value, keep_blank_values=True))


def format_checked(key: str, checked: CheckedRequestModel) -> str:
    output = [f"{click.style('✅ Input is valid', fg='green', bold=True)} for {key}"]
    for place, values in checked.model_dump().items():
        if values:
            output.append(f"\n{click.style(place + ':', fg='cyan')}")
            for name, value in values.items():
                output.append(f"  {name} = {value!r}")
    return "\n".join(output)


@click.command(name="check")
@click.argument("method")
@click.argument("path")
@click.option("--query", callback=parse_input, help="Query input (JSON object or a=1&b=2)")
@click.option("--body", callback=parse_input, help="Body input (JSON object or a=1&b=2)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to apidef.yml",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def check(
    method: str,
    path: str,
    query: dict[str, Any] | None,
    body: dict[str, Any] | None,
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Validate sample input against the route serving METHOD PATH.

    Path parameters are taken from PATH itself.

    \b
    Examples:
        apidef check GET /users/42 --query "fields=name,email"
        apidef check POST /users --body '{"name": "Ada", "age": 36}' --json-output
    """
    try:
        service = prepare_service(config_path, debug=debug)
        api = service.find(method, path)
        if api is None:
            raise click.ClickException(f"No API serves {method.upper()} {path}")

        try:
            checked = service.check_request(
                api, query=query, body=body, path=api.match_path(path)
            )
        except ValidationError as e:
            if not json_output:
                click.echo(f"{click.style('❌ Input is invalid', fg='red', bold=True)} for {api.key}")
            output_error(e, json_output, debug)
            return

        if json_output:
            output_result(checked.model_dump(mode="json"), json_output, debug)
        else:
            click.echo(format_checked(api.key, checked))
    except (click.ClickException, click.Abort):
        raise
    except Exception as e:
        output_error(e, json_output, debug)
