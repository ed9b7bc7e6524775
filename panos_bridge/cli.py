"""
Command-line interface for panos-bridge.

Builds the provider mapping from a source schema dump, reports drift between
the provider table and the schema, and previews tokens.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml

from panos_bridge import __version__
from panos_bridge.config import BridgeSettings
from panos_bridge.core.constants import ENV_LOG_LEVEL
from panos_bridge.core.errors import BridgeError, format_error_with_context
from panos_bridge.core.logging import configure_logging
from panos_bridge.enumeration import load_enumeration
from panos_bridge.provider import build_mapping, find_schema_drift
from panos_bridge.schema.source import load_source_schema
from panos_bridge.tokens import DEFAULT_TOKEN_CONFIG, make_data_source, make_resource


def _fail(error: Exception, operation: str, file_path: str | None = None) -> NoReturn:
    click.echo(format_error_with_context(error, operation, file_path), err=True)
    sys.exit(1)


def _render(data: dict[str, Any], output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=2) + "\n"


@click.group()
@click.version_option(version=__version__, prog_name="panos-bridge")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: PANOS_BRIDGE_LOG_LEVEL or WARNING)",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, json_logs: bool) -> None:
    """Map the Terraform PAN-OS provider schema onto Pulumi tokens."""
    settings = BridgeSettings.from_env()
    if log_level:
        settings.log_level = log_level
    elif not os.getenv(ENV_LOG_LEVEL):
        settings.log_level = "WARNING"
    settings.json_logs = settings.json_logs or json_logs
    configure_logging(settings.log_level, json_format=settings.json_logs)
    ctx.obj = settings


@cli.command()
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Source schema document (terraform providers schema -json)",
)
@click.option("--provider", default=None, help="Provider address in the schema dump")
@click.option(
    "--table",
    "table_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Provider table to use instead of the bundled one",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Write the mapping to this file")
@click.option(
    "--lenient",
    is_flag=True,
    help="Skip table entries missing from the schema instead of failing",
)
@click.pass_obj
def build(
    settings: BridgeSettings,
    schema_path: str,
    provider: str | None,
    table_path: str | None,
    output_format: str,
    output: str | None,
    lenient: bool,
) -> None:
    """Build the provider mapping and print or write it."""
    if lenient:
        settings.strict = False
    try:
        schema = load_source_schema(schema_path, provider)
        table = load_enumeration(table_path)
        mapping = build_mapping(schema, settings=settings, table=table)
    except (BridgeError, OSError, ValueError) as e:
        _fail(e, "mapping build", schema_path)

    content = _render(mapping.to_dict(), output_format)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        click.echo(f"Wrote mapping for {len(mapping.resources)} resources to {output}")
    else:
        click.echo(content, nl=False)

    for name in mapping.skipped:
        click.echo(f"Skipped (not in schema): {name}", err=True)


@cli.command()
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Source schema document (terraform providers schema -json)",
)
@click.option("--provider", default=None, help="Provider address in the schema dump")
@click.option(
    "--table",
    "table_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Provider table to use instead of the bundled one",
)
def check(schema_path: str, provider: str | None, table_path: str | None) -> None:
    """Report table entries missing from, or not mapped in, the schema."""
    try:
        schema = load_source_schema(schema_path, provider)
        drift = find_schema_drift(schema, load_enumeration(table_path))
    except (BridgeError, OSError, ValueError) as e:
        _fail(e, "schema check", schema_path)

    labels = {
        "missing_resources": "Missing resources",
        "missing_data_sources": "Missing data sources",
        "unmapped_resources": "Unmapped resources",
        "unmapped_data_sources": "Unmapped data sources",
    }
    for key, label in labels.items():
        names = drift[key]
        if names:
            click.echo(f"{label} ({len(names)}):")
            for name in names:
                click.echo(f"  - {name}")

    if drift["missing_resources"] or drift["missing_data_sources"]:
        click.echo("Provider table is out of date with the schema", err=True)
        sys.exit(1)
    click.echo("Provider table matches the schema")


@cli.command()
@click.argument("module")
@click.argument("name")
@click.option("--data-source", is_flag=True, help="Build a data source token")
def token(module: str, name: str, data_source: bool) -> None:
    """Preview the token for MODULE and type NAME."""
    factory = make_data_source if data_source else make_resource
    tok = factory(DEFAULT_TOKEN_CONFIG, module, name)
    click.echo(f"token:     {tok}")
    click.echo(f"submodule: {tok.submodule}")
    click.echo(f"qualified: {tok.qualified}")


def main() -> None:
    """Run the panos-bridge CLI."""
    cli()


if __name__ == "__main__":
    main()
