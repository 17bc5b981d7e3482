"""CLI interface for fieldrules using Typer framework."""

import inspect
import json as jsonlib
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fieldrules import __description__, __version__
from fieldrules.config import configure_logging, load_config
from fieldrules.errors import ConfigurationError
from fieldrules.rules import available_rules
from fieldrules.ruleset import load_schema
from fieldrules.validator import RECORD_FIELD, ValidationMode, ValidationReport, Validator

app = typer.Typer(
    name="fieldrules",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

VALID_FORMATS = ["table", "json", "markdown"]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"fieldrules version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """fieldrules - declarative validation rules for structured records."""


def _load_records(path: Path) -> list[Any]:
    """Load one JSON object or an array of objects."""
    with open(path, encoding="utf-8") as f:
        data = jsonlib.load(f)
    if isinstance(data, list):
        return data
    return [data]


@app.command()
def check(
    record: Annotated[
        Path,
        typer.Argument(help="JSON file holding a record object or an array of records")
    ],
    rules: Annotated[
        Path,
        typer.Option("--rules", "-r", help="Rule-set JSON file")
    ],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="collect_all, first_per_field or first_failure (default: from config)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: table)")
    ] = "table",
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .fieldrules.json)")
    ] = None,
) -> None:
    """Validate records against a rule set."""
    if format not in VALID_FORMATS:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(VALID_FORMATS)}")
        raise typer.Exit(1)

    valid_modes = [m.value for m in ValidationMode]
    if mode is not None and mode not in valid_modes:
        console.print(f"[red]Error:[/red] Invalid mode '{mode}'. Must be one of: {', '.join(valid_modes)}")
        raise typer.Exit(1)

    try:
        app_config = load_config(config)
        configure_logging(app_config)

        schema = load_schema(rules)
        validator = Validator(schema, mode=mode, config=app_config.validation)
        records = _load_records(record)
    except (FileNotFoundError, ValueError) as e:
        # ConfigurationError is a ValueError
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    reports = [validator.validate(item) for item in records]

    if format == "json":
        payload = [report.to_dict() for report in reports]
        typer.echo(jsonlib.dumps(payload[0] if len(payload) == 1 else payload, indent=2, default=str))
    elif format == "markdown":
        _output_markdown(reports)
    else:
        _output_table(reports)

    exit_code = max((report.exit_code for report in reports), default=0)
    raise typer.Exit(exit_code)


def _field_label(field_name: str) -> str:
    return "(record)" if field_name == RECORD_FIELD else field_name


def _output_markdown(reports: list[ValidationReport]) -> None:
    console.print("# Validation Report")
    for index, report in enumerate(reports):
        if len(reports) > 1:
            console.print(f"## Record {index}")
        console.print(f"**Valid:** {report.is_valid}")
        for failure in report.failures:
            console.print(f"- **{escape(_field_label(failure.field))}** ({failure.rule}): {escape(failure.message)}")
        console.print()


def _output_table(reports: list[ValidationReport]) -> None:
    for index, report in enumerate(reports):
        prefix = f"Record {index}: " if len(reports) > 1 else ""
        if report.is_valid:
            console.print(f"[green]{prefix}Valid[/green]")
            continue

        console.print(f"[red]{prefix}{len(report.failures)} failure(s)[/red]")
        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Rule", style="dim")
        table.add_column("Message", style="white")
        for failure in report.failures:
            table.add_row(escape(_field_label(failure.field)), failure.rule, escape(failure.message))
        console.print(table)


def _constructor_parameters(rule_class: type) -> list[str]:
    if rule_class.__init__ is object.__init__:
        return []
    params = []
    for param in inspect.signature(rule_class.__init__).parameters.values():
        if param.name == "self":
            continue
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            params.append(f"*{param.name}")
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            params.append(f"**{param.name}")
        else:
            params.append(param.name)
    return params


@app.command("rules")
def list_rules(
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """List the registered rule kinds."""
    rows = []
    for kind, rule_class in available_rules():
        params = _constructor_parameters(rule_class)
        summary = (inspect.getdoc(rule_class) or "").split("\n")[0]
        rows.append({"kind": kind, "parameters": params, "summary": summary})

    if format == "json":
        typer.echo(jsonlib.dumps(rows, indent=2))
        return
    if format != "table":
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: table, json")
        raise typer.Exit(1)

    table = Table(title="Rule kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Parameters", style="white")
    table.add_column("Description", style="dim")
    for row in rows:
        table.add_row(row["kind"], ", ".join(row["parameters"]) or "-", row["summary"])
    console.print(table)


@app.command()
def lint(
    rules: Annotated[
        Path,
        typer.Argument(help="Rule-set JSON file")
    ],
) -> None:
    """Check that a rule set loads and every rule can be constructed."""
    try:
        schema = load_schema(rules)
    except ConfigurationError as e:
        console.print(f"[red]Invalid rule:[/red] {e}")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rule_count = sum(len(spec.rules) for spec in schema.fields) + len(schema.record_rules)
    console.print(f"[green]OK[/green] {len(schema)} field(s), {rule_count} rule(s)")
