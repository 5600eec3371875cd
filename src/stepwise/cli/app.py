import sys
from pathlib import Path
from typing import Annotated

import typer

from stepwise.cli._logging import configure_logging
from stepwise.cli._output import (
    console,
    print_error,
    print_law_reports,
    print_manager_phone,
    print_parse_error,
    print_people,
    print_person,
)
from stepwise.config import ConfigError, Settings, create_config, load_settings
from stepwise.directory import Directory, load_directory
from stepwise.greeting import greet
from stepwise.laws import standard_reports
from stepwise.person import parse_person
from stepwise.result import Err, Ok

app = typer.Typer(name="stepwise", help="Stepwise: sequencing steps with bind and return")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Stepwise: sequencing steps with bind and return."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML configuration file")]
_DirectoryOpt = Annotated[
    Path | None, typer.Option("--directory", "-d", help="Directory file (defaults to directory.path from config)")
]


def _load_settings(config_path: str) -> Settings:
    try:
        return load_settings(create_config(yaml_path=config_path))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _load_directory(config_path: str, directory: Path | None) -> Directory:
    path = directory if directory is not None else _load_settings(config_path).directory_path
    match load_directory(path).run():
        case Ok(loaded):
            return loaded
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command()
def parse(line: Annotated[str, typer.Argument(help="A person record, e.g. '\"Ada\" employee 555-010-2030'")]) -> None:
    """Parse a single person record."""
    match parse_person(line):
        case Ok(person):
            print_person(person)
        case Err(e):
            print_parse_error(line, e)
            raise typer.Exit(code=1)


@app.command()
def people(directory: _DirectoryOpt = None, config: _ConfigOpt = "stepwise.yaml") -> None:
    """List everyone in a directory file."""
    print_people(_load_directory(config, directory))


@app.command()
def lookup(
    name: Annotated[str, typer.Argument(help="Person whose manager to look up")],
    directory: _DirectoryOpt = None,
    config: _ConfigOpt = "stepwise.yaml",
) -> None:
    """Find the phone number of someone's manager."""
    match _load_directory(config, directory).explain_manager_phone(name):
        case Ok(phone):
            print_manager_phone(name, phone)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command("greet")
def greet_cmd(config: _ConfigOpt = "stepwise.yaml") -> None:
    """Ask for a name on stdin and greet it."""
    settings = _load_settings(config)
    try:
        greet(settings.console, sys.stdin, sys.stdout).run()
    except EOFError:
        print_error("No input")
        raise typer.Exit(code=1) from None


@app.command()
def laws() -> None:
    """Check the monad laws for every step type."""
    reports = standard_reports()
    print_law_reports(reports)
    failed = [report.step_type for report in reports if not report.passed]
    if failed:
        print_error(f"Laws violated by: {', '.join(failed)}")
        raise typer.Exit(code=1)
    console.print("[bold green]All laws hold.[/bold green]")
