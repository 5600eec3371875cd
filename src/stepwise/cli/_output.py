from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stepwise.directory import Directory
from stepwise.errors import ParseError
from stepwise.laws import LawReport
from stepwise.maybe import Some
from stepwise.person import Person

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_parse_error(line: str, error: ParseError) -> None:
    print_error(error.describe())
    if error.position is not None:
        err_console.print(f"  {escape(line)}")
        err_console.print(f"  {' ' * error.position}[red]^[/red]")


def _manager_label(person: Person) -> str:
    match person.manager:
        case Some(manager):
            return manager
        case _:
            return "-"


def print_person(person: Person) -> None:
    console.print(f"[bold green]Parsed[/bold green] [bold]{escape(person.name)}[/bold]")
    console.print(f"  Kind: {person.kind.value}")
    console.print(f"  Phone: {person.phone}")
    console.print(f"  Reports to: {escape(_manager_label(person))}")


def print_people(directory: Directory) -> None:
    if len(directory) == 0:
        console.print("No people in the directory.")
        return
    table = Table(title=f"Directory ({len(directory)} people)")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Phone")
    table.add_column("Reports to")
    for person in sorted(directory, key=lambda p: p.name):
        table.add_row(escape(person.name), person.kind.value, person.phone, escape(_manager_label(person)))
    console.print(table)


def print_manager_phone(name: str, phone: str) -> None:
    console.print(f"[bold]{escape(name)}[/bold]'s manager can be reached at [bold green]{phone}[/bold green]")


def print_law_reports(reports: list[LawReport]) -> None:
    table = Table(title="Monad laws")
    table.add_column("Step type")
    table.add_column("Law")
    table.add_column("Result")
    table.add_column("Detail")
    for report in reports:
        for check in report.checks:
            status = "[green]ok[/green]" if check.passed else "[red]FAILED[/red]"
            table.add_row(report.step_type, check.law, status, escape(check.detail))
    console.print(table)
