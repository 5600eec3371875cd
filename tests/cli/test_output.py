import pytest

from stepwise.cli._output import print_error, print_law_reports, print_parse_error, print_people, print_person
from stepwise.directory import parse_directory
from stepwise.laws import LawCheck, LawReport
from stepwise.maybe import Some
from stepwise.person import Person, PersonKind, parse_person


class TestPrintPerson:
    def test_with_manager(self, capsys: pytest.CaptureFixture[str]) -> None:
        person = Person(name="Ada", kind=PersonKind.EMPLOYEE, phone="555-000-0001", manager=Some("Charles"))
        print_person(person)
        out = capsys.readouterr().out
        assert "Parsed Ada" in out
        assert "Kind: employee" in out
        assert "Reports to: Charles" in out

    def test_without_manager(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_person(Person(name="Ada", kind=PersonKind.CUSTOMER, phone="555-000-0001"))
        assert "Reports to: -" in capsys.readouterr().out

    def test_markup_in_names_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_person(Person(name="[bold]Ada", kind=PersonKind.CUSTOMER, phone="555-000-0001"))
        assert "[bold]Ada" in capsys.readouterr().out


class TestPrintErrors:
    def test_print_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_error("something broke")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: something broke" in captured.err

    def test_parse_error_points_at_position(self, capsys: pytest.CaptureFixture[str]) -> None:
        line = '"Ada" plumber 555-000-0001'
        print_parse_error(line, parse_person(line).unwrap_err())
        err_lines = capsys.readouterr().err.splitlines()
        echoed = err_lines.index(f"  {line}")
        assert err_lines[echoed + 1] == "  " + " " * line.index("plumber") + "^"


class TestPrintPeople:
    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_people(parse_directory("").unwrap())
        assert "No people in the directory." in capsys.readouterr().out

    def test_table(self, capsys: pytest.CaptureFixture[str], directory_text: str) -> None:
        print_people(parse_directory(directory_text).unwrap())
        out = capsys.readouterr().out
        assert "Directory (4 people)" in out
        assert "John von Neumann" in out


class TestPrintLawReports:
    def test_failed_check_shows_detail(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = LawReport(
            step_type="Demo",
            checks=(LawCheck(law="left identity", passed=False, detail="a=1: 2 != 3"),),
        )
        print_law_reports([report])
        out = capsys.readouterr().out
        assert "FAILED" in out
        assert "a=1: 2 != 3" in out
