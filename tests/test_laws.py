from __future__ import annotations

from stepwise.laws import ASSOCIATIVITY, LEFT_IDENTITY, RIGHT_IDENTITY, LawReport, check_laws, standard_reports
from stepwise.maybe import NOTHING, Some


class TestStandardReports:
    def test_every_step_type_is_checked(self) -> None:
        reports = standard_reports()
        assert [r.step_type for r in reports] == ["Maybe", "Result", "IO", "Parser"]

    def test_all_laws_hold(self) -> None:
        for report in standard_reports():
            assert report.passed, [c.detail for c in report.checks if not c.passed]

    def test_each_report_has_three_laws(self) -> None:
        for report in standard_reports():
            assert [c.law for c in report.checks] == [LEFT_IDENTITY, RIGHT_IDENTITY, ASSOCIATIVITY]


class _Broken:
    """A wrapper whose bind forgets to pass the value through."""

    def __init__(self, value: int) -> None:
        self.value = value

    def bind(self, fn: object) -> _Broken:
        return _Broken(0)

    def map(self, fn: object) -> _Broken:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Broken) and other.value == self.value

    def __repr__(self) -> str:
        return f"_Broken({self.value})"


class TestCheckLaws:
    def test_detects_violations(self) -> None:
        report = check_laws(
            "Broken",
            _Broken,
            lambda x: _Broken(x + 1),
            lambda x: _Broken(x * 2),
            samples=[1],
            steps=[_Broken(5)],
        )
        assert not report.passed
        by_law = {check.law: check for check in report.checks}
        assert not by_law[LEFT_IDENTITY].passed
        assert by_law[LEFT_IDENTITY].detail == "a=1: _Broken(0) != _Broken(2)"
        assert not by_law[RIGHT_IDENTITY].passed
        assert by_law[ASSOCIATIVITY].passed

    def test_passing_report(self) -> None:
        report = check_laws(
            "Maybe",
            Some,
            lambda x: Some(x + 1),
            lambda x: NOTHING if x > 3 else Some(x),
            samples=[1, 5],
            steps=[Some(2), NOTHING],
        )
        assert report == LawReport(step_type="Maybe", checks=report.checks)
        assert report.passed
        assert all(check.detail == "" for check in report.checks)
