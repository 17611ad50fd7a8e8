"""Tests für die Stundenplan-Validierung."""

import pytest

from config.defaults import DAYS, TIME_SLOTS
from models.constraint import Constraint
from models.timetable import Timetable, TimetableEntry
from analysis.timetable_validator import TimetableValidator, ValidationReport


def make_timetable(fill: str = "Math (Dupont, G1, R1)") -> Timetable:
    return Timetable(
        date="2024-01-01",
        entries=[TimetableEntry(time=s, cells={d: fill for d in DAYS}) for s in TIME_SLOTS],
    )


def constraints_for(resource: str, day: str = "lundi", time: str = "08:00-10:00"):
    return [Constraint(resource=resource, day=day, time=time, type="Indisponible")]


class TestTimetableValidator:
    def test_valid_timetable(self):
        report = TimetableValidator().validate(make_timetable(), constraints_for("Martin"))
        assert isinstance(report, ValidationReport)
        assert report.is_valid
        assert report.violations == []

    @pytest.mark.parametrize("resource", ["Dupont", "G1", "R1"])
    def test_blocked_resource_detected(self, resource):
        report = TimetableValidator().validate(make_timetable(), constraints_for(resource))
        assert not report.is_valid
        errors = [v for v in report.violations if v.constraint == "unavailable_resource"]
        assert len(errors) == 1
        assert errors[0].entity == resource

    def test_blocked_day_case_insensitive(self):
        report = TimetableValidator().validate(
            make_timetable(), constraints_for("Dupont", day="VENDREDI", time="15:00-17:00"))
        assert not report.is_valid

    def test_non_blocking_type_ignored(self):
        constraints = [Constraint(resource="Dupont", day="lundi", time="08:00-10:00", type="Souhait")]
        assert TimetableValidator().validate(make_timetable(), constraints).is_valid

    def test_empty_cells_are_warnings(self):
        report = TimetableValidator().validate(make_timetable(fill="-"), constraints_for("Dupont"))
        assert report.is_valid
        assert len(report.violations) == 20
        assert all(v.severity == "warning" for v in report.violations)

    def test_bad_cell_format(self):
        tt = make_timetable()
        tt.entries[1].cells["mardi"] = "irgendwas"
        report = TimetableValidator().validate(tt, [])
        assert not report.is_valid
        assert report.violations[0].constraint == "cell_format"
        assert report.violations[0].entity == "mardi 10:00-12:00"

    def test_missing_slot(self):
        tt = make_timetable()
        tt.entries.pop()
        report = TimetableValidator().validate(tt, [])
        assert [v.constraint for v in report.violations] == ["slot_mismatch"]

    def test_missing_and_extra_day(self):
        tt = make_timetable()
        del tt.entries[0].cells["jeudi"]
        tt.entries[0].cells["samedi"] = "-"
        report = TimetableValidator().validate(tt, [])
        shape = [v for v in report.violations if v.constraint == "day_mismatch"]
        assert len(shape) == 1
        assert "jeudi" in shape[0].description
        assert "samedi" in shape[0].description

    def test_print_rich_runs(self, capsys):
        report = TimetableValidator().validate(make_timetable(), constraints_for("Dupont"))
        report.print_rich()
        out = capsys.readouterr().out
        assert "unavailable_resource" in out

    def test_generated_timetable_is_valid(self, tmp_path):
        """Jede vom Generator geschriebene Zelle ist für den Validator lesbar."""
        from config.schema import StoreConfig
        from models.group import Group
        from models.room import Room
        from models.teacher import Teacher
        from solver.timetable_generator import TimetableGenerator
        from store.json_store import JsonStore

        constraints = constraints_for("Jean-Marc Dupont")
        gen = TimetableGenerator(JsonStore(StoreConfig(data_dir=str(tmp_path))))
        tt = gen.generate(
            "d",
            [Teacher(name="Jean-Marc Dupont", subjects="Math, Physique")],
            [Group(name="Terminale B")],
            [Room(name="Salle 204")],
            constraints,
        )
        report = TimetableValidator().validate(tt, constraints)
        assert report.is_valid
        assert [v.constraint for v in report.violations] == ["unassigned_cell"]
