"""Zufallsbasierter Stundenplan-Generator.

Ablauf pro Aufruf:
  - Für jeden Slot (feste Reihenfolge) ein TimetableEntry
  - Für jeden Tag (feste Reihenfolge): Lehrkräfte, Gruppen und Räume ohne
    "Indisponible"-Constraint an (Tag, Slot) filtern
  - Sind alle drei Mengen nicht leer, je ein Element unabhängig und
    gleichverteilt ziehen, sonst "-"
  - Kompletten Plan genau einmal unter timetable_{date} speichern

Das Ergebnis ist absichtlich nicht deterministisch. Für reproduzierbare
Tests wird eine eigene Auswahlfunktion injiziert (z.B. random.Random(42).choice).
"""

import logging
import random
from typing import Callable, Optional, Sequence, TypeVar

from pydantic import ValidationError

from config.defaults import UNAVAILABLE_TYPE
from config.schema import GeneratorConfig, TimetableGridConfig
from models.constraint import Constraint
from models.group import Group
from models.room import Room
from models.teacher import Teacher
from models.timetable import Timetable, TimetableEntry, format_cell
from store.json_store import JsonStore, StoreError, timetable_key

logger = logging.getLogger(__name__)

T = TypeVar("T")
Chooser = Callable[[Sequence], object]


# ─── Fehler ───────────────────────────────────────────────────────────────────

class TimetableError(Exception):
    """Basisklasse für ungültige Generierungsanfragen."""


class MissingDateError(TimetableError):
    """Kein Datum angegeben."""


class InvalidDateError(TimetableError):
    """Datum kann nicht als Dateischlüssel verwendet werden."""


class InsufficientDataError(TimetableError):
    """Mindestens eine der vier Eingabesammlungen ist leer."""


# ─── Constraint-Filter ────────────────────────────────────────────────────────

def filter_available(
    resources: Sequence[T],
    constraints: Sequence[Constraint],
    day: str,
    slot: str,
    unavailable_type: str = UNAVAILABLE_TYPE,
) -> list[T]:
    """Alle Ressourcen, die an (day, slot) durch keine Constraint gesperrt sind.

    Ressourcen werden über ihr `name`-Attribut identifiziert.
    """
    blocked = {
        r.name for r in resources
        if any(c.blocks(r.name, day, slot, unavailable_type) for c in constraints)
    }
    return [r for r in resources if r.name not in blocked]


def _parse_records(model, records: list[dict], key: str) -> list:
    try:
        return [model.model_validate(r) for r in records]
    except ValidationError as e:
        raise StoreError(f"Ungültiger Datensatz in {key!r}: {e}") from e


# ─── Generator ────────────────────────────────────────────────────────────────

class TimetableGenerator:
    """Erzeugt und speichert einen Wochenstundenplan.

    Verwendung:
        gen = TimetableGenerator(store)
        timetable = gen.generate_for_date("2024-01-01")
    """

    def __init__(
        self,
        store: JsonStore,
        grid: Optional[TimetableGridConfig] = None,
        rules: Optional[GeneratorConfig] = None,
        choose: Optional[Chooser] = None,
    ) -> None:
        self.store = store
        self.grid = grid or TimetableGridConfig()
        self.rules = rules or GeneratorConfig()
        self._choose = choose or random.choice

    # ─── Öffentliche API ──────────────────────────────────────────────────

    def generate_for_date(self, date: Optional[str]) -> Timetable:
        """Liest die vier Sammlungen aus der Ablage und generiert den Plan."""
        self._check_date(date)
        teachers = _parse_records(Teacher, self.store.fetch_collection("teachers"), "teachers")
        groups = _parse_records(Group, self.store.fetch_collection("groups"), "groups")
        rooms = _parse_records(Room, self.store.fetch_collection("rooms"), "rooms")
        constraints = _parse_records(
            Constraint, self.store.fetch_collection("constraints"), "constraints")
        return self.generate(date, teachers, groups, rooms, constraints)

    def generate(
        self,
        date: Optional[str],
        teachers: list[Teacher],
        groups: list[Group],
        rooms: list[Room],
        constraints: list[Constraint],
    ) -> Timetable:
        """Prüft die Eingaben, baut das Raster und speichert es (genau ein Schreibvorgang)."""
        self._check_date(date)
        # Auch eine leere Constraint-Liste gilt als unzureichend
        empty_inputs = [
            name for name, items in (
                ("teachers", teachers), ("groups", groups),
                ("rooms", rooms), ("constraints", constraints),
            ) if not items
        ]
        if empty_inputs:
            raise InsufficientDataError(
                f"Leere Eingabedaten: {', '.join(empty_inputs)}")

        logger.info(
            f"Generiere Stundenplan {date}: {len(teachers)} Lehrkräfte, "
            f"{len(groups)} Gruppen, {len(rooms)} Räume, {len(constraints)} Constraints"
        )
        timetable = self.build(date, teachers, groups, rooms, constraints)

        empty = sum(
            1 for e in timetable.entries for v in e.cells.values()
            if v == self.rules.empty_cell
        )
        if empty:
            logger.warning(f"{empty} Zelle(n) ohne mögliche Zuweisung")

        key = timetable_key(date)
        self.store.persist(key, timetable.to_record())
        logger.info(f"Stundenplan gespeichert unter {key}")
        return timetable

    def build(
        self,
        date: str,
        teachers: list[Teacher],
        groups: list[Group],
        rooms: list[Room],
        constraints: list[Constraint],
    ) -> Timetable:
        """Reine Rasterberechnung ohne Validierung und ohne Speichern."""
        entries: list[TimetableEntry] = []
        for slot in self.grid.time_slots:
            cells: dict[str, str] = {}
            for day in self.grid.days:
                cells[day] = self._fill_cell(day, slot, teachers, groups, rooms, constraints)
            entries.append(TimetableEntry(time=slot, cells=cells))
        return Timetable(date=date, entries=entries)

    # ─── Interna ──────────────────────────────────────────────────────────

    def _check_date(self, date: Optional[str]) -> None:
        if not date:
            raise MissingDateError("Kein Datum angegeben")
        if "/" in date or "\\" in date or ".." in date:
            raise InvalidDateError(f"Datum nicht als Dateiname verwendbar: {date!r}")

    def _fill_cell(self, day, slot, teachers, groups, rooms, constraints) -> str:
        marker = self.rules.unavailable_type
        available_teachers = filter_available(teachers, constraints, day, slot, marker)
        available_groups = filter_available(groups, constraints, day, slot, marker)
        available_rooms = filter_available(rooms, constraints, day, slot, marker)

        if not (available_teachers and available_groups and available_rooms):
            return self.rules.empty_cell

        teacher = self._choose(available_teachers)
        group = self._choose(available_groups)
        room = self._choose(available_rooms)
        subject = teacher.primary_subject
        if subject is None:
            subject = self.rules.fallback_subject
        return format_cell(subject, teacher.name, group.name, room.name)
