"""Stundenplan-Modelle: ein Eintrag pro Zeitslot, eine Zelle pro Tag."""

import re
from typing import Optional

from pydantic import BaseModel

# "{Fach} ({Lehrkraft}, {Gruppe}, {Raum})"
CELL_PATTERN = re.compile(
    r"^(?P<subject>.*) \((?P<teacher>[^,]+), (?P<group>[^,]+), (?P<room>[^,]+)\)$"
)


def check_resource_name(name: str) -> str:
    """Lehrkraft-, Gruppen- und Raumnamen dürfen kein Komma enthalten.

    Das Komma trennt die Ressourcen innerhalb einer Zelle; ein Name mit Komma
    ließe sich aus dem gespeicherten Stundenplan nicht mehr eindeutig lesen.
    """
    if "," in name:
        raise ValueError(f"Name darf kein Komma enthalten: {name!r}")
    return name


def format_cell(subject: str, teacher: str, group: str, room: str) -> str:
    """Formatiert eine Zuweisung exakt wie im gespeicherten Stundenplan."""
    return f"{subject} ({teacher}, {group}, {room})"


class Assignment(BaseModel):
    """Zerlegte Zellbelegung."""

    subject: str
    teacher: str
    group: str
    room: str


def parse_cell(cell: str) -> Optional[Assignment]:
    """Zerlegt eine Zelle; None wenn sie nicht dem Zuweisungsformat entspricht."""
    m = CELL_PATTERN.match(cell)
    if m is None:
        return None
    return Assignment(**m.groupdict())


class TimetableEntry(BaseModel):
    """Eine Zeile des Stundenplans: ein Zeitslot mit einer Zelle pro Tag."""

    time: str
    cells: dict[str, str] = {}   # Tag → Zellwert (Zuweisung oder "-")

    def to_record(self) -> dict:
        """Flaches Dict wie in der JSON-Datei: {"time": ..., "lundi": ..., ...}."""
        return {"time": self.time, **self.cells}

    @classmethod
    def from_record(cls, record: dict) -> "TimetableEntry":
        cells = {k: v for k, v in record.items() if k != "time"}
        return cls(time=record["time"], cells=cells)


class Timetable(BaseModel):
    """Vollständiger Stundenplan, identifiziert über das Datum."""

    date: str
    entries: list[TimetableEntry]

    def cell(self, slot: str, day: str) -> Optional[str]:
        """Zellwert für (slot, day) oder None."""
        for entry in self.entries:
            if entry.time == slot:
                return entry.cells.get(day)
        return None

    def assignments(self) -> list[tuple[str, str, Assignment]]:
        """Alle belegten Zellen als (slot, day, Assignment)."""
        result = []
        for entry in self.entries:
            for day, value in entry.cells.items():
                parsed = parse_cell(value)
                if parsed is not None:
                    result.append((entry.time, day, parsed))
        return result

    def to_record(self) -> dict:
        """Speicherformat: {"date": ..., "timetable": [...]}."""
        return {
            "date": self.date,
            "timetable": [e.to_record() for e in self.entries],
        }

    @classmethod
    def from_record(cls, record: dict) -> "Timetable":
        return cls(
            date=str(record["date"]),
            entries=[TimetableEntry.from_record(r) for r in record.get("timetable", [])],
        )
