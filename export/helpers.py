"""Gemeinsame Hilfsfunktionen für Excel-Export und Terminal-Anzeige."""

from datetime import date
from typing import Optional

from models.timetable import Timetable, parse_cell

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "assigned": "B3D4FF",
    "free":     "F5F5F5",
    "blocked":  "FF9999",
    "header":   "4472C4",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def teacher_names(timetable: Timetable) -> list[str]:
    """Alle eingeplanten Lehrkräfte, sortiert."""
    return sorted({a.teacher for _, _, a in timetable.assignments()})


def filter_cell_for_teacher(value: str, teacher: str) -> Optional[str]:
    """Zellinhalt aus Sicht einer Lehrkraft: "Fach\\nGruppe\\nRaum" oder None."""
    parsed = parse_cell(value)
    if parsed is None or parsed.teacher != teacher:
        return None
    return f"{parsed.subject}\n{parsed.group}\n{parsed.room}"


def count_assigned(timetable: Timetable, empty_cell: str = "-") -> tuple[int, int]:
    """(belegte Zellen, alle Zellen)."""
    total = 0
    assigned = 0
    for entry in timetable.entries:
        for value in entry.cells.values():
            total += 1
            if value != empty_cell:
                assigned += 1
    return assigned, total
