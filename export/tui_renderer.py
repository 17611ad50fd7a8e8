"""Gemeinsamer Renderer für die Terminal-Anzeige eines Stundenplans.

Wird von cmd_show (Rich) verwendet.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.timetable import Timetable


def render_timetable_rows(
    timetable: "Timetable",
    days: list[str],
    teacher: Optional[str] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Stundenplan zurück.

    Jede Zeile: [slot, lundi, mardi, mercredi, jeudi, vendredi]
    Mit `teacher` werden nur Zellen dieser Lehrkraft gezeigt, alle anderen '—'.
    """
    from export.helpers import filter_cell_for_teacher

    rows: list[list[str]] = []
    for entry in timetable.entries:
        cells = [entry.time]
        for day in days:
            value = entry.cells.get(day, "—")
            if teacher is not None:
                value = filter_cell_for_teacher(value, teacher) or "—"
            cells.append(value)
        rows.append(cells)
    return rows
