"""Nachträgliche Validierung gespeicherter Stundenpläne.

Prüft Form (ein Eintrag pro Slot, eine Zelle pro Tag), Zellformat und
Einhaltung der "Indisponible"-Constraints unabhängig vom Generator.
"""

from typing import Literal, Optional

from pydantic import BaseModel

from config.schema import GeneratorConfig, TimetableGridConfig
from models.constraint import Constraint
from models.timetable import Timetable, parse_cell


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "unavailable_resource"
    description: str
    entity: str          # Slot, Tag oder Ressourcenname


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=22)
        table.add_column("Entität", width=16)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class TimetableValidator:
    """Prüft einen Timetable gegen Raster und Constraints."""

    def __init__(
        self,
        grid: Optional[TimetableGridConfig] = None,
        rules: Optional[GeneratorConfig] = None,
    ) -> None:
        self.grid = grid or TimetableGridConfig()
        self.rules = rules or GeneratorConfig()

    def validate(
        self, timetable: Timetable, constraints: list[Constraint]
    ) -> ValidationReport:
        """Führt alle Prüfungen durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_shape(timetable))
        violations.extend(self._check_cell_format(timetable))
        violations.extend(self._check_unavailable(timetable, constraints))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_shape(self, timetable: Timetable) -> list[ValidationViolation]:
        """Genau ein Eintrag pro Slot in Rasterreihenfolge, eine Zelle pro Tag."""
        violations: list[ValidationViolation] = []
        slots = [e.time for e in timetable.entries]
        if slots != list(self.grid.time_slots):
            violations.append(ValidationViolation(
                severity="error",
                constraint="slot_mismatch",
                entity=timetable.date,
                description=(
                    f"Slots {slots} entsprechen nicht dem Raster "
                    f"{list(self.grid.time_slots)}."
                ),
            ))

        expected_days = set(self.grid.days)
        for entry in timetable.entries:
            days = set(entry.cells)
            missing = [d for d in self.grid.days if d not in days]
            extra = sorted(days - expected_days)
            if missing or extra:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="day_mismatch",
                    entity=entry.time,
                    description=(
                        f"Fehlende Tage: {', '.join(missing) or '–'}; "
                        f"unbekannte Tage: {', '.join(extra) or '–'}."
                    ),
                ))
        return violations

    def _check_cell_format(self, timetable: Timetable) -> list[ValidationViolation]:
        """Jede Zelle ist eine Zuweisung oder die Leerzelle (Leerzelle = Warnung)."""
        violations: list[ValidationViolation] = []
        for entry in timetable.entries:
            for day, value in entry.cells.items():
                if value == self.rules.empty_cell:
                    violations.append(ValidationViolation(
                        severity="warning",
                        constraint="unassigned_cell",
                        entity=f"{day} {entry.time}",
                        description="Keine Zuweisung möglich.",
                    ))
                    continue
                if parse_cell(value) is None:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="cell_format",
                        entity=f"{day} {entry.time}",
                        description=f"Ungültiger Zellinhalt: {value!r}.",
                    ))
        return violations

    def _check_unavailable(
        self, timetable: Timetable, constraints: list[Constraint]
    ) -> list[ValidationViolation]:
        """Keine eingeplante Ressource darf an (Tag, Slot) gesperrt sein."""
        violations: list[ValidationViolation] = []
        marker = self.rules.unavailable_type

        for slot, day, assignment in timetable.assignments():
            for name in (assignment.teacher, assignment.group, assignment.room):
                if any(c.blocks(name, day, slot, marker) for c in constraints):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="unavailable_resource",
                        entity=name,
                        description=(
                            f"{day} {slot} ist gesperrt, aber "
                            f"{assignment.subject} eingeplant."
                        ),
                    ))
        return violations
