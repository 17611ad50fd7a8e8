"""Excel-Export für den Stundenplan (openpyxl)."""

from pathlib import Path
from typing import Optional

from config.schema import GeneratorConfig, TimetableGridConfig
from models.timetable import Timetable

from export.helpers import (
    COLORS, count_assigned, filter_cell_for_teacher, teacher_names, today_str,
)


class TimetableExcelExporter:
    """Exportiert einen Timetable: Gesamtplan + ein Blatt pro Lehrkraft."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 14
    COL_DAY_W  = 28

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H  = 22
    ROW_LESSON_H  = 48

    def __init__(
        self,
        timetable: Timetable,
        grid: Optional[TimetableGridConfig] = None,
        rules: Optional[GeneratorConfig] = None,
    ):
        self.timetable = timetable
        self.grid      = grid or TimetableGridConfig()
        self.rules     = rules or GeneratorConfig()
        self.days      = list(self.grid.days)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei und gibt den Pfad zurück."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_plan(wb)
        for name in teacher_names(self.timetable):
            self._sheet_lehrer(wb, name)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _setup_sheet(self, ws) -> None:
        """Setzt Spaltenbreiten für ein Tabellenblatt."""
        from openpyxl.utils import get_column_letter
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(self.days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

    def _write_header_row(self, ws, row: int) -> None:
        """Schreibt die Kopfzeile (Zeit | lundi | mardi | …)."""
        from openpyxl.styles import Font
        headers = ["Zeit"] + [d.capitalize() for d in self.days]
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Raster ───────────────────────────────────────────────────────────────

    def _write_grid(self, ws, start_row: int, teacher: Optional[str] = None) -> int:
        """Schreibt Slots × Tage; gibt die nächste freie Excel-Zeile zurück."""
        from openpyxl.styles import Font

        border = self._thin_border()
        row = start_row
        for entry in self.timetable.entries:
            c = ws.cell(row=row, column=1, value=entry.time)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            for idx, day in enumerate(self.days):
                value = entry.cells.get(day, self.rules.empty_cell)
                if teacher is not None:
                    value = filter_cell_for_teacher(value, teacher) or ""
                if value and value != self.rules.empty_cell:
                    color = COLORS["assigned"]
                else:
                    color = COLORS["free"]
                c = ws.cell(row=row, column=idx + 2, value=value)
                c.fill = self._fill(color)
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)

            ws.row_dimensions[row].height = self.ROW_LESSON_H
            row += 1
        return row

    # ─── Sheets ───────────────────────────────────────────────────────────────

    def _sheet_plan(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Emploi du temps", index=0)
        self._setup_sheet(ws)

        ws.cell(row=1, column=1,
                value=f"Emploi du temps {self.timetable.date}").font = Font(bold=True, size=14)
        assigned, total = count_assigned(self.timetable, self.rules.empty_cell)
        ws.cell(row=2, column=1, value=f"Erstellt: {today_str()}")
        ws.cell(row=2, column=3, value=f"Belegt: {assigned}/{total}")

        self._write_header_row(ws, row=4)
        self._write_grid(ws, start_row=5)

    def _sheet_lehrer(self, wb, teacher: str) -> None:
        from openpyxl.styles import Font
        # Blattnamen: max. 31 Zeichen, keine Sonderzeichen []:*?/\
        title = "".join(ch for ch in teacher if ch not in "[]:*?/\\")[:31] or "Lehrkraft"
        if title in wb.sheetnames:
            title = f"{title[:27]}_{len(wb.sheetnames)}"
        ws = wb.create_sheet(title=title)
        self._setup_sheet(ws)
        ws.cell(row=1, column=1, value=teacher).font = Font(bold=True, size=12)
        self._write_header_row(ws, row=3)
        self._write_grid(ws, start_row=4, teacher=teacher)
