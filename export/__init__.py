"""Export-Modul: Excel (openpyxl) und Terminal-Tabellen (Rich)."""

from export.excel_export import TimetableExcelExporter

__all__ = ["TimetableExcelExporter"]
