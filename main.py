"""Emploi-du-temps-Generator — Haupt-CLI.

Verwendung:
  python main.py config init                Standard-Konfiguration anlegen
  python main.py config show                Konfiguration anzeigen
  python main.py generate --date 2024-01-01 Stundenplan generieren + speichern
  python main.py export plan.json --date D  Fertigen Stundenplan übernehmen
  python main.py list                       Alle gespeicherten Stundenpläne
  python main.py history                    Dateinamen + Datum
  python main.py show <datum|datei>         Stundenplan anzeigen
  python main.py validate <datum|datei>     Stundenplan gegen Constraints prüfen
  python main.py excel <datum|datei>        Stundenplan als Excel exportieren
  python main.py clear                      Alle Stundenpläne löschen
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_abort(ctx: click.Context):
    """Lädt die Konfiguration (oder Standardwerte) bzw. bricht bei Fehlern ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj["config_path"])
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration ungültig:[/red bold]\n{e}")
        sys.exit(1)
    _setup_logging("DEBUG" if ctx.obj["verbose"] else config.log_level)
    return mgr, config


def _service(ctx: click.Context):
    from service.timetable_service import TimetableService
    _, config = _load_config_or_abort(ctx)
    return config, TimetableService.from_config(config)


def _file_name(name: str) -> str:
    """Akzeptiert Dateinamen oder Datum."""
    from store.json_store import timetable_key
    return name if name.endswith(".json") else f"{timetable_key(name)}.json"


def _abort_on_error(status: int, payload) -> None:
    if status != 200:
        console.print(f"[red bold]Fehler ({status}):[/red bold] {payload['error']}")
        sys.exit(1)


def _print_timetable(timetable, days: list[str], teacher=None) -> None:
    from export.tui_renderer import render_timetable_rows
    title = f"Emploi du temps {timetable.date}"
    if teacher:
        title += f" – {teacher}"
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold")
    for day in days:
        table.add_column(day.capitalize())
    for row in render_timetable_rows(timetable, days, teacher=teacher):
        table.add_row(*row)
    console.print(table)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx):
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config_or_abort(ctx)

    source = "Standardwerte" if mgr.first_run_check() else str(mgr.path)
    console.print(Panel(
        f"[bold]Quelle:[/bold] {source}  |  Log-Level: {config.log_level}",
        title="Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Slot")
    for day in config.grid.days:
        table.add_column(day.capitalize())
    for slot in config.grid.time_slots:
        table.add_row(slot, *["" for _ in config.grid.days])
    console.print(table)

    table2 = Table(title="Datenablage", box=box.ROUNDED)
    table2.add_column("Sammlung")
    table2.add_column("Datei")
    for key, file_name in config.store.collection_files.items():
        table2.add_row(key, str(Path(config.store.data_dir) / file_name))
    table2.add_row("[bold]Stundenpläne[/bold]",
                   str(Path(config.store.data_dir) / config.store.timetable_dir))
    console.print(table2)

    gc = config.generator
    console.print(
        f"[bold]Generator:[/bold] Sperr-Typ '{gc.unavailable_type}' | "
        f"Ersatzfach '{gc.fallback_subject}' | Leerzelle '{gc.empty_cell}'"
    )


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
@click.pass_context
def config_init(ctx, force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj["config_path"])
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(default_app_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--date", "date_", default=None, help="Datum des Stundenplans (z.B. 2024-01-01).")
@click.option("--quiet", is_flag=True, default=False, help="Tabelle nicht ausgeben.")
@click.pass_context
def cmd_generate(ctx, date_, quiet: bool):
    """Generiert einen Stundenplan aus Lehrkräften, Gruppen, Räumen und Constraints."""
    from models.timetable import Timetable

    config, service = _service(ctx)
    status, payload = service.generate({"date": date_})
    _abort_on_error(status, payload)

    timetable = Timetable.from_record(payload)
    if not quiet:
        _print_timetable(timetable, config.grid.days)
    console.print(f"[green]✓[/green] Stundenplan gespeichert: {_file_name(timetable.date)}")


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--date", "date_", default=None, help="Datum, unter dem gespeichert wird.")
@click.pass_context
def cmd_export(ctx, datei: Path, date_):
    """Übernimmt einen fertigen Stundenplan (JSON-Liste der Einträge) unverändert."""
    try:
        with open(datei, "r", encoding="utf-8") as f:
            timetables = json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red bold]Ungültige JSON-Datei:[/red bold] {e}")
        sys.exit(1)

    _, service = _service(ctx)
    status, payload = service.export({"date": date_, "timetables": timetables})
    _abort_on_error(status, payload)
    console.print(f"[green]✓[/green] {payload['message']}")


# ─── LIST / HISTORY / SHOW ────────────────────────────────────────────────────

@click.command("list")
@click.pass_context
def cmd_list(ctx):
    """Listet alle gespeicherten Stundenpläne mit Belegung auf."""
    from export.helpers import count_assigned
    from models.timetable import Timetable

    config, service = _service(ctx)
    status, payload = service.visualisation()
    _abort_on_error(status, payload)

    if not payload:
        console.print("[dim]Keine Stundenpläne vorhanden.[/dim]")
        return

    table = Table(title="Gespeicherte Stundenpläne", box=box.ROUNDED)
    table.add_column("Datum", style="bold")
    table.add_column("Belegt")
    for record in payload:
        try:
            timetable = Timetable.from_record(record)
        except (KeyError, TypeError, AttributeError, ValueError):
            table.add_row(str(record.get("date", "?")) if isinstance(record, dict) else "?",
                          "[yellow]unlesbar[/yellow]")
            continue
        assigned, total = count_assigned(timetable, config.generator.empty_cell)
        table.add_row(timetable.date, f"{assigned}/{total}")
    console.print(table)


@click.command("history")
@click.pass_context
def cmd_history(ctx):
    """Zeigt Dateinamen und Datum aller gespeicherten Stundenpläne."""
    _, service = _service(ctx)
    status, payload = service.history()
    _abort_on_error(status, payload)

    table = Table(title="Historie", box=box.ROUNDED)
    table.add_column("Datei", style="bold")
    table.add_column("Datum")
    for item in payload:
        table.add_row(item["name"], item["date"])
    console.print(table)


def _load_timetable_or_abort(service, name: str):
    from models.timetable import Timetable
    from service.timetable_service import MSG_NOT_FOUND
    status, payload = service.get_timetable(_file_name(name))
    _abort_on_error(status, payload)
    if payload == []:
        console.print(f"[red bold]Fehler:[/red bold] {MSG_NOT_FOUND}")
        sys.exit(1)
    try:
        return Timetable.from_record(payload)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        console.print(f"[red bold]Stundenplan unlesbar:[/red bold] {e}")
        sys.exit(1)


@click.command("show")
@click.argument("name")
@click.option("--teacher", default=None, help="Nur Zellen dieser Lehrkraft anzeigen.")
@click.pass_context
def cmd_show(ctx, name: str, teacher):
    """Zeigt einen gespeicherten Stundenplan (Datum oder Dateiname)."""
    config, service = _service(ctx)
    timetable = _load_timetable_or_abort(service, name)
    _print_timetable(timetable, config.grid.days, teacher=teacher)


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("name")
@click.pass_context
def cmd_validate(ctx, name: str):
    """Prüft einen gespeicherten Stundenplan gegen Raster und Constraints."""
    from analysis.timetable_validator import TimetableValidator
    from models.constraint import Constraint
    from store.json_store import StoreError

    config, service = _service(ctx)
    timetable = _load_timetable_or_abort(service, name)
    try:
        constraints = [Constraint.model_validate(c)
                       for c in service.store.fetch_collection("constraints")]
    except (StoreError, ValueError) as e:
        console.print(f"[red bold]Constraints nicht lesbar:[/red bold] {e}")
        sys.exit(1)

    report = TimetableValidator(config.grid, config.generator).validate(timetable, constraints)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── EXCEL ────────────────────────────────────────────────────────────────────

@click.command("excel")
@click.argument("name")
@click.option("--output", "-o", default=None,
              help="Ausgabepfad (Standard: output/<datei>.xlsx).")
@click.pass_context
def cmd_excel(ctx, name: str, output):
    """Exportiert einen gespeicherten Stundenplan als Excel-Datei."""
    from export.excel_export import TimetableExcelExporter

    config, service = _service(ctx)
    timetable = _load_timetable_or_abort(service, name)
    out_path = Path(output) if output else Path("output") / f"{Path(_file_name(name)).stem}.xlsx"
    TimetableExcelExporter(timetable, config.grid, config.generator).export(out_path)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── CLEAR ────────────────────────────────────────────────────────────────────

@click.command("clear")
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage löschen.")
@click.pass_context
def cmd_clear(ctx, yes: bool):
    """Löscht alle gespeicherten Stundenpläne."""
    if not yes and not click.confirm("Alle Stundenpläne löschen?", default=False):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return
    _, service = _service(ctx)
    status, payload = service.clear()
    _abort_on_error(status, payload)
    console.print(f"[green]✓[/green] {payload['message']}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", default=None,
              type=click.Path(path_type=Path),
              help="Pfad zur Konfiguration (Standard: config/app_config.yaml).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
@click.pass_context
def cli(ctx, config_path, verbose: bool):
    """Emploi-du-temps-Generator: Stundenpläne aus JSON-Stammdaten.

    Starten Sie mit: python main.py config init
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_export)
cli.add_command(cmd_list)
cli.add_command(cmd_history)
cli.add_command(cmd_show)
cli.add_command(cmd_validate)
cli.add_command(cmd_excel)
cli.add_command(cmd_clear)


if __name__ == "__main__":
    main()
