"""Dateibasierte Datenablage: Schlüssel → JSON-Dokument.

Sammlungen (teachers, groups, rooms, constraints) liegen als JSON-Arrays im
Datenverzeichnis, Stundenpläne als einzelne Dateien `timetable_{date}.json`
im Stundenplan-Verzeichnis. Es gibt weder Locking noch atomare Schreib-
vorgänge: bei parallelen Schreibzugriffen gewinnt der letzte.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from config.defaults import TIMETABLE_PREFIX
from config.schema import StoreConfig

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Lese- oder Schreibfehler der Datenablage (I/O oder ungültiges JSON)."""


def timetable_key(date: str) -> str:
    """Ablageschlüssel eines Stundenplans: timetable_{date}."""
    return f"{TIMETABLE_PREFIX}{date}"


class JsonStore:
    """Liest und schreibt JSON-Dateien gemäß StoreConfig.

    Verwendung:
        store = JsonStore(StoreConfig(data_dir="daten"))
        teachers = store.fetch_collection("teachers")
        store.persist(timetable_key("2024-01-01"), {...})
    """

    def __init__(self, config: Optional[StoreConfig] = None) -> None:
        self.config = config or StoreConfig()
        self.data_dir = Path(self.config.data_dir)
        self.timetable_dir = self.data_dir / self.config.timetable_dir

    # ─── Pfade ────────────────────────────────────────────────────────────

    def path_for(self, key: str) -> Path:
        """Dateipfad zu einem Schlüssel (Sammlung oder Stundenplan)."""
        if key in self.config.collection_files:
            return self.data_dir / self.config.collection_files[key]
        if key.startswith(TIMETABLE_PREFIX):
            return self.timetable_dir / f"{key}.json"
        raise StoreError(f"Unbekannter Schlüssel: {key!r}")

    # ─── Low-Level JSON ───────────────────────────────────────────────────

    def _read_json(self, path: Path, missing: Any) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info(f"Datei {path} nicht gefunden, leeres Ergebnis")
            return missing
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Fehler beim Lesen von {path}: {e}")
            raise StoreError(f"Lesefehler {path}: {e}") from e
        logger.info(f"Lesen erfolgreich: {path}")
        return data

    def _write_json(self, path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Fehler beim Schreiben in {path}: {e}")
            raise StoreError(f"Schreibfehler {path}: {e}") from e
        logger.info(f"Schreiben erfolgreich: {path}")

    # ─── Sammlungen ───────────────────────────────────────────────────────

    def fetch_collection(self, key: str) -> list[dict]:
        """Liest eine Sammlung; nie geschriebene Schlüssel ergeben []."""
        data = self._read_json(self.path_for(key), missing=[])
        if not isinstance(data, list):
            raise StoreError(
                f"Sammlung {key!r} ist kein JSON-Array ({type(data).__name__})")
        return data

    def persist(self, key: str, value: Any) -> None:
        """Überschreibt das komplette Dokument unter `key`."""
        self._write_json(self.path_for(key), value)

    # ─── Stundenpläne ─────────────────────────────────────────────────────

    def timetable_files(self) -> list[str]:
        """Dateinamen aller gespeicherten Stundenpläne (sortiert)."""
        if not self.timetable_dir.exists():
            return []
        try:
            return sorted(p.name for p in self.timetable_dir.iterdir()
                          if p.is_file() and p.suffix == ".json")
        except OSError as e:
            logger.error(f"Fehler beim Lesen von {self.timetable_dir}: {e}")
            raise StoreError(f"Verzeichnis nicht lesbar: {e}") from e

    def load_timetable(self, file_name: str) -> Any:
        """Lädt eine gespeicherte Stundenplan-Datei über ihren Dateinamen.

        Wie bei den Sammlungen gilt eine fehlende Datei als leer ([]).
        """
        if Path(file_name).name != file_name:
            raise StoreError(f"Ungültiger Dateiname: {file_name}")
        return self._read_json(self.timetable_dir / file_name, missing=[])

    def list_timetables(self) -> list[dict]:
        """Inhalte aller gespeicherten Stundenpläne."""
        return [self.load_timetable(name) for name in self.timetable_files()]

    def delete_all(self) -> int:
        """Löscht alle Dateien im Stundenplan-Verzeichnis; gibt die Anzahl zurück."""
        if not self.timetable_dir.exists():
            return 0
        removed = 0
        try:
            for p in self.timetable_dir.iterdir():
                if p.is_file():
                    p.unlink()
                    removed += 1
        except OSError as e:
            logger.error(f"Fehler beim Leeren von {self.timetable_dir}: {e}")
            raise StoreError(f"Löschen fehlgeschlagen: {e}") from e
        logger.info(f"{removed} Stundenplan-Datei(en) gelöscht")
        return removed
