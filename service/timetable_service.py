"""Aufrufschnittstelle für eine dünne HTTP-Schicht.

Jede Operation nimmt ein JSON-artiges Dict (oder einfache Argumente) und gibt
(status_code, payload) zurück. Fehlermeldungen im Payload bleiben französisch,
weil das bestehende Frontend sie unverändert anzeigt.
"""

import logging
import re
from typing import Any, Optional

from config.schema import AppConfig
from solver.timetable_generator import (
    Chooser,
    InsufficientDataError,
    InvalidDateError,
    MissingDateError,
    TimetableGenerator,
)
from store.json_store import JsonStore, StoreError, timetable_key

logger = logging.getLogger(__name__)

_HISTORY_DATE = re.compile(r"timetable_(\d{4}-\d{2}-\d{2})")

MSG_DATE_REQUIRED = "Date requise"
MSG_DATE_INVALID = "Date invalide"
MSG_INSUFFICIENT = "Données insuffisantes pour générer un emploi du temps"
MSG_SERVER_ERROR = "Erreur serveur"
MSG_EXPORT_MISSING = "Données ou date manquantes"
MSG_EXPORT_OK = "Emploi du temps exporté avec succès"
MSG_CLEARED = "Dossier emploit vidé"
MSG_NOT_FOUND = "Emploi du temps non trouvé"
UNKNOWN_DATE = "Inconnu"

Response = tuple[int, Any]


def _error(status: int, message: str) -> Response:
    return status, {"error": message}


def _coerce_date(value: Any) -> Optional[str]:
    # 0, False, "" zählen wie ein fehlendes Datum
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


class TimetableService:
    """Bündelt Generierung, Export und Verwaltung gespeicherter Stundenpläne."""

    def __init__(self, store: JsonStore, generator: TimetableGenerator) -> None:
        self.store = store
        self.generator = generator

    @classmethod
    def from_config(cls, config: AppConfig, choose: Optional[Chooser] = None) -> "TimetableService":
        """Verdrahtet Ablage und Generator gemäß AppConfig."""
        store = JsonStore(config.store)
        generator = TimetableGenerator(store, config.grid, config.generator, choose)
        return cls(store, generator)

    def generate(self, payload: dict) -> Response:
        """{date} → generierter Stundenplan oder {error} mit 400/500."""
        logger.info(f"Generierungsanfrage: {payload}")
        date = _coerce_date(payload.get("date"))
        try:
            timetable = self.generator.generate_for_date(date)
        except MissingDateError:
            return _error(400, MSG_DATE_REQUIRED)
        except InvalidDateError:
            return _error(400, MSG_DATE_INVALID)
        except InsufficientDataError as e:
            logger.warning(f"Generierung abgelehnt: {e}")
            return _error(400, MSG_INSUFFICIENT)
        except StoreError as e:
            logger.error(f"Fehler bei der Generierung des Stundenplans: {e}")
            return _error(500, MSG_SERVER_ERROR)
        return 200, timetable.to_record()

    def export(self, payload: dict) -> Response:
        """Speichert einen fertigen Stundenplan unverändert unter seinem Datum."""
        logger.info("Exportanfrage erhalten")
        timetables = payload.get("timetables")
        date = _coerce_date(payload.get("date"))
        if timetables is None or not date:
            return _error(400, MSG_EXPORT_MISSING)
        if "/" in date or "\\" in date or ".." in date:
            return _error(400, MSG_DATE_INVALID)
        try:
            self.store.persist(timetable_key(date), {"date": date, "timetable": timetables})
        except StoreError as e:
            logger.error(f"Fehler beim Export: {e}")
            return _error(500, MSG_SERVER_ERROR)
        return 200, {"message": MSG_EXPORT_OK}

    def visualisation(self) -> Response:
        """Inhalte aller gespeicherten Stundenpläne."""
        try:
            return 200, self.store.list_timetables()
        except StoreError as e:
            logger.error(f"Fehler beim Lesen der Stundenpläne: {e}")
            return _error(500, MSG_SERVER_ERROR)

    def history(self) -> Response:
        """[{name, date}] für alle gespeicherten Dateien."""
        try:
            files = self.store.timetable_files()
        except StoreError as e:
            logger.error(f"Fehler beim Lesen der Historie: {e}")
            return _error(500, MSG_SERVER_ERROR)
        items = []
        for name in files:
            m = _HISTORY_DATE.search(name)
            items.append({"name": name, "date": m.group(1) if m else UNKNOWN_DATE})
        return 200, items

    def get_timetable(self, file_name: str) -> Response:
        """Eine gespeicherte Datei über ihren Namen; unbekannte Dateien ergeben []."""
        try:
            return 200, self.store.load_timetable(file_name)
        except StoreError as e:
            logger.error(f"Fehler beim Lesen von {file_name}: {e}")
            return _error(500, MSG_SERVER_ERROR)

    def clear(self) -> Response:
        """Löscht alle gespeicherten Stundenpläne."""
        try:
            self.store.delete_all()
        except StoreError as e:
            logger.error(f"Fehler beim Leeren des Stundenplan-Verzeichnisses: {e}")
            return _error(500, MSG_SERVER_ERROR)
        return 200, {"message": MSG_CLEARED}
