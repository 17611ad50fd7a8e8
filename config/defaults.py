"""Feste Konstanten des Emploi-du-temps-Generators.

Tage und Zeitslots werden nicht aus den Eingabedaten abgeleitet: jeder
Stundenplan hat genau 4 Einträge (einen pro Slot) mit je 5 Tageszellen.
Die Literale ("lundi", "Indisponible", "Matière") entsprechen den
französischen Rohdaten der Schule und werden unverändert gespeichert.
"""

DAYS: tuple[str, ...] = ("lundi", "mardi", "mercredi", "jeudi", "vendredi")

TIME_SLOTS: tuple[str, ...] = (
    "08:00-10:00",
    "10:00-12:00",
    "13:00-15:00",
    "15:00-17:00",
)

# Constraint-Typ für "nicht verfügbar"
UNAVAILABLE_TYPE = "Indisponible"
FALLBACK_SUBJECT = "Matière"
EMPTY_CELL = "-"

# Sammlungen, die der Generator zwingend liest
GENERATOR_COLLECTIONS: tuple[str, ...] = ("teachers", "groups", "rooms", "constraints")

# Dateinamen wie im bestehenden Datenbestand der Schule
COLLECTION_FILES: dict[str, str] = {
    "teachers": "ress-ens.json",
    "groups": "ress-group.json",
    "rooms": "ress-salle.json",
    "constraints": "constraints.json",
}

TIMETABLE_DIR = "emploit"
TIMETABLE_PREFIX = "timetable_"


def default_app_config():
    """Standard-Konfiguration: festes Raster, Originaldateinamen, Log-Level INFO."""
    from config.schema import AppConfig
    return AppConfig()
