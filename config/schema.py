from pydantic import BaseModel, Field, field_validator, model_validator

from config.defaults import (
    COLLECTION_FILES,
    DAYS,
    EMPTY_CELL,
    FALLBACK_SUBJECT,
    GENERATOR_COLLECTIONS,
    TIME_SLOTS,
    TIMETABLE_DIR,
    UNAVAILABLE_TYPE,
)


# ─── ZEITRASTER (fest, aber als Konstanten injiziert) ───

class TimetableGridConfig(BaseModel):
    """Wochentage und Zeitslots, über die der Generator iteriert.

    Reihenfolge ist signifikant: Einträge werden in Slot-Reihenfolge erzeugt,
    Zellen in Tages-Reihenfolge.
    """
    # Tagesnamen, kleingeschrieben (Constraints werden case-insensitiv verglichen)
    days: list[str] = Field(default_factory=lambda: list(DAYS),
        description="Unterrichtstage in fester Reihenfolge")
    # Slot-Bezeichner im Format "HH:MM-HH:MM" (exakter Vergleich)
    time_slots: list[str] = Field(default_factory=lambda: list(TIME_SLOTS),
        description="Zeitslots in fester Reihenfolge")

    @field_validator("days")
    @classmethod
    def normalize_days(cls, v: list[str]) -> list[str]:
        return [d.strip().lower() for d in v]

    @model_validator(mode='after')
    def validate_grid(self):
        if not self.days:
            raise ValueError("Mindestens ein Tag muss definiert sein")
        if not self.time_slots:
            raise ValueError("Mindestens ein Zeitslot muss definiert sein")
        if len(set(self.days)) != len(self.days):
            raise ValueError(f"Doppelte Tage im Raster: {self.days}")
        if len(set(self.time_slots)) != len(self.time_slots):
            raise ValueError(f"Doppelte Zeitslots im Raster: {self.time_slots}")
        if "time" in self.days:
            raise ValueError("'time' ist als Tagesname reserviert")
        return self


# ─── GENERATOR-REGELN ───

class GeneratorConfig(BaseModel):
    """Literale, die der Generator beim Filtern und Formatieren verwendet."""
    # Constraint-Typ, der eine Ressource sperrt (andere Typen werden ignoriert)
    unavailable_type: str = UNAVAILABLE_TYPE
    # Fach, wenn die Lehrkraft keine Fächer hinterlegt hat
    fallback_subject: str = FALLBACK_SUBJECT
    # Zellwert, wenn keine Zuweisung möglich ist
    empty_cell: str = EMPTY_CELL


# ─── DATENABLAGE ───

class StoreConfig(BaseModel):
    """Ablageorte der JSON-Dateien."""
    # Basisverzeichnis aller Sammlungsdateien
    data_dir: str = "."
    # Unterverzeichnis (relativ zu data_dir) für gespeicherte Stundenpläne
    timetable_dir: str = TIMETABLE_DIR
    # Sammlungsschlüssel → Dateiname
    collection_files: dict[str, str] = Field(
        default_factory=lambda: dict(COLLECTION_FILES))

    @model_validator(mode='after')
    def validate_collections(self):
        missing = [k for k in GENERATOR_COLLECTIONS if k not in self.collection_files]
        if missing:
            raise ValueError(
                f"Dateizuordnung unvollständig, es fehlen: {', '.join(missing)}")
        return self


# ─── GESAMTKONFIGURATION ───

class AppConfig(BaseModel):
    """Wurzel-Konfiguration (config/app_config.yaml)."""
    grid: TimetableGridConfig = Field(default_factory=TimetableGridConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    # Log-Level für die CLI (DEBUG, INFO, WARNING, ERROR)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return level
