"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from models.timetable import check_resource_name


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft aus ress-ens.json."""

    name: str                  # "Dupont"
    subjects: list[str] = []   # Erstes Fach = Hauptfach

    @field_validator("name")
    @classmethod
    def name_without_comma(cls, v: str) -> str:
        return check_resource_name(v)

    @field_validator("subjects", mode="before")
    @classmethod
    def split_subjects(cls, v):
        """Im Datenbestand als "Math, Physique" gespeichert.

        Getrennt wird nur an ", " ohne weiteres Trimmen; "Math,Physique" bleibt
        ein einziges Fach.
        """
        if not v:
            return []
        if isinstance(v, str):
            return v.split(", ")
        return v

    @property
    def primary_subject(self) -> str | None:
        """Erster Listeneintrag (auch wenn leer) oder None bei leerer Liste."""
        return self.subjects[0] if self.subjects else None
