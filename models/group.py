"""Datenmodell für eine Schülergruppe (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from models.timetable import check_resource_name


class Group(BaseModel):
    """Repräsentiert eine Gruppe/Klasse aus ress-group.json."""

    name: str       # "G1", "Terminale B"

    @field_validator("name")
    @classmethod
    def name_without_comma(cls, v: str) -> str:
        return check_resource_name(v)
