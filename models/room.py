"""Datenmodell für einen Raum (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from models.timetable import check_resource_name


class Room(BaseModel):
    """Repräsentiert einen Raum aus ress-salle.json."""

    name: str       # "R1", "Salle 204"

    @field_validator("name")
    @classmethod
    def name_without_comma(cls, v: str) -> str:
        return check_resource_name(v)
