"""Datenmodell für eine Verfügbarkeits-Constraint (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel

from config.defaults import UNAVAILABLE_TYPE


class Constraint(BaseModel):
    """Sperrt eine benannte Ressource (Lehrkraft, Gruppe, Raum) für Tag + Slot.

    Nur Constraints vom Typ "Indisponible" wirken auf den Generator;
    alle anderen Typen werden gespeichert, aber beim Filtern ignoriert.
    """

    resource: str                # Name der Lehrkraft / Gruppe / des Raums
    day: str                     # "lundi", "Lundi", ... (case-insensitiv)
    time: str                    # Slot-Bezeichner, exakter Vergleich
    type: str                    # "Indisponible" oder beliebig
    id: Optional[int] = None

    def blocks(self, resource: str, day: str, slot: str,
               unavailable_type: str = UNAVAILABLE_TYPE) -> bool:
        """True wenn diese Constraint `resource` an `day`/`slot` sperrt."""
        return (
            self.type == unavailable_type
            and self.resource == resource
            and self.day.lower() == day
            and self.time == slot
        )
