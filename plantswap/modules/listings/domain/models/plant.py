# 📄 File: plantswap/modules/listings/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Describes a plant someone has put up for exchange: its name, species, where it is,
# a photo, what kind of plant it is and whether it is still up for grabs.
# 🧪 Purpose (Technical Summary):
# Domain model for the Plant listing entity with status / type enums and the mapping
# between the `plants` table row (owner column `user_id`) and the typed model.
# 🔗 Dependencies:
# pydantic, datetime, typing, enum
# 🔄 Connected Modules / Calls From:
# plant_service.py, listing_filter.py, plant_repository_impl.py, exchange_service.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlantStatus(str, Enum):
    """Listing status of a plant"""
    AVAILABLE = "available"    # Can be offered or selected in an exchange
    PENDING = "pending"        # Reserved; no transition sets it today
    EXCHANGED = "exchanged"    # Traded through a completed exchange


class PlantType(str, Enum):
    """Kind of plant shown on the listing card"""
    TREE = "tree"
    FLOWER = "flower"
    CACTUS = "cactus"
    HERB = "herb"
    SUCCULENT = "succulent"
    FERN = "fern"
    OTHER = "other"


class Plant(BaseModel):
    """
    Plant listing owned by exactly one user.

    Created by its owner and mutated only by the owner (edit / delete) or by the
    exchange negotiation, which flips the status to ``exchanged`` on completion.
    ``id`` and ``created_at`` are assigned by the backend on insert.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[str] = None
    owner_id: str
    name: str
    species: str
    subspecies: Optional[str] = None
    location: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    plant_type: PlantType = PlantType.OTHER
    status: PlantStatus = PlantStatus.AVAILABLE
    created_at: Optional[datetime] = None

    @field_validator('plant_type', mode='before')
    @classmethod
    def coerce_plant_type(cls, v):
        """Unknown or missing types are shown as 'other'."""
        if v is None:
            return PlantType.OTHER
        if isinstance(v, PlantType):
            return v
        try:
            return PlantType(str(v).lower())
        except ValueError:
            return PlantType.OTHER

    @property
    def is_available(self) -> bool:
        return self.status == PlantStatus.AVAILABLE

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Plant":
        """Build a Plant from a `plants` table row."""
        return cls(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            name=row["name"],
            species=row["species"],
            subspecies=row.get("subspecies"),
            location=row["location"],
            description=row.get("description"),
            image_url=row.get("image_url"),
            plant_type=row.get("plant_type"),
            status=row.get("status") or PlantStatus.AVAILABLE,
            created_at=row.get("created_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        """Insertable row; backend-generated columns are left out when unset."""
        row = {
            "user_id": self.owner_id,
            "name": self.name,
            "species": self.species,
            "subspecies": self.subspecies,
            "location": self.location,
            "description": self.description,
            "image_url": self.image_url,
            "plant_type": self.plant_type.value,
            "status": self.status.value,
        }
        if self.id:
            row["id"] = self.id
        return row


# Fields the owner may change through an edit
EDITABLE_FIELDS = frozenset(
    {"name", "species", "subspecies", "location", "description", "plant_type", "image_url"}
)
